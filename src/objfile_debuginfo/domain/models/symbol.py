#!/usr/bin/env python3

"""Symbol and section models as reported by the object file backend."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Symbol:
    """A named region of an object file.

    Identity is (name, address); the size does not take part in equality.
    """

    name: str
    address: int
    size: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"{self.name} @0x{self.address:08x} +{self.size}"


@dataclass(frozen=True)
class Section:
    """A section header of an object file."""

    name: str
    address: int
    size: int
    offset: int = 0

    def __str__(self) -> str:
        return f"'{self.name}': @0x{self.address:08x} +{self.size}"
