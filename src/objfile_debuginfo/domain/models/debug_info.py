#!/usr/bin/env python3

"""Debug information models decoded from the flattened debug stream.

The stream describes methods and, for each method, the storage location of its
local variables. A location is either relative to a register (base register plus
a signed offset) or the register itself.
"""

from dataclasses import dataclass, field

REGISTER_MAX = 0xFF
OFFSET_MIN = -(2**31)
OFFSET_MAX = 2**31 - 1


@dataclass(frozen=True)
class VariableDebugInfo:
    """Storage location of one local variable."""

    name: str
    is_register_relative: bool
    register: int
    offset: int

    def __post_init__(self) -> None:
        if not 0 <= self.register <= REGISTER_MAX:
            raise ValueError(f"Register {self.register} out of range 0..{REGISTER_MAX}")
        if not OFFSET_MIN <= self.offset <= OFFSET_MAX:
            raise ValueError(f"Offset {self.offset} does not fit in a signed 32-bit field")


@dataclass(frozen=True)
class MethodDebugInfo:
    """A method and its local variables, in declaration order."""

    name: str
    variables: tuple[VariableDebugInfo, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", tuple(self.variables))


@dataclass(frozen=True)
class DebugObjectFileInfo:
    """All methods found in the debug stream of one object file."""

    methods: tuple[MethodDebugInfo, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "methods", tuple(self.methods))

    def get_method(self, name: str) -> MethodDebugInfo | None:
        """Return the first method with the given name, or None."""
        for method in self.methods:
            if method.name == name:
                return method
        return None
