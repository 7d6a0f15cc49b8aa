#!/usr/bin/env python3

"""Object file backends: open files and dump their raw symbol, line and debug data."""

from .base import LineTable, ObjectFileBackend
from .elf_backend import ElfBackend, ElfHandle
from .location_parser import FlatLocation, flatten_location

__all__ = [
    "ElfBackend",
    "ElfHandle",
    "FlatLocation",
    "LineTable",
    "ObjectFileBackend",
    "flatten_location",
]
