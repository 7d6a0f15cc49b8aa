#!/usr/bin/env python3

"""Interface of the library that opens object files and dumps their raw data.

The backend does no decoding of its own: line tables come back as a flat
integer table and debug data as an opaque byte stream, both decoded by the
domain services.
"""

from pathlib import Path
from typing import Any, Protocol

from ...domain.models import Section, Symbol

# (flat [address, line, address, line, ...] table, number of pairs)
LineTable = tuple[list[int], int]


class ObjectFileBackend(Protocol):
    """Operations the ObjectFile facade needs from the underlying library."""

    def open_object_file(self, path: Path) -> Any:
        """Open an object file and return an opaque handle.

        Raises:
            OpenError: If the file is missing or not a supported object format
        """
        ...

    def list_symbols(self, handle: Any) -> list[Symbol]:
        ...

    def list_sections(self, handle: Any) -> list[Section]:
        ...

    def line_table_for(self, handle: Any, address: int, size: int) -> LineTable:
        """Return the line table rows covering [address, address + size)."""
        ...

    def debug_stream_for(self, handle: Any) -> bytes:
        """Return the flattened debug stream, or empty bytes without debug data."""
        ...

    def dispose_handle(self, handle: Any) -> None:
        ...
