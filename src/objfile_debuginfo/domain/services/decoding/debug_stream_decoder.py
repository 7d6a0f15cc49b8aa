#!/usr/bin/env python3

"""Decoder for the flattened debug stream of an object file.

The stream is a sequence of little-endian records with no outer length or count:

    Stream   := Method* End
    Method   := StrLen Name Variable* End
    Variable := StrLen Name Flags Reg Offset
    StrLen   := u32, 0 marks the end of the enclosing list (End)
    Name     := StrLen bytes of UTF-8, not null-terminated
    Flags    := u8, bit 0 set when the location is register-relative
    Reg      := u8, register index 0..255
    Offset   := i32

Every record length is implied by its prefixes, so there is no way to
resynchronize after a bad record. Any over-read or undecodable name aborts the
whole decode.
"""

import struct

from ....exceptions import MalformedDebugStreamError
from ....infrastructure.logging import get_logger
from ...models import DebugObjectFileInfo, MethodDebugInfo, VariableDebugInfo

logger = get_logger(__name__)

_U32 = struct.Struct("<I")
_VARIABLE_TAIL = struct.Struct("<BBi")  # flags, reg, offset

FLAG_REGISTER_RELATIVE = 0x01


class _StreamReader:
    """Sequential little-endian reader over an in-memory buffer."""

    def __init__(self, data: bytes | bytearray | memoryview):
        self.data = memoryview(data)
        self.position = 0

    def has_remaining(self) -> bool:
        return self.position < len(self.data)

    def remaining(self) -> int:
        return len(self.data) - self.position

    def _take(self, size: int, what: str) -> memoryview:
        if size > self.remaining():
            raise MalformedDebugStreamError(
                f"{what} needs {size} bytes but only {self.remaining()} remain", self.position
            )
        chunk = self.data[self.position : self.position + size]
        self.position += size
        return chunk

    def read_length(self, what: str) -> int:
        value: int = _U32.unpack(self._take(_U32.size, f"{what} length prefix"))[0]
        return value

    def read_name(self, length: int, what: str) -> str:
        start = self.position
        raw = self._take(length, what)
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDebugStreamError(f"{what} is not valid UTF-8: {e.reason}", start) from e

    def read_variable_tail(self) -> tuple[int, int, int]:
        flags, reg, offset = _VARIABLE_TAIL.unpack(
            self._take(_VARIABLE_TAIL.size, "variable flags/register/offset")
        )
        return flags, reg, offset


class DebugStreamDecoder:
    """Decode the debug stream into methods and their local variables.

    By default a stream that stops where a length prefix is expected is
    treated as if the missing end markers were present, and whatever was read
    so far is returned. With ``strict`` such a stream is rejected. Over-reads
    inside a record are errors in both modes.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def decode(self, data: bytes | bytearray | memoryview) -> DebugObjectFileInfo | None:
        """Decode a complete debug stream.

        Args:
            data: Raw stream bytes as dumped by the backend

        Returns:
            Decoded methods, or None if the stream is empty

        Raises:
            MalformedDebugStreamError: If the stream is truncated or a name is not UTF-8
        """
        if len(data) == 0:
            logger.debug("Empty debug stream, no debug data in object file")
            return None

        reader = _StreamReader(data)
        methods: list[MethodDebugInfo] = []
        variable_count = 0

        try:
            while True:
                if not self._expect_more(reader, "end-of-methods marker"):
                    break
                start = reader.position
                length = reader.read_length("method name")
                if length == 0:
                    break
                name = reader.read_name(length, "method name")
                variables = self._read_variables(reader)
                variable_count += len(variables)
                methods.append(MethodDebugInfo(name, tuple(variables)))
                logger.debug(
                    f"Method '{name}' at offset {start} with {len(variables)} variable(s)"
                )
        except MalformedDebugStreamError as e:
            logger.error(f"{e} (after {len(methods)} complete method(s))")
            raise

        if reader.has_remaining():
            logger.debug(f"Ignoring {reader.remaining()} byte(s) after end-of-methods marker")

        logger.debug(f"Decoded {len(methods)} method(s), {variable_count} variable(s)")
        return DebugObjectFileInfo(tuple(methods))

    def _read_variables(self, reader: _StreamReader) -> list[VariableDebugInfo]:
        variables: list[VariableDebugInfo] = []
        while self._expect_more(reader, "end-of-variables marker"):
            length = reader.read_length("variable name")
            if length == 0:
                break
            name = reader.read_name(length, "variable name")
            flags, reg, offset = reader.read_variable_tail()
            variables.append(
                VariableDebugInfo(
                    name=name,
                    is_register_relative=bool(flags & FLAG_REGISTER_RELATIVE),
                    register=reg & 0xFF,
                    offset=offset,
                )
            )
        return variables

    def _expect_more(self, reader: _StreamReader, marker: str) -> bool:
        """Return True if another length prefix should be read."""
        if reader.has_remaining():
            return True
        if self.strict:
            raise MalformedDebugStreamError(f"stream ends before {marker}", reader.position)
        logger.warning(f"Debug stream ends without {marker}, treating end of data as marker")
        return False
