#!/usr/bin/env python3

"""Encoder producing the debug stream layout read by DebugStreamDecoder."""

import struct

from ....infrastructure.logging import get_logger
from ...models import DebugObjectFileInfo, MethodDebugInfo, VariableDebugInfo
from .debug_stream_decoder import FLAG_REGISTER_RELATIVE

logger = get_logger(__name__)

_U32 = struct.Struct("<I")
_VARIABLE_TAIL = struct.Struct("<BBi")
_END_MARKER = _U32.pack(0)


class DebugStreamEncoder:
    """Serialize debug information into the flattened little-endian stream."""

    def encode(self, info: DebugObjectFileInfo) -> bytes:
        """Encode all methods followed by the end-of-methods marker.

        Raises:
            ValueError: If a method or variable name is empty
        """
        out = bytearray()
        for method in info.methods:
            self._write_method(out, method)
        out += _END_MARKER
        logger.debug(f"Encoded {len(info.methods)} method(s) into {len(out)} bytes")
        return bytes(out)

    def _write_method(self, out: bytearray, method: MethodDebugInfo) -> None:
        self._write_name(out, method.name, "method")
        for variable in method.variables:
            self._write_variable(out, variable)
        out += _END_MARKER

    def _write_variable(self, out: bytearray, variable: VariableDebugInfo) -> None:
        self._write_name(out, variable.name, "variable")
        flags = FLAG_REGISTER_RELATIVE if variable.is_register_relative else 0
        out += _VARIABLE_TAIL.pack(flags, variable.register, variable.offset)

    @staticmethod
    def _write_name(out: bytearray, name: str, what: str) -> None:
        raw = name.encode("utf-8")
        # A zero length prefix is the end-of-list marker
        if not raw:
            raise ValueError(f"Cannot encode {what} with an empty name")
        out += _U32.pack(len(raw))
        out += raw
