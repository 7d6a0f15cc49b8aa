#!/usr/bin/env python3

"""Decoders for the raw line table and debug stream produced by the backend."""

from .debug_stream_decoder import DebugStreamDecoder
from .debug_stream_encoder import DebugStreamEncoder
from .line_table_decoder import LineTableDecoder

__all__ = [
    "DebugStreamDecoder",
    "DebugStreamEncoder",
    "LineTableDecoder",
]
