#!/usr/bin/env python3

"""Domain models for object file symbols, line tables and debug data."""

from .debug_info import DebugObjectFileInfo, MethodDebugInfo, VariableDebugInfo
from .line_info import LineInfo
from .symbol import Section, Symbol

__all__ = [
    "DebugObjectFileInfo",
    "LineInfo",
    "MethodDebugInfo",
    "Section",
    "Symbol",
    "VariableDebugInfo",
]
