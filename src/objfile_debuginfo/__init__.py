"""objfile-debuginfo - symbols, line tables and flattened debug data from object files."""

from .application import ObjectFile
from .domain.models import (
    DebugObjectFileInfo,
    LineInfo,
    MethodDebugInfo,
    Section,
    Symbol,
    VariableDebugInfo,
)
from .domain.services.decoding import DebugStreamDecoder, DebugStreamEncoder, LineTableDecoder
from .exceptions import (
    DisposedHandleError,
    LineTableContractError,
    MalformedDebugStreamError,
    ObjectFileError,
    OpenError,
    ReadError,
)
from .infrastructure.config import Config

__version__ = "0.1.0"

__all__ = [
    "Config",
    "DebugObjectFileInfo",
    "DebugStreamDecoder",
    "DebugStreamEncoder",
    "DisposedHandleError",
    "LineInfo",
    "LineTableContractError",
    "LineTableDecoder",
    "MalformedDebugStreamError",
    "MethodDebugInfo",
    "ObjectFile",
    "ObjectFileError",
    "OpenError",
    "ReadError",
    "Section",
    "Symbol",
    "VariableDebugInfo",
]
