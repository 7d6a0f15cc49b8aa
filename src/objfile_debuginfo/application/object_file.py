#!/usr/bin/env python3

"""Object file facade (Application Layer).

Wraps one opened object file handle. Raw data comes from the backend; the
domain decoders turn it into LineInfo and DebugObjectFileInfo records. The
facade owns the handle: it is released exactly once, and every operation
after that fails with DisposedHandleError.
"""

import threading
from pathlib import Path
from typing import Any

from ..domain.models import DebugObjectFileInfo, LineInfo, Section, Symbol
from ..domain.services.decoding import DebugStreamDecoder, LineTableDecoder
from ..exceptions import DisposedHandleError
from ..infrastructure.backend import ElfBackend, ObjectFileBackend
from ..infrastructure.config import get_settings
from ..infrastructure.logging import get_logger, log_timing

logger = get_logger(__name__)


class ObjectFile:
    """An opened object file.

    Use ``ObjectFile.load(path)`` to open one, preferably as a context manager
    so the handle is released on every exit path:

        with ObjectFile.load(path) as obj:
            for symbol in obj.get_symbols():
                print(symbol, obj.get_line_infos(symbol))
    """

    def __init__(
        self,
        path: Path,
        handle: Any,
        backend: ObjectFileBackend,
        strict_debug_stream: bool | None = None,
    ):
        """Wrap an already opened handle. Prefer ObjectFile.load().

        Args:
            path: Path the handle was opened from
            handle: Backend handle, owned by this object from now on
            backend: Backend that produced the handle
            strict_debug_stream: Reject debug streams missing their end markers
                (defaults to the STRICT_DEBUG_STREAM setting)
        """
        if strict_debug_stream is None:
            strict_debug_stream = get_settings()["STRICT_DEBUG_STREAM"]

        self.path = path
        self._handle: Any = handle
        self._backend = backend
        self._lock = threading.Lock()
        self._line_table_decoder = LineTableDecoder()
        self._debug_stream_decoder = DebugStreamDecoder(strict=strict_debug_stream)

    @classmethod
    def load(
        cls,
        path: Path | str,
        backend: ObjectFileBackend | None = None,
        strict_debug_stream: bool | None = None,
    ) -> "ObjectFile":
        """Open an object file.

        Args:
            path: Path to the object file
            backend: Backend to open it with (defaults to ElfBackend)
            strict_debug_stream: See __init__

        Returns:
            Opened ObjectFile

        Raises:
            OpenError: If the backend cannot open the file
        """
        path = Path(path)
        if backend is None:
            backend = ElfBackend()
        handle = backend.open_object_file(path)
        return cls(path, handle, backend, strict_debug_stream)

    def __enter__(self) -> "ObjectFile":
        return self

    def __exit__(
        self, exc_type: type | None, exc_val: Exception | None, exc_tb: object | None
    ) -> None:
        self.dispose()

    def _require_handle(self) -> Any:
        """Return the live handle. Caller must hold the lock."""
        if self._handle is None:
            raise DisposedHandleError(f"Object file already disposed: {self.path}")
        return self._handle

    @property
    def is_disposed(self) -> bool:
        return self._handle is None

    def get_symbols(self) -> list[Symbol]:
        with self._lock:
            return self._backend.list_symbols(self._require_handle())

    def get_sections(self) -> list[Section]:
        with self._lock:
            return self._backend.list_sections(self._require_handle())

    def get_line_infos(self, symbol: Symbol) -> list[LineInfo]:
        """Return the line table entries covering the symbol's address range."""
        with self._lock:
            pairs, count = self._backend.line_table_for(
                self._require_handle(), symbol.address, symbol.size
            )
        return self._line_table_decoder.decode(pairs, count)

    @log_timing
    def get_debug_info(self) -> DebugObjectFileInfo | None:
        """Read method and local variable debug information.

        Returns:
            Decoded debug information, or None if the object file has none

        Raises:
            MalformedDebugStreamError: If the backend's debug stream is corrupt
        """
        with self._lock:
            stream = self._backend.debug_stream_for(self._require_handle())
        logger.debug(f"Read {len(stream)} bytes of debug data from {self.path}")
        return self._debug_stream_decoder.decode(stream)

    def dispose(self) -> None:
        """Release the native handle. Calling it again is a no-op."""
        with self._lock:
            if self._handle is None:
                return
            handle, self._handle = self._handle, None
            self._backend.dispose_handle(handle)
        logger.debug(f"Disposed object file: {self.path}")

    def close(self) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._handle is None else "open"
        return f"ObjectFile(path={str(self.path)!r}, {state})"
