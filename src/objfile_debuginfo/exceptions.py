#!/usr/bin/env python3

"""Exceptions raised while opening object files and decoding their debug data."""

__all__ = [
    "DisposedHandleError",
    "LineTableContractError",
    "MalformedDebugStreamError",
    "ObjectFileError",
    "OpenError",
    "ReadError",
]


class ObjectFileError(Exception):
    """Base class for all errors raised by this package."""


class OpenError(ObjectFileError):
    """The object file could not be opened (missing file, unsupported format)."""


class ReadError(ObjectFileError):
    """An opened object file turned out to be damaged while reading its contents."""


class DisposedHandleError(ObjectFileError):
    """An operation was attempted on an object file that was already disposed."""

    def __init__(self, message: str = "Already disposed"):
        super().__init__(message)


class LineTableContractError(ObjectFileError, ValueError):
    """The backend returned a line table whose length does not match its count."""


class MalformedDebugStreamError(ObjectFileError, ValueError):
    """The debug byte stream does not follow the expected record layout.

    Attributes:
        offset: Byte offset at which the failing read started
        reason: Short description of what went wrong
    """

    def __init__(self, reason: str, offset: int):
        self.reason = reason
        self.offset = offset
        super().__init__(f"Malformed debug stream at offset {offset} (0x{offset:x}): {reason}")
