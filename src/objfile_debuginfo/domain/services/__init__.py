#!/usr/bin/env python3

"""Domain services."""

from . import decoding

__all__ = [
    "decoding",
]
