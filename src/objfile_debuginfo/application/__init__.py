#!/usr/bin/env python3

"""Application layer."""

from .object_file import ObjectFile

__all__ = ["ObjectFile"]
