#!/usr/bin/env python3

"""Infrastructure layer: configuration, logging and the object file backend."""

from . import config, logging

__all__ = [
    "config",
    "logging",
]
