#!/usr/bin/env python3

"""Domain layer containing the value types and the stream decoders."""

from . import models, services

__all__ = [
    "models",
    "services",
]
