#!/usr/bin/env python3

"""Logging infrastructure for the application."""

from .logger_setup import LoggerSetup, get_logger
from .timing import ProgressTracker, log_timing

__all__ = [
    "LoggerSetup",
    "ProgressTracker",
    "get_logger",
    "log_timing",
]
