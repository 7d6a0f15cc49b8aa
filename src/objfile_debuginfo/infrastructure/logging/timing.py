#!/usr/bin/env python3

"""Timing decorator and progress tracking for object file operations."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from time import time
from typing import Any, TypeVar, cast

from .logger_setup import get_logger

F = TypeVar("F", bound=Callable[..., Any])


def log_timing(func: F) -> F:
    """Decorator logging the execution time of a function at DEBUG level."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger(func.__module__)
        func_name = func.__qualname__
        start_time = time()

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.debug(f"Failed {func_name} after {time() - start_time:.3f}s: {e}")
            raise
        logger.debug(f"Completed {func_name} in {time() - start_time:.3f}s")
        return result

    return cast("F", wrapper)


class ProgressTracker:
    """
    Track and report progress while walking the DWARF data of an object file.

    Counts compilation units, subprograms and variables, and times nested
    operations.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.start_time = time()
        self.cu_count = 0
        self.method_count = 0
        self.variable_count = 0
        self.skipped_variable_count = 0
        self.operation_stack: list[tuple[str, float]] = []

    @contextmanager
    def track_operation(self, operation_name: str) -> Iterator[None]:
        """
        Track a high-level operation with timing.

        Args:
            operation_name: Name of the operation being tracked
        """
        start_time = time()
        self.operation_stack.append((operation_name, start_time))
        self.logger.debug(f"Starting operation: {operation_name}")

        try:
            yield
            elapsed = time() - start_time
            self.logger.debug(f"Completed operation: {operation_name} in {elapsed:.3f}s")
        except Exception as e:
            elapsed = time() - start_time
            self.logger.error(f"Failed operation: {operation_name} after {elapsed:.3f}s: {e}")
            raise
        finally:
            self.operation_stack.pop()

    @contextmanager
    def track_cu(self, cu: Any) -> Iterator[None]:
        """
        Track one compilation unit, logging how many methods it contributed.

        Args:
            cu: pyelftools CompileUnit being processed
        """
        self.cu_count += 1
        cu_offset = getattr(cu, "cu_offset", 0)
        initial_method_count = self.method_count
        cu_start = time()

        self.logger.debug(f"Processing CU #{self.cu_count} at 0x{cu_offset:x}")
        yield
        self.logger.debug(
            f"CU #{self.cu_count} completed in {time() - cu_start:.3f}s "
            f"({self.method_count - initial_method_count} methods)"
        )

    def count_method(self) -> None:
        self.method_count += 1

    def count_variable(self, flattened: bool = True) -> None:
        if flattened:
            self.variable_count += 1
        else:
            self.skipped_variable_count += 1

    def report_summary(self) -> None:
        """Report final processing statistics."""
        total_time = time() - self.start_time
        self.logger.info(
            f"Collected {self.method_count} methods and {self.variable_count} variables "
            f"from {self.cu_count} CUs in {total_time:.2f}s "
            f"({self.skipped_variable_count} variables without a flat location)"
        )

    def get_current_context(self) -> str:
        """Return the current operation stack as a string, or 'idle'."""
        if not self.operation_stack:
            return "idle"
        return " -> ".join(op[0] for op in self.operation_stack)
