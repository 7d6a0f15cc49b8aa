#!/usr/bin/env python3

"""Line table entry model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LineInfo:
    """Maps one instruction address to a source line number."""

    address: int
    line_number: int
