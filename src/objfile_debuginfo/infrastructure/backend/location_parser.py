#!/usr/bin/env python3

"""Flatten DWARF location expressions into (register-relative, register, offset).

The debug stream only describes two kinds of variable location:

- register-relative: the variable lives in memory at register + offset
  (DW_OP_bregN, DW_OP_bregx, or DW_OP_fbreg against a register frame base)
- in-register: the variable lives in the register itself
  (DW_OP_regN, DW_OP_regx), offset is 0

Anything else (multi-op expressions, DW_OP_addr, a DW_OP_call_frame_cfa frame
base, ...) has no flat form and yields None.

Example:
    [DW_OP_breg6 (-20)]                          -> (True, 6, -20)
    [DW_OP_fbreg (-20)], frame base [DW_OP_reg6] -> (True, 6, -20)
    [DW_OP_reg3]                                 -> (False, 3, 0)
"""

import re
from collections.abc import Sequence
from typing import Any, NamedTuple

from ..logging import get_logger

logger = get_logger(__name__)

_NUMBERED_REG_OP = re.compile(r"^DW_OP_(b?reg)(\d+)$")

REGISTER_MAX = 0xFF
OFFSET_MIN = -(2**31)
OFFSET_MAX = 2**31 - 1


class FlatLocation(NamedTuple):
    """Storage location of a variable as written to the debug stream."""

    is_register_relative: bool
    register: int
    offset: int


def _flatten_single_op(op: Any) -> FlatLocation | None:
    """Flatten one register-based operation, ignoring DW_OP_fbreg."""
    op_name: str = op.op_name
    args: Sequence[int] = op.args

    match = _NUMBERED_REG_OP.match(op_name)
    if match:
        kind, number = match.group(1), int(match.group(2))
        if kind == "breg":
            return FlatLocation(True, number, args[0])
        return FlatLocation(False, number, 0)

    if op_name == "DW_OP_bregx":
        return FlatLocation(True, args[0], args[1])
    if op_name == "DW_OP_regx":
        return FlatLocation(False, args[0], 0)
    return None


def _flatten_frame_base_relative(
    offset: int, frame_base: Sequence[Any] | None
) -> FlatLocation | None:
    if not frame_base or len(frame_base) != 1:
        logger.debug(f"Cannot resolve DW_OP_fbreg against frame base {frame_base}")
        return None

    base = _flatten_single_op(frame_base[0])
    if base is None:
        logger.debug(f"Frame base {frame_base[0].op_name} has no register form")
        return None

    # DW_OP_regN frame base: the register holds the frame address itself
    base_offset = base.offset if base.is_register_relative else 0
    return FlatLocation(True, base.register, base_offset + offset)


def flatten_location(
    ops: Sequence[Any], frame_base: Sequence[Any] | None = None
) -> FlatLocation | None:
    """Flatten a parsed location expression.

    Args:
        ops: Parsed expression operations (objects with ``op_name`` and ``args``,
            as returned by pyelftools' DWARFExprParser)
        frame_base: Parsed DW_AT_frame_base expression of the enclosing subprogram

    Returns:
        The flat location, or None if the expression has no flat form or does
        not fit the stream's field widths
    """
    if len(ops) != 1:
        logger.debug(f"Skipping location expression with {len(ops)} operations")
        return None

    op = ops[0]
    if op.op_name == "DW_OP_fbreg":
        location = _flatten_frame_base_relative(op.args[0], frame_base)
    else:
        location = _flatten_single_op(op)

    if location is None:
        return None

    if not 0 <= location.register <= REGISTER_MAX:
        logger.warning(f"Register {location.register} does not fit in the debug stream")
        return None
    if not OFFSET_MIN <= location.offset <= OFFSET_MAX:
        logger.warning(f"Offset {location.offset} does not fit in the debug stream")
        return None

    return location
