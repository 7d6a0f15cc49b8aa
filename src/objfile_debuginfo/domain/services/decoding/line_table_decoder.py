#!/usr/bin/env python3

"""Reshape a flat (address, line) integer table into LineInfo records."""

from collections.abc import Sequence

from ....exceptions import LineTableContractError
from ....infrastructure.logging import get_logger
from ...models import LineInfo

logger = get_logger(__name__)

U64_MASK = 0xFFFFFFFFFFFFFFFF
U32_MASK = 0xFFFFFFFF


class LineTableDecoder:
    """Decode the line table returned by the backend for an address range.

    Element 2i of the table is an address, element 2i+1 a line number of which
    only the low 32 bits are meaningful.
    """

    def decode(self, pairs: Sequence[int], count: int) -> list[LineInfo]:
        """Build `count` LineInfo records from the flat pair table.

        Args:
            pairs: Flat sequence of 2 * count integers
            count: Number of (address, line) pairs

        Returns:
            LineInfo records in table order

        Raises:
            LineTableContractError: If count is negative or does not match the table length
        """
        if count < 0:
            raise LineTableContractError(f"Negative line table count: {count}")
        if len(pairs) != 2 * count:
            raise LineTableContractError(
                f"Line table holds {len(pairs)} values, expected {2 * count} for {count} pairs"
            )

        result = [
            LineInfo(pairs[i * 2] & U64_MASK, pairs[i * 2 + 1] & U32_MASK) for i in range(count)
        ]
        logger.debug(f"Decoded {len(result)} line table entries")
        return result
