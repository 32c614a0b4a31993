"""
Coordinate - A validated (row, col) point on the board.

Rows and columns are 1-based and run from 1 to 10. A Coordinate can
never hold an out-of-range value: direct construction raises, and
Coordinate.new() reports the problem as a failed Result.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..errors import InvalidCoordinateError
from .result import ErrorCode, Result

BOARD_SIZE = 10
BOARD_RANGE = range(1, BOARD_SIZE + 1)


def _in_range(value: object) -> bool:
    # bool is an int subclass, but True is not a row
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return value in BOARD_RANGE


@dataclass(frozen=True, order=True)
class Coordinate:
    """A single cell on the board."""
    row: int
    col: int

    def __post_init__(self):
        if not (_in_range(self.row) and _in_range(self.col)):
            raise InvalidCoordinateError(
                f"Coordinate ({self.row!r}, {self.col!r}) is off the board"
            )

    @classmethod
    def new(cls, row: int, col: int) -> Result:
        """Build a coordinate, returning a failed Result when off the board."""
        if not (_in_range(row) and _in_range(col)):
            return Result.failure(
                f"Coordinate ({row!r}, {col!r}) is off the board",
                error_code=ErrorCode.INVALID_COORDINATE,
            )
        return Result.ok(cls(row=row, col=col))

    def offset(self, row_offset: int, col_offset: int) -> Result:
        """Return the coordinate shifted by the given offsets."""
        return Coordinate.new(self.row + row_offset, self.col + col_offset)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"
