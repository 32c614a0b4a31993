"""
Island - A fixed shape placed on the board, plus the cells hit so far.

Design principles:
- Immutable: a hit returns a new Island, the old one is left alone
- Shapes are fixed offset templates applied to an upper-left anchor
- An island that would run off the board cannot be built
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .coordinate import Coordinate
from .result import ErrorCode, HitOrMiss, Result


class IslandType(str, Enum):
    """The five island shapes, in canonical order."""
    ATOLL = "atoll"
    DOT = "dot"
    L_SHAPE = "l_shape"
    S_SHAPE = "s_shape"
    SQUARE = "square"

    @classmethod
    def parse(cls, value: IslandType | str) -> IslandType | None:
        """Return the matching type, or None if the value names no shape."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# (row, col) offsets from the upper-left anchor of each shape
SHAPE_OFFSETS: dict[IslandType, tuple[tuple[int, int], ...]] = {
    IslandType.ATOLL: ((0, 0), (0, 1), (1, 1), (2, 0), (2, 1)),
    IslandType.DOT: ((0, 0),),
    IslandType.L_SHAPE: ((0, 0), (1, 0), (2, 0), (2, 1)),
    IslandType.S_SHAPE: ((0, 1), (0, 2), (1, 0), (1, 1)),
    IslandType.SQUARE: ((0, 0), (0, 1), (1, 0), (1, 1)),
}


@dataclass(frozen=True)
class Island:
    """
    An island on a player's board.

    coordinates: every cell the island occupies
    hit_coordinates: the cells the opponent has hit (subset of coordinates)
    """
    island_type: IslandType
    coordinates: frozenset[Coordinate]
    hit_coordinates: frozenset[Coordinate] = field(default_factory=frozenset)

    @classmethod
    def new(cls, island_type: IslandType | str, upper_left: Coordinate) -> Result:
        """
        Build an island of the given shape anchored at upper_left.

        Fails with INVALID_ISLAND_TYPE for an unknown shape and with
        INVALID_COORDINATE if any cell of the shape leaves the board.
        """
        shape = IslandType.parse(island_type)
        if shape is None:
            return Result.failure(
                f"Unknown island type: {island_type!r}",
                error_code=ErrorCode.INVALID_ISLAND_TYPE,
            )

        coordinates = set()
        for row_offset, col_offset in SHAPE_OFFSETS[shape]:
            result = upper_left.offset(row_offset, col_offset)
            if not result.success:
                return Result.failure(
                    f"{shape.value} at {upper_left} runs off the board",
                    error_code=ErrorCode.INVALID_COORDINATE,
                )
            coordinates.add(result.value)

        return Result.ok(cls(island_type=shape, coordinates=frozenset(coordinates)))

    @staticmethod
    def types() -> tuple[IslandType, ...]:
        """All island types a board must hold before islands can be set."""
        return tuple(IslandType)

    def guess(self, coordinate: Coordinate) -> tuple[HitOrMiss, Island | None]:
        """
        Guess a coordinate against this island.

        Returns (HIT, updated island) or (MISS, None). On a miss the
        caller keeps the island it already has.
        """
        if coordinate not in self.coordinates:
            return HitOrMiss.MISS, None
        return HitOrMiss.HIT, Island(
            island_type=self.island_type,
            coordinates=self.coordinates,
            hit_coordinates=self.hit_coordinates | {coordinate},
        )

    def forested(self) -> bool:
        """Check if every cell of the island has been hit."""
        return self.hit_coordinates == self.coordinates

    def overlaps(self, other: Island) -> bool:
        """Check if two islands share any cell."""
        return not self.coordinates.isdisjoint(other.coordinates)

    @property
    def size(self) -> int:
        return len(self.coordinates)
