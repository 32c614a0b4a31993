"""
Board - A player's islands keyed by island type.

The board places islands, refuses overlaps, and resolves guesses. Every
operation returns a new Board; the original is never changed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .coordinate import Coordinate
from .island import Island, IslandType
from .result import ErrorCode, HitOrMiss, Result, WinStatus


@dataclass(frozen=True)
class GuessReport:
    """What a guess against a board produced."""
    hit_or_miss: HitOrMiss
    forested: IslandType | None
    win_status: WinStatus
    board: Board


@dataclass(frozen=True)
class Board:
    """
    A player's board.

    At most one island per type, and no two islands share a cell.
    Iteration follows the order islands were first placed.
    """
    islands: Mapping[IslandType, Island] = field(default_factory=dict)

    # Compared by value but not hashable: the islands mapping is not
    __hash__ = None

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, "islands", MappingProxyType(dict(self.islands)))

    def get(self, key: IslandType) -> Island | None:
        return self.islands.get(key)

    def position_island(self, key: IslandType, island: Island) -> Result:
        """
        Place an island under key.

        Replacing the island already stored under the same key is allowed;
        overlapping an island stored under any other key is not.
        """
        for other_key, other in self.islands.items():
            if other_key != key and other.overlaps(island):
                return Result.failure(
                    f"{key.value} overlaps {other_key.value}",
                    error_code=ErrorCode.OVERLAPPING_ISLAND,
                )
        return Result.ok(self._with_island(key, island))

    def all_islands_positioned(self) -> bool:
        """Check if every island type is on the board."""
        return all(key in self.islands for key in Island.types())

    def guess(self, coordinate: Coordinate) -> GuessReport:
        """
        Resolve a guess against every island on the board.

        The first island hit is replaced with its updated version. A miss
        leaves the board as it was and can never win.
        """
        for key, island in self.islands.items():
            hit_or_miss, updated = island.guess(coordinate)
            if hit_or_miss is HitOrMiss.HIT:
                board = self._with_island(key, updated)
                return GuessReport(
                    hit_or_miss=HitOrMiss.HIT,
                    forested=key if updated.forested() else None,
                    win_status=WinStatus.WIN if board.all_forested() else WinStatus.NO_WIN,
                    board=board,
                )

        return GuessReport(
            hit_or_miss=HitOrMiss.MISS,
            forested=None,
            win_status=WinStatus.NO_WIN,
            board=self,
        )

    def all_forested(self) -> bool:
        """Check if every island on the board is forested."""
        return all(island.forested() for island in self.islands.values())

    def forested_islands(self) -> list[IslandType]:
        """Types of the islands that have been fully hit."""
        return [key for key, island in self.islands.items() if island.forested()]

    def _with_island(self, key: IslandType, island: Island) -> Board:
        """Return new board with key set to island."""
        new_islands = dict(self.islands)
        new_islands[key] = island
        return Board(islands=new_islands)
