"""
Guesses - The cells a player has guessed against the opponent's board.

Only hits and misses are tracked; every other cell is open water.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .coordinate import Coordinate
from .result import HitOrMiss


@dataclass(frozen=True)
class Guesses:
    """A player's hits and misses. Re-guessing a cell does not duplicate it."""
    hits: frozenset[Coordinate] = field(default_factory=frozenset)
    misses: frozenset[Coordinate] = field(default_factory=frozenset)

    def add(self, hit_or_miss: HitOrMiss, coordinate: Coordinate) -> Guesses:
        """Return new guesses with the coordinate recorded as a hit or a miss."""
        if hit_or_miss is HitOrMiss.HIT:
            return Guesses(hits=self.hits | {coordinate}, misses=self.misses)
        return Guesses(hits=self.hits, misses=self.misses | {coordinate})
