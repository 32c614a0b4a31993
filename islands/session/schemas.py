"""
Pydantic Schemas - Read-only views of a game session.

A snapshot is a plain copy of committed session state. Callers can
inspect it or dump it to JSON without ever touching the actor's values.
"""

from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core import (
    Board,
    Coordinate,
    Guesses,
    Island,
    IslandsStatus,
    IslandType,
    Rules,
    RulesState,
)
from .state import PlayerRecord, SessionData


# =============================================================================
# Shared Models
# =============================================================================

class CoordinateInfo(BaseModel):
    """A single board cell."""
    row: int
    col: int

    model_config = {"from_attributes": True}


class IslandInfo(BaseModel):
    """An island as placed, with the cells hit so far."""
    island_type: IslandType
    coordinates: list[CoordinateInfo] = Field(default_factory=list)
    hit_coordinates: list[CoordinateInfo] = Field(default_factory=list)
    forested: bool = False

    model_config = {"from_attributes": True}


class GuessesInfo(BaseModel):
    """Cells a player has guessed against the opponent."""
    hits: list[CoordinateInfo] = Field(default_factory=list)
    misses: list[CoordinateInfo] = Field(default_factory=list)


class PlayerInfo(BaseModel):
    """One seat in the game."""
    name: Optional[str] = None
    islands: list[IslandInfo] = Field(default_factory=list)
    all_islands_positioned: bool = False
    guesses: GuessesInfo = Field(default_factory=GuessesInfo)


class RulesInfo(BaseModel):
    """Rules state machine position."""
    state: RulesState
    player1: IslandsStatus
    player2: IslandsStatus

    model_config = {"from_attributes": True}


class GameSnapshot(BaseModel):
    """Full committed state of a game session."""
    name: str
    player1: PlayerInfo
    player2: PlayerInfo
    rules: RulesInfo


# =============================================================================
# Builders
# =============================================================================

def _coordinates(coordinates: frozenset[Coordinate]) -> list[CoordinateInfo]:
    return [CoordinateInfo.model_validate(c) for c in sorted(coordinates)]


def island_info(island: Island) -> IslandInfo:
    return IslandInfo(
        island_type=island.island_type,
        coordinates=_coordinates(island.coordinates),
        hit_coordinates=_coordinates(island.hit_coordinates),
        forested=island.forested(),
    )


def guesses_info(guesses: Guesses) -> GuessesInfo:
    return GuessesInfo(
        hits=_coordinates(guesses.hits),
        misses=_coordinates(guesses.misses),
    )


def board_islands(board: Board) -> list[IslandInfo]:
    return [island_info(island) for island in board.islands.values()]


def player_info(record: PlayerRecord) -> PlayerInfo:
    return PlayerInfo(
        name=record.name,
        islands=board_islands(record.board),
        all_islands_positioned=record.board.all_islands_positioned(),
        guesses=guesses_info(record.guesses),
    )


def rules_info(rules: Rules) -> RulesInfo:
    return RulesInfo.model_validate(rules)


def game_snapshot(name: str, data: SessionData) -> GameSnapshot:
    """Build a snapshot of a session's committed state."""
    return GameSnapshot(
        name=name,
        player1=player_info(data.player1),
        player2=player_info(data.player2),
        rules=rules_info(data.rules),
    )
