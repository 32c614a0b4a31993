"""
Action System - The player actions the rules know how to judge.

Actions are plain values. The rules state machine takes a Rules value and
an Action and answers whether the action is legal and what comes next.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .result import WinStatus


class Player(str, Enum):
    """The two seats in a game."""
    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @property
    def opponent(self) -> Player:
        return Player.PLAYER2 if self is Player.PLAYER1 else Player.PLAYER1

    @classmethod
    def parse(cls, value: Player | str) -> Player:
        """Return the matching seat. Raises ValueError for anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown player: {value!r}") from None


class ActionType(Enum):
    """Types of actions the rules gate."""
    ADD_PLAYER = "add_player"
    POSITION_ISLANDS = "position_islands"
    SET_ISLANDS = "set_islands"
    GUESS_COORDINATE = "guess_coordinate"
    WIN_CHECK = "win_check"


@dataclass(frozen=True)
class Action:
    """
    An action to check against the rules.

    player is set for per-player actions; win_status only for WIN_CHECK.
    """
    action_type: ActionType
    player: Player | None = None
    win_status: WinStatus | None = None

    @classmethod
    def add_player(cls) -> Action:
        """Factory for the second player joining."""
        return cls(action_type=ActionType.ADD_PLAYER)

    @classmethod
    def position_islands(cls, player: Player) -> Action:
        """Factory for a player moving an island."""
        return cls(action_type=ActionType.POSITION_ISLANDS, player=player)

    @classmethod
    def set_islands(cls, player: Player) -> Action:
        """Factory for a player locking in their islands."""
        return cls(action_type=ActionType.SET_ISLANDS, player=player)

    @classmethod
    def guess_coordinate(cls, player: Player) -> Action:
        """Factory for a player guessing a cell."""
        return cls(action_type=ActionType.GUESS_COORDINATE, player=player)

    @classmethod
    def win_check(cls, win_status: WinStatus) -> Action:
        """Factory for reporting whether the last guess won."""
        return cls(action_type=ActionType.WIN_CHECK, win_status=win_status)

    def __str__(self) -> str:
        if self.player is not None:
            return f"{self.action_type.value}({self.player.value})"
        if self.win_status is not None:
            return f"{self.action_type.value}({self.win_status.value})"
        return self.action_type.value
