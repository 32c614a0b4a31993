"""
Session state - Everything one game actor owns.

The state is a tree of immutable values. Handlers build a new tree and
the actor swaps it in only once every check has passed.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace

from ..engine_core import Board, Guesses, Player, Rules


@dataclass(frozen=True)
class PlayerRecord:
    """One seat: who sits there, their board, and their guesses."""
    name: str | None = None
    board: Board = field(default_factory=Board)
    guesses: Guesses = field(default_factory=Guesses)


@dataclass(frozen=True)
class SessionData:
    """Both seats plus the rules."""
    player1: PlayerRecord
    player2: PlayerRecord
    rules: Rules = field(default_factory=Rules)

    @classmethod
    def new(cls, player1_name: str) -> SessionData:
        """Fresh session: first player named, second seat empty."""
        return cls(player1=PlayerRecord(name=player1_name), player2=PlayerRecord())

    def player(self, player: Player) -> PlayerRecord:
        return self.player1 if player is Player.PLAYER1 else self.player2

    def with_player(self, player: Player, record: PlayerRecord) -> SessionData:
        """Return new session data with one seat replaced."""
        return replace(self, **{player.value: record})

    def with_board(self, player: Player, board: Board) -> SessionData:
        return self.with_player(player, replace(self.player(player), board=board))

    def with_rules(self, rules: Rules) -> SessionData:
        return replace(self, rules=rules)
