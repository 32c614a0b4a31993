"""
Rules - The state machine deciding which actions are legal.

Design principles:
- Pure function: (rules, action) -> Result holding new rules
- Explicit transition table keyed by (state, action type)
- Anything not in the table is a rule violation
- Never consults the board; geometry is someone else's job

States move forward only:

    initialized -> players_set -> player1_turn <-> player2_turn -> game_over
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from .action import Action, ActionType, Player
from .result import ErrorCode, Result, WinStatus


class RulesState(str, Enum):
    """High-level game phases."""
    INITIALIZED = "initialized"
    PLAYERS_SET = "players_set"
    PLAYER1_TURN = "player1_turn"
    PLAYER2_TURN = "player2_turn"
    GAME_OVER = "game_over"


class IslandsStatus(str, Enum):
    """Whether a player has locked in their islands."""
    ISLANDS_NOT_SET = "islands_not_set"
    ISLANDS_SET = "islands_set"


@dataclass(frozen=True)
class Rules:
    """Current phase of a game plus each player's island status."""
    state: RulesState = RulesState.INITIALIZED
    player1: IslandsStatus = IslandsStatus.ISLANDS_NOT_SET
    player2: IslandsStatus = IslandsStatus.ISLANDS_NOT_SET

    def islands_status(self, player: Player) -> IslandsStatus:
        return self.player1 if player is Player.PLAYER1 else self.player2

    def both_islands_set(self) -> bool:
        return (
            self.player1 is IslandsStatus.ISLANDS_SET
            and self.player2 is IslandsStatus.ISLANDS_SET
        )

    def check(self, action: Action) -> Result:
        """Shortcut for check(self, action)."""
        return check(self, action)


def _violation(rules: Rules, action: Action) -> Result:
    return Result.failure(
        f"{action} is not allowed in state {rules.state.value}",
        error_code=ErrorCode.RULE_VIOLATION,
    )


def _add_player(rules: Rules, action: Action) -> Result:
    return Result.ok(replace(rules, state=RulesState.PLAYERS_SET))


def _position_islands(rules: Rules, action: Action) -> Result:
    if action.player is None:
        return _violation(rules, action)
    if rules.islands_status(action.player) is IslandsStatus.ISLANDS_SET:
        return _violation(rules, action)
    return Result.ok(rules)


def _set_islands(rules: Rules, action: Action) -> Result:
    if action.player is None:
        return _violation(rules, action)
    if rules.islands_status(action.player) is IslandsStatus.ISLANDS_SET:
        return _violation(rules, action)
    rules = replace(rules, **{action.player.value: IslandsStatus.ISLANDS_SET})
    if rules.both_islands_set():
        rules = replace(rules, state=RulesState.PLAYER1_TURN)
    return Result.ok(rules)


def _player1_guess(rules: Rules, action: Action) -> Result:
    if action.player is not Player.PLAYER1:
        return _violation(rules, action)
    return Result.ok(replace(rules, state=RulesState.PLAYER2_TURN))


def _player2_guess(rules: Rules, action: Action) -> Result:
    if action.player is not Player.PLAYER2:
        return _violation(rules, action)
    return Result.ok(replace(rules, state=RulesState.PLAYER1_TURN))


def _win_check(rules: Rules, action: Action) -> Result:
    if action.win_status is WinStatus.WIN:
        return Result.ok(replace(rules, state=RulesState.GAME_OVER))
    if action.win_status is WinStatus.NO_WIN:
        return Result.ok(rules)
    return _violation(rules, action)


Handler = Callable[[Rules, Action], Result]

TRANSITIONS: dict[tuple[RulesState, ActionType], Handler] = {
    (RulesState.INITIALIZED, ActionType.ADD_PLAYER): _add_player,
    (RulesState.PLAYERS_SET, ActionType.POSITION_ISLANDS): _position_islands,
    (RulesState.PLAYERS_SET, ActionType.SET_ISLANDS): _set_islands,
    (RulesState.PLAYER1_TURN, ActionType.GUESS_COORDINATE): _player1_guess,
    (RulesState.PLAYER2_TURN, ActionType.GUESS_COORDINATE): _player2_guess,
    (RulesState.PLAYER1_TURN, ActionType.WIN_CHECK): _win_check,
    (RulesState.PLAYER2_TURN, ActionType.WIN_CHECK): _win_check,
}


def check(rules: Rules, action: Action) -> Result:
    """
    Check an action against the rules.

    Returns a Result holding the (possibly unchanged) new Rules value,
    or a RULE_VIOLATION failure if the action is not legal right now.
    """
    handler = TRANSITIONS.get((rules.state, action.action_type))
    if handler is None:
        return _violation(rules, action)
    return handler(rules, action)
