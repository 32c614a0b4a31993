"""
Engine Core - Pure game values and the rules state machine.

Everything here is immutable and side-effect free:
1. Coordinate validates cells on the board
2. Island builds shapes and resolves hits
3. Board places islands and resolves guesses
4. Guesses records hits and misses
5. Rules decides which actions are legal
"""

from .result import Result, ErrorCode, HitOrMiss, WinStatus
from .coordinate import Coordinate, BOARD_SIZE, BOARD_RANGE
from .island import Island, IslandType, SHAPE_OFFSETS
from .board import Board, GuessReport
from .guesses import Guesses
from .action import Action, ActionType, Player
from .rules import Rules, RulesState, IslandsStatus, check

__all__ = [
    "Result",
    "ErrorCode",
    "HitOrMiss",
    "WinStatus",
    "Coordinate",
    "BOARD_SIZE",
    "BOARD_RANGE",
    "Island",
    "IslandType",
    "SHAPE_OFFSETS",
    "Board",
    "GuessReport",
    "Guesses",
    "Action",
    "ActionType",
    "Player",
    "Rules",
    "RulesState",
    "IslandsStatus",
    "check",
]
