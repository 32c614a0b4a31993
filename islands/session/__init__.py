"""
Session Module - Runs game sessions.

A session is one game from the first player joining to game over:
- Started under a unique name
- Owned by a single actor that serializes every request
- Ends on explicit stop, idle timeout, or crash

Sessions are EPHEMERAL:
- No persistence
- Ending a session releases its name
"""

from .game import Game, GuessReply, TerminationReason
from .manager import SessionManager
from .registry import Registry, default_registry
from .schemas import GameSnapshot, PlayerInfo, IslandInfo, RulesInfo
from .state import PlayerRecord, SessionData

__all__ = [
    "Game",
    "GuessReply",
    "TerminationReason",
    "SessionManager",
    "Registry",
    "default_registry",
    "GameSnapshot",
    "PlayerInfo",
    "IslandInfo",
    "RulesInfo",
    "PlayerRecord",
    "SessionData",
]
