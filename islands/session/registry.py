"""
Registry - Maps a game name to its running actor.

At most one live game may hold a name. Registering a taken name fails
instead of replacing the game that holds it. Games remove themselves
when they terminate.
"""

from __future__ import annotations
import threading
from typing import TYPE_CHECKING

import structlog

from ..errors import AlreadyRegisteredError, GameNotFoundError

if TYPE_CHECKING:
    from .game import Game

LOGGER = structlog.get_logger(__name__)


class Registry:
    """Thread-safe name -> game lookup."""

    def __init__(self):
        self._games: dict[str, Game] = {}
        self._lock = threading.Lock()

    def register(self, name: str, game: Game) -> Game:
        """Claim name for game. Raises AlreadyRegisteredError if taken."""
        with self._lock:
            if name in self._games:
                raise AlreadyRegisteredError(name)
            self._games[name] = game
        LOGGER.debug("registry.registered", game=name)
        return game

    def unregister(self, name: str, game: Game | None = None) -> bool:
        """
        Release name.

        If game is given, the name is only released while it still
        points at that game.
        """
        with self._lock:
            current = self._games.get(name)
            if current is None or (game is not None and current is not game):
                return False
            del self._games[name]
        LOGGER.debug("registry.unregistered", game=name)
        return True

    def whereis(self, name: str) -> Game | None:
        """Get the game registered under name, or None."""
        with self._lock:
            return self._games.get(name)

    def lookup(self, name: str) -> Game:
        """Get the game registered under name. Raises GameNotFoundError."""
        game = self.whereis(name)
        if game is None:
            raise GameNotFoundError(name)
        return game

    def names(self) -> list[str]:
        with self._lock:
            return list(self._games)

    def __contains__(self, name: str) -> bool:
        return self.whereis(name) is not None


# Process-wide registry used when no registry is passed explicitly
default_registry = Registry()
