"""
Session Manager - Starts and stops game sessions.

LIFECYCLE:
1. start_game(name) starts a game actor under a unique name
2. Callers find the game by name and talk to it directly
3. The game ends when it is stopped, goes idle, or crashes
4. An ended game releases its name; the name can be reused

PERSISTENCE RULES:
- Games are in-memory only
- Nothing survives a game's termination
"""

from __future__ import annotations

import structlog

from .. import config
from .game import Game
from .registry import Registry, default_registry

LOGGER = structlog.get_logger(__name__)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Start games under unique names
    - Look up running games
    - Stop games on request

    Name uniqueness is enforced by the registry, so two managers sharing
    a registry can never run the same name twice.
    """

    def __init__(self, registry: Registry | None = None, idle_timeout: float | None = None):
        config.configure_logging()
        self.registry = registry if registry is not None else default_registry
        self.idle_timeout = idle_timeout

    def start_game(self, name: str, idle_timeout: float | None = None) -> Game:
        """
        Start a new game with name as the first player.

        Raises AlreadyRegisteredError if a game with that name is running.
        """
        return Game.start(
            name,
            idle_timeout=self.idle_timeout if idle_timeout is None else idle_timeout,
            registry=self.registry,
        )

    def get_game(self, name: str) -> Game | None:
        """Get a running game by name."""
        return self.registry.whereis(name)

    def lookup(self, name: str) -> Game:
        """Get a running game by name. Raises GameNotFoundError."""
        return self.registry.lookup(name)

    def end_game(self, name: str) -> bool:
        """
        Stop a game and release its name.

        Returns False if no game is running under that name.
        """
        game = self.registry.whereis(name)
        if game is None:
            return False
        game.stop()
        return True

    def list_active_games(self) -> list[str]:
        """List names of running games."""
        return self.registry.names()

    def shutdown(self) -> None:
        """Stop every running game."""
        names = self.registry.names()
        for name in names:
            self.end_game(name)
        LOGGER.info("sessions.shutdown", stopped=len(names))
