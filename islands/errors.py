"""
Exceptions raised across the engine.

Validation outcomes (bad coordinate, overlapping island, illegal move)
are never raised: they come back as failed Results. Exceptions here cover
broken invariants, bad caller arguments, and actors that are gone.
"""

from __future__ import annotations


class IslandsError(Exception):
    """Base class for engine exceptions."""


class InvalidCoordinateError(IslandsError, ValueError):
    """A Coordinate was constructed outside the board."""


class GameUnavailableError(IslandsError):
    """The targeted game actor can no longer serve requests."""


class GameNotAliveError(GameUnavailableError):
    """The game actor has terminated."""


class GameCrashedError(GameUnavailableError):
    """The game actor crashed while handling this request."""


class AlreadyRegisteredError(IslandsError):
    """A live game is already registered under this name."""

    def __init__(self, name: str):
        super().__init__(f"Game already registered: {name!r}")
        self.name = name


class GameNotFoundError(IslandsError, LookupError):
    """No live game is registered under this name."""

    def __init__(self, name: str):
        super().__init__(f"Game not found: {name!r}")
        self.name = name
