"""
Results - Success/failure outcomes and outcome tags used by the engine.

Engine operations never raise for validation problems. They return a
Result carrying either the new value or an error code, and the caller
decides whether to continue or short-circuit.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_COORDINATE = "invalid_coordinate"
    INVALID_ISLAND_TYPE = "invalid_island_type"
    OVERLAPPING_ISLAND = "overlapping_island"
    NOT_ALL_ISLANDS_POSITIONED = "not_all_islands_positioned"
    RULE_VIOLATION = "rule_violation"


@dataclass(frozen=True)
class Result:
    """
    Outcome of an engine operation.

    Contains:
    - Whether the operation succeeded
    - The produced value (if succeeded)
    - Error message and code (if failed)
    """
    success: bool
    value: Any | None = None
    error: str | None = None
    error_code: ErrorCode | None = None

    @classmethod
    def ok(cls, value: Any | None = None) -> Result:
        """Create a success result."""
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode) -> Result:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)


class HitOrMiss(str, Enum):
    """Outcome of a single guess against an island or board."""
    HIT = "hit"
    MISS = "miss"


class WinStatus(str, Enum):
    """Whether a guess finished off the last island on a board."""
    WIN = "win"
    NO_WIN = "no_win"
