"""
Game - The session actor.

One Game owns one session. It runs on its own worker thread and reads
requests from an ordered inbox, one at a time. Each request is checked
against the rules and the board geometry, and the new session state is
committed only once every check has passed. Callers block until the
worker replies.

LIFECYCLE:
1. Game.start(name) registers the name, then starts the worker
2. Requests are served in the order they arrive
3. The worker stops when:
   - stop() is called (reason "normal")
   - no request arrives within the idle window (reason "timeout")
   - a handler raises (reason "crash")
4. On termination the name is released and queued callers are failed

Usage:
    game = Game.start("Ada")
    game.add_player("Grace")
    game.position_island("player1", "dot", 1, 1)
    result = game.guess_coordinate("player2", 1, 1)
    if result.success:
        hit_or_miss, forested, win_status = result.value
"""

from __future__ import annotations
import queue
import threading
from concurrent.futures import Future
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, NamedTuple

import structlog

from .. import config
from ..engine_core import (
    Action,
    Coordinate,
    ErrorCode,
    HitOrMiss,
    Island,
    IslandType,
    Player,
    Result,
    WinStatus,
)
from ..errors import AlreadyRegisteredError, GameCrashedError, GameNotAliveError
from .registry import Registry, default_registry
from .schemas import GameSnapshot, game_snapshot
from .state import SessionData

LOGGER = structlog.get_logger(__name__)


class TerminationReason(str, Enum):
    """Why a game actor stopped."""
    NORMAL = "normal"  # Explicit stop
    TIMEOUT = "timeout"  # Idle window expired
    CRASH = "crash"  # A handler raised


class GuessReply(NamedTuple):
    """Reply to a successful guess."""
    hit_or_miss: HitOrMiss
    forested: IslandType | None
    win_status: WinStatus


@dataclass
class _Request:
    kind: str
    args: tuple = ()
    future: Future = field(default_factory=Future)


class Game:
    """
    A running game session.

    All session state lives on the worker thread. The public methods
    only enqueue requests and wait for the reply.
    """

    def __init__(
        self,
        name: str,
        idle_timeout: float | None = None,
        registry: Registry | None = None,
    ):
        if not isinstance(name, str):
            raise TypeError(f"Game name must be a string, got {type(name).__name__}")
        if idle_timeout is None:
            idle_timeout = config.IDLE_TIMEOUT_SECONDS
        if (
            isinstance(idle_timeout, bool)
            or not isinstance(idle_timeout, (int, float))
            or idle_timeout < 0
        ):
            raise ValueError(f"Idle timeout must be a non-negative number, got {idle_timeout!r}")
        self.name = name
        self.idle_timeout = idle_timeout
        self.registry = registry if registry is not None else default_registry

        self._data = SessionData.new(name)
        self._inbox: queue.Queue[_Request] = queue.Queue()
        self._inbox_lock = threading.Lock()
        self._alive = False
        self._terminated = threading.Event()
        self._termination_reason: TerminationReason | None = None
        self._thread = threading.Thread(target=self._run, name=f"game-{name}", daemon=True)
        self._logger = LOGGER.bind(game=name)

        self._handlers: dict[str, Callable[..., Any]] = {
            "add_player": self._handle_add_player,
            "position_island": self._handle_position_island,
            "set_islands": self._handle_set_islands,
            "guess_coordinate": self._handle_guess_coordinate,
            "snapshot": self._handle_snapshot,
        }

    @classmethod
    def start(
        cls,
        name: str,
        *,
        idle_timeout: float | None = None,
        registry: Registry | None = None,
    ) -> Game:
        """
        Start a game registered under name.

        Raises AlreadyRegisteredError if a live game already holds the
        name; in that case nothing is started.
        """
        game = cls(name, idle_timeout=idle_timeout, registry=registry)
        # Alive before the name becomes visible to lookups
        with game._inbox_lock:
            game._alive = True
        try:
            game.registry.register(name, game)
        except AlreadyRegisteredError:
            with game._inbox_lock:
                game._alive = False
            raise
        game._thread.start()
        game._logger.info("game.started", idle_timeout=game.idle_timeout)
        return game

    # =========================================================================
    # Client API
    # =========================================================================

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def termination_reason(self) -> TerminationReason | None:
        return self._termination_reason

    def add_player(self, name: str) -> Result:
        """Seat the second player."""
        if not isinstance(name, str):
            raise TypeError(f"Player name must be a string, got {type(name).__name__}")
        return self._call("add_player", name)

    def position_island(
        self, player: Player | str, key: IslandType | str, row: int, col: int
    ) -> Result:
        """Place (or move) one of a player's islands with its upper-left cell at (row, col)."""
        return self._call("position_island", Player.parse(player), key, row, col)

    def set_islands(self, player: Player | str) -> Result:
        """Lock in a player's islands. The success value is the final board."""
        return self._call("set_islands", Player.parse(player))

    def guess_coordinate(self, player: Player | str, row: int, col: int) -> Result:
        """Guess a cell on the opponent's board. The success value is a GuessReply."""
        return self._call("guess_coordinate", Player.parse(player), row, col)

    def snapshot(self) -> GameSnapshot:
        """Copy of the committed session state."""
        return self._call("snapshot")

    def stop(self) -> None:
        """
        Stop the game after the requests already queued.

        The game terminates with reason "normal". Stopping a game that has
        already terminated does nothing.
        """
        request = _Request("stop")
        if not self._enqueue(request):
            return
        request.future.result()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the game terminates. Returns False on timeout."""
        return self._terminated.wait(timeout)

    def _call(self, kind: str, *args: Any) -> Any:
        request = _Request(kind, args)
        if not self._enqueue(request):
            raise GameNotAliveError(f"Game {self.name!r} is not running")
        return request.future.result()

    def _enqueue(self, request: _Request) -> bool:
        with self._inbox_lock:
            if not self._alive:
                return False
            self._inbox.put(request)
            return True

    # =========================================================================
    # Worker
    # =========================================================================

    def _run(self) -> None:
        reason: TerminationReason = TerminationReason.CRASH
        stop_request: _Request | None = None
        try:
            reason, stop_request = self._serve()
        except Exception as exc:
            self._logger.error("game.crashed", error=repr(exc))
        finally:
            self._terminate(reason)
            if stop_request is not None:
                stop_request.future.set_result(None)

    def _serve(self) -> tuple[TerminationReason, _Request | None]:
        """Handle requests in order. Returns why the game has to stop."""
        while True:
            try:
                request = self._inbox.get(timeout=self.idle_timeout)
            except queue.Empty:
                return TerminationReason.TIMEOUT, None

            if request.kind == "stop":
                return TerminationReason.NORMAL, request

            try:
                reply = self._handlers[request.kind](*request.args)
            except Exception as exc:
                self._logger.error(
                    "game.crashed", request=request.kind, error=repr(exc),
                )
                crashed = GameCrashedError(f"Game {self.name!r} crashed handling {request.kind}")
                crashed.__cause__ = exc
                request.future.set_exception(crashed)
                return TerminationReason.CRASH, None
            request.future.set_result(reply)

    def _terminate(self, reason: TerminationReason) -> None:
        with self._inbox_lock:
            self._alive = False
            self._termination_reason = reason
        self.registry.unregister(self.name, self)

        # Nothing can be enqueued any more; fail whoever is still waiting
        while True:
            try:
                pending = self._inbox.get_nowait()
            except queue.Empty:
                break
            if pending.kind == "stop":
                pending.future.set_result(None)
            else:
                pending.future.set_exception(
                    GameNotAliveError(f"Game {self.name!r} stopped before handling {pending.kind}")
                )

        self._terminated.set()
        self._logger.info("game.stopped", reason=reason.value)

    def _reject(self, request: str, result: Result) -> Result:
        self._logger.info(
            "game.request_rejected",
            request=request,
            error_code=result.error_code.value,
            error=result.error,
        )
        return result

    # =========================================================================
    # Handlers (worker thread only)
    # =========================================================================

    def _handle_add_player(self, name: str) -> Result:
        data = self._data
        rules = data.rules.check(Action.add_player())
        if not rules.success:
            return self._reject("add_player", rules)

        self._data = data.with_player(
            Player.PLAYER2, replace(data.player2, name=name)
        ).with_rules(rules.value)
        self._logger.info("game.player_added", player2=name)
        return Result.ok()

    def _handle_position_island(
        self, player: Player, key: IslandType | str, row: int, col: int
    ) -> Result:
        data = self._data
        rules = data.rules.check(Action.position_islands(player))
        if not rules.success:
            return self._reject("position_island", rules)

        coordinate = Coordinate.new(row, col)
        if not coordinate.success:
            return self._reject("position_island", coordinate)

        island = Island.new(key, coordinate.value)
        if not island.success:
            return self._reject("position_island", island)

        board = data.player(player).board.position_island(
            island.value.island_type, island.value
        )
        if not board.success:
            return self._reject("position_island", board)

        self._data = data.with_board(player, board.value).with_rules(rules.value)
        return Result.ok()

    def _handle_set_islands(self, player: Player) -> Result:
        data = self._data
        board = data.player(player).board
        rules = data.rules.check(Action.set_islands(player))
        if not rules.success:
            return self._reject("set_islands", rules)

        if not board.all_islands_positioned():
            missing = [t.value for t in Island.types() if board.get(t) is None]
            return self._reject("set_islands", Result.failure(
                f"{player.value} has not positioned: {', '.join(missing)}",
                error_code=ErrorCode.NOT_ALL_ISLANDS_POSITIONED,
            ))

        self._data = data.with_rules(rules.value)
        self._logger.info("game.islands_set", player=player.value, state=rules.value.state.value)
        return Result.ok(board)

    def _handle_guess_coordinate(self, player: Player, row: int, col: int) -> Result:
        data = self._data
        opponent = player.opponent
        rules = data.rules.check(Action.guess_coordinate(player))
        if not rules.success:
            return self._reject("guess_coordinate", rules)

        coordinate = Coordinate.new(row, col)
        if not coordinate.success:
            return self._reject("guess_coordinate", coordinate)

        report = data.player(opponent).board.guess(coordinate.value)
        rules = rules.value.check(Action.win_check(report.win_status))
        if not rules.success:
            return self._reject("guess_coordinate", rules)

        guesser = data.player(player)
        self._data = (
            data.with_board(opponent, report.board)
            .with_player(player, replace(
                guesser, guesses=guesser.guesses.add(report.hit_or_miss, coordinate.value)
            ))
            .with_rules(rules.value)
        )
        if report.win_status is WinStatus.WIN:
            self._logger.info("game.won", winner=player.value)
        return Result.ok(GuessReply(report.hit_or_miss, report.forested, report.win_status))

    def _handle_snapshot(self) -> GameSnapshot:
        return game_snapshot(self.name, self._data)

    def __repr__(self) -> str:
        if self._alive:
            status = "alive"
        elif self._termination_reason is None:
            status = "not started"
        else:
            status = f"terminated:{self._termination_reason.value}"
        return f"<Game {self.name!r} {status}>"
