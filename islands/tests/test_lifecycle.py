"""
Tests for session lifecycle and ordering.

Tests:
- Explicit stop, idle timeout, crash
- Name registration and release
- Session manager
- Concurrent callers see a total order
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from ..engine_core import ErrorCode, HitOrMiss, RulesState
from ..errors import (
    AlreadyRegisteredError,
    GameCrashedError,
    GameNotAliveError,
    GameNotFoundError,
)
from ..session import Game, Registry, TerminationReason
from .conftest import LAYOUT, position_all


class TestStop:
    """Tests for explicit stop."""

    def test_stop_terminates_normally(self, start_game, registry):
        game = start_game("Ada")

        game.stop()

        assert game.wait(5)
        assert not game.alive
        assert game.termination_reason is TerminationReason.NORMAL
        assert registry.whereis("Ada") is None

    def test_calls_after_stop_fail(self, start_game):
        game = start_game()
        game.stop()

        with pytest.raises(GameNotAliveError):
            game.add_player("Grace")

    def test_stop_twice_is_harmless(self, start_game):
        game = start_game()
        game.stop()
        game.stop()

        assert game.termination_reason is TerminationReason.NORMAL

    def test_stop_takes_no_reason(self, start_game):
        """An explicit stop can only ever end a game normally."""
        game = start_game()

        with pytest.raises(TypeError):
            game.stop(TerminationReason.TIMEOUT)

        assert game.alive
        game.stop()
        assert game.termination_reason is TerminationReason.NORMAL

    def test_name_reusable_after_stop(self, start_game):
        first = start_game("Ada")
        first.stop()

        second = start_game("Ada")

        assert second.alive
        assert second is not first


class TestIdleTimeout:
    """Tests for the idle window."""

    def test_idle_game_times_out(self, start_game, registry):
        game = start_game("Ada", idle_timeout=0.1)

        assert game.wait(5)
        assert game.termination_reason is TerminationReason.TIMEOUT
        assert registry.whereis("Ada") is None
        with pytest.raises(GameNotAliveError):
            game.snapshot()

    def test_requests_reset_the_window(self, start_game):
        game = start_game("Ada", idle_timeout=1.0)

        for _ in range(8):
            time.sleep(0.25)
            game.snapshot()

        assert game.alive

    def test_default_timeout_from_config(self, registry):
        from .. import config

        game = Game("Ada", registry=registry)

        assert game.idle_timeout == config.IDLE_TIMEOUT_SECONDS
        assert not game.alive

    @pytest.mark.parametrize("idle_timeout", [-1, -0.5, "soon", True])
    def test_bad_timeout_rejected_before_registering(self, registry, idle_timeout):
        with pytest.raises(ValueError):
            Game.start("Ada", idle_timeout=idle_timeout, registry=registry)

        assert registry.whereis("Ada") is None

    def test_zero_timeout_expires_immediately(self, start_game):
        game = start_game("Ada", idle_timeout=0)

        assert game.wait(5)
        assert game.termination_reason is TerminationReason.TIMEOUT


class TestCrash:
    """Tests for handler crashes."""

    def test_crash_terminates_game(self, start_game, registry, monkeypatch):
        game = start_game("Ada")

        def boom():
            raise RuntimeError("boom")

        monkeypatch.setitem(game._handlers, "snapshot", boom)

        with pytest.raises(GameCrashedError) as excinfo:
            game.snapshot()

        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert game.wait(5)
        assert game.termination_reason is TerminationReason.CRASH
        assert registry.whereis("Ada") is None
        with pytest.raises(GameNotAliveError):
            game.add_player("Grace")

    def test_worker_failure_outside_handlers_still_terminates(self, registry):
        """A failure while waiting on the inbox ends the game as a crash."""

        class BrokenInbox(Game):
            def __init__(self, *args, **kwargs):
                super().__init__(*args, **kwargs)
                self.idle_timeout = -1

        game = BrokenInbox.start("Ada", registry=registry)

        assert game.wait(5)
        assert not game.alive
        assert game.termination_reason is TerminationReason.CRASH
        assert registry.whereis("Ada") is None
        with pytest.raises(GameNotAliveError):
            game.snapshot()


class TestRegistry:
    """Tests for the name registry."""

    def test_register_and_lookup(self):
        registry = Registry()
        game = Game("Ada", registry=registry)

        registry.register("Ada", game)

        assert registry.lookup("Ada") is game
        assert "Ada" in registry
        assert registry.names() == ["Ada"]

    def test_register_taken_name_fails(self):
        registry = Registry()
        registry.register("Ada", Game("Ada", registry=registry))

        with pytest.raises(AlreadyRegisteredError):
            registry.register("Ada", Game("Ada", registry=registry))

    def test_lookup_missing(self):
        with pytest.raises(GameNotFoundError):
            Registry().lookup("nobody")

    def test_unregister_only_owner(self):
        registry = Registry()
        owner = Game("Ada", registry=registry)
        registry.register("Ada", owner)

        assert not registry.unregister("Ada", Game("Ada", registry=registry))
        assert registry.unregister("Ada", owner)
        assert registry.whereis("Ada") is None

    def test_concurrent_starts_one_winner(self, registry):
        """Many threads racing for one name: exactly one game starts."""
        barrier = threading.Barrier(8)

        def attempt():
            barrier.wait()
            try:
                return Game.start("Ada", idle_timeout=30.0, registry=registry)
            except AlreadyRegisteredError:
                return None

        with ThreadPoolExecutor(max_workers=8) as pool:
            started = [g for g in pool.map(lambda _: attempt(), range(8)) if g is not None]

        assert len(started) == 1
        started[0].stop()

    def test_registered_game_is_already_alive(self, registry, monkeypatch):
        """A game is usable the moment its name can be looked up."""
        seen = []
        register = registry.register

        def spy(name, game):
            register(name, game)
            seen.append(registry.lookup(name).alive)

        monkeypatch.setattr(registry, "register", spy)
        game = Game.start("Ada", idle_timeout=30.0, registry=registry)

        assert seen == [True]
        game.stop()

    def test_losing_start_is_not_alive(self, start_game, registry):
        """The game that loses a name collision never comes alive."""
        start_game("Ada")
        created = []

        class Recorded(Game):
            def __init__(self, *args, **kwargs):
                super().__init__(*args, **kwargs)
                created.append(self)

        with pytest.raises(AlreadyRegisteredError):
            Recorded.start("Ada", registry=registry)

        assert not created[0].alive
        assert not created[0]._thread.is_alive()

    def test_sessions_are_isolated(self, start_game):
        ada = start_game("Ada")
        lena = start_game("Lena")

        ada.add_player("Grace")

        assert ada.snapshot().rules.state is RulesState.PLAYERS_SET
        assert lena.snapshot().rules.state is RulesState.INITIALIZED


class TestSessionManager:
    """Tests for the session manager."""

    def test_start_lookup_end(self, manager):
        game = manager.start_game("Ada")

        assert manager.get_game("Ada") is game
        assert manager.lookup("Ada") is game
        assert manager.list_active_games() == ["Ada"]

        assert manager.end_game("Ada")
        assert game.termination_reason is TerminationReason.NORMAL
        assert manager.get_game("Ada") is None
        assert not manager.end_game("Ada")

    def test_end_game_takes_no_reason(self, manager):
        game = manager.start_game("Ada")

        with pytest.raises(TypeError):
            manager.end_game("Ada", TerminationReason.CRASH)

        assert game.alive

    def test_duplicate_start_fails(self, manager):
        manager.start_game("Ada")

        with pytest.raises(AlreadyRegisteredError):
            manager.start_game("Ada")

    def test_shutdown_stops_everything(self, manager):
        games = [manager.start_game(name) for name in ("Ada", "Lena", "Miles")]

        manager.shutdown()

        assert all(not game.alive for game in games)
        assert manager.list_active_games() == []


class TestOrdering:
    """Concurrent callers are served one at a time."""

    def test_concurrent_placement(self, two_player_game):
        game = two_player_game

        def place(args):
            player, (island_type, (row, col)) = args
            return game.position_island(player, island_type, row, col)

        jobs = [(p, item) for p in ("player1", "player2") for item in LAYOUT.items()]
        with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
            results = list(pool.map(place, jobs))

        assert all(r.success for r in results)
        snapshot = game.snapshot()
        assert len(snapshot.player1.islands) == len(LAYOUT)
        assert len(snapshot.player2.islands) == len(LAYOUT)

    def test_racing_guesses_one_wins(self, two_player_game):
        """Two guesses for the same turn: the second sees the turn has passed."""
        game = two_player_game
        for player in ("player1", "player2"):
            position_all(game, player)
            game.set_islands(player)
        barrier = threading.Barrier(2)

        def guess(cell):
            barrier.wait()
            return game.guess_coordinate("player1", *cell)

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(guess, [(4, 1), (4, 2)]))

        succeeded = [r for r in results if r.success]
        failed = [r for r in results if not r.success]
        assert len(succeeded) == 1
        assert succeeded[0].value.hit_or_miss is HitOrMiss.MISS
        assert failed[0].error_code == ErrorCode.RULE_VIOLATION
        assert game.snapshot().rules.state is RulesState.PLAYER2_TURN
