"""
Pytest fixtures for Islands tests.
"""

import pytest

from ..engine_core import Board, Coordinate, Island, IslandType
from ..session import Game, Registry, SessionManager


# Upper-left anchors for a full, non-overlapping set of islands.
# Row 4 and most of row 5 stay open water.
LAYOUT = {
    IslandType.ATOLL: (1, 3),
    IslandType.DOT: (1, 1),
    IslandType.L_SHAPE: (5, 1),
    IslandType.S_SHAPE: (8, 4),
    IslandType.SQUARE: (9, 9),
}

OPEN_WATER = [(4, col) for col in range(1, 11)] + [(5, col) for col in range(2, 10)]


def build_island(island_type, row, col) -> Island:
    """Build an island that is known to fit on the board."""
    return Island.new(island_type, Coordinate(row, col)).value


def position_all(game: Game, player: str, layout=LAYOUT) -> None:
    """Position every island in layout for player."""
    for island_type, (row, col) in layout.items():
        result = game.position_island(player, island_type, row, col)
        assert result.success, result.error


def occupied_cells(layout=LAYOUT) -> list[Coordinate]:
    """Every cell covered by the layout, island by island."""
    cells = []
    for island_type, (row, col) in layout.items():
        cells.extend(sorted(build_island(island_type, row, col).coordinates))
    return cells


@pytest.fixture
def full_board() -> Board:
    """A board holding every island from LAYOUT."""
    board = Board()
    for island_type, (row, col) in LAYOUT.items():
        board = board.position_island(island_type, build_island(island_type, row, col)).value
    return board


@pytest.fixture
def registry() -> Registry:
    """A fresh registry per test so names never leak between tests."""
    return Registry()


@pytest.fixture
def start_game(registry):
    """Start games on the test registry and stop them afterwards."""
    games = []

    def _start(name: str = "Ada", idle_timeout: float = 30.0) -> Game:
        game = Game.start(name, idle_timeout=idle_timeout, registry=registry)
        games.append(game)
        return game

    yield _start

    for game in games:
        game.stop()


@pytest.fixture
def manager(registry):
    """A session manager bound to the test registry."""
    manager = SessionManager(registry=registry, idle_timeout=30.0)
    yield manager
    manager.shutdown()


@pytest.fixture
def two_player_game(start_game) -> Game:
    """A game where the second player has joined."""
    game = start_game("Ada")
    assert game.add_player("Grace").success
    return game


@pytest.fixture
def game_in_progress(two_player_game) -> Game:
    """A game where both players have set all their islands."""
    game = two_player_game
    for player in ("player1", "player2"):
        position_all(game, player)
        assert game.set_islands(player).success
    return game
