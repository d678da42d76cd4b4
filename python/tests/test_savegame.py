"""Save-game persistence tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from backend.engine.gameplay import GamePlay
from backend.models import InvalidPuzzleError, Puzzle, SaveGameManager, Vector2D


@pytest.fixture
def manager(tmp_path: Path) -> SaveGameManager:
    return SaveGameManager(tmp_path / "data" / "savegame.json")


def test_load_without_save_returns_none(manager: SaveGameManager) -> None:
    assert manager.load() is None


def test_save_and_resume(manager: SaveGameManager) -> None:
    game = GamePlay.from_puzzle(Puzzle.default(), level=4)
    game.move(Vector2D(0, 0), Vector2D(1, 0))
    game.move(Vector2D(4, 4), Vector2D(3, 4))
    game.undo()
    manager.save(game)

    saved = manager.load()
    assert saved is not None
    assert saved.level == 4
    assert saved.cursor == 1
    assert saved.history == game.state.history

    resumed = GamePlay.from_saved(saved)
    assert resumed.level == 4
    assert resumed.puzzle == game.puzzle
    assert resumed.redo()
    assert resumed.puzzle.car(5).pos == Vector2D(3, 4)


def test_clear(manager: SaveGameManager) -> None:
    manager.save(GamePlay.from_puzzle(Puzzle.default()))
    assert manager.filepath.exists()
    manager.clear()
    assert manager.load() is None
    manager.clear()


@pytest.mark.parametrize(
    "data",
    [
        pytest.param({"level": 1, "cursor": 0}, id="no_history"),
        pytest.param({"level": 1, "cursor": 0, "history": []}, id="empty_history"),
        pytest.param({"level": 1, "cursor": 3, "history": [Puzzle.default().to_dict()]}, id="bad_cursor"),
        pytest.param({"level": "one", "cursor": 0, "history": [Puzzle.default().to_dict()]}, id="bad_level"),
        pytest.param({"level": 1, "cursor": 0, "history": [{"cars": []}]}, id="bad_puzzle"),
        pytest.param(
            {"level": 1, "cursor": 0, "history": [dict(Puzzle.default().to_dict(), goal={"x": 4.5, "y": 2})]},
            id="float_coordinate",
        ),
    ],
)
def test_malformed_save_raises(manager: SaveGameManager, data: dict) -> None:
    manager.filepath.parent.mkdir(parents=True)
    manager.filepath.write_text(json.dumps(data))
    with pytest.raises(InvalidPuzzleError):
        manager.load()
