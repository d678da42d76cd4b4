"""Game session tests — history, moves, hints and levels."""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import GameState
from backend.models import Direction, Puzzle, Vector2D


@pytest.fixture
def game() -> GamePlay:
    return GamePlay.from_puzzle(Puzzle.default())


# -- GameState ----------------------------------------------------------------


def test_state_push_undo_redo() -> None:
    start = Puzzle.default()
    a = start.move_car(0, 1)
    b = a.move_car(0, 1)
    state = GameState(start)
    assert not state.can_undo and not state.can_redo

    state.push(a)
    state.push(b)
    assert state.current == b and state.move_number == 2

    assert state.undo() and state.undo()
    assert state.current == start
    assert not state.undo()

    assert state.redo()
    assert state.current == a and state.can_redo


def test_state_push_after_undo_drops_redo_branch() -> None:
    start = Puzzle.default()
    state = GameState(start)
    state.push(start.move_car(0, 1))
    state.undo()
    other = start.move_car(5, -1)
    state.push(other)
    assert state.history == [start, other]
    assert not state.can_redo


def test_state_history_changes_clear_the_hint() -> None:
    start = Puzzle.default()
    state = GameState(start)
    state.hint = start.gen_moves()[0]
    state.push(state.hint.puzzle)
    assert state.hint is None


def test_state_from_history() -> None:
    start = Puzzle.default()
    history = [start, start.move_car(0, 1)]
    state = GameState.from_history(history, 1)
    assert state.current == history[1]
    assert state.can_undo and not state.can_redo
    with pytest.raises(ValueError):
        GameState.from_history([], 0)
    with pytest.raises(ValueError):
        GameState.from_history(history, 2)


def test_state_pause_stops_the_clock() -> None:
    state = GameState(Puzzle.default())
    state.pause()
    frozen = state.elapsed_time
    assert state.elapsed_time == frozen
    state.resume()
    assert state.elapsed_time >= frozen


# -- GamePlay -----------------------------------------------------------------


def test_move_applies_legal_drags_only(game: GamePlay) -> None:
    assert game.move(Vector2D(0, 0), Vector2D(2, 0))
    assert game.puzzle.car(0).pos == Vector2D(2, 0)
    assert game.state.move_number == 1

    assert not game.move(Vector2D(1, 2), Vector2D(2, 2))
    assert not game.move(Vector2D(1, 1), Vector2D(1, 0))
    assert game.state.move_number == 1


def test_move_car_follows_the_car_axis(game: GamePlay) -> None:
    assert game.move_car(Vector2D(4, 4), Direction.LEFT, 3)
    assert game.puzzle.car(5).pos == Vector2D(1, 4)
    # Vertical slides of a horizontal car are rejected.
    assert not game.move_car(Vector2D(1, 4), Direction.UP)
    assert not game.move_car(Vector2D(1, 1), Direction.RIGHT)


def test_move_car_vertical(game: GamePlay) -> None:
    assert game.move_car(Vector2D(3, 2), Direction.DOWN)
    assert game.puzzle.car(3).pos == Vector2D(3, 2)
    # The bottom row is taken by car 4.
    assert not game.move_car(Vector2D(3, 4), Direction.DOWN)
    assert not game.move_car(Vector2D(3, 4), Direction.LEFT)


def test_undo_redo(game: GamePlay) -> None:
    start = game.puzzle
    assert not game.undo()
    game.move_car(Vector2D(0, 0), Direction.RIGHT)
    moved = game.puzzle
    assert game.undo()
    assert game.puzzle == start
    assert game.redo()
    assert game.puzzle == moved
    assert not game.redo()


def test_request_hint_is_remembered(game: GamePlay) -> None:
    hint = game.request_hint()
    assert hint is not None
    assert game.state.hint == hint
    assert game.apply_hint()
    assert game.puzzle == hint.puzzle
    assert game.state.hint is None


def test_solving_by_hand_wins(game: GamePlay) -> None:
    for move in game.puzzle.solve():
        car = game.puzzle.car(move.car_index)
        assert game.move(car.pos, car.pos + car.direction.mul(move.delta))
    assert game.is_won
    assert game.state.move_number == 8


def test_new_game_generates_a_level() -> None:
    game = GamePlay(1, GameGenerator(rng=random.Random(5)))
    assert game.level == 1
    assert not game.is_won
    assert game.puzzle.solve()


def test_next_level_and_restart() -> None:
    game = GamePlay.from_puzzle(Puzzle.default(), 1, GameGenerator(rng=random.Random(5)))
    game.move_car(Vector2D(0, 0), Direction.RIGHT)

    game.next_level()
    assert game.level == 2
    assert game.state.move_number == 0
    assert game.puzzle != Puzzle.default()

    game.restart()
    assert game.level == 2
    assert not game.state.can_undo
