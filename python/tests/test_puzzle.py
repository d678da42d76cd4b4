"""Puzzle model tests — validation, move generation and round-trips."""

from __future__ import annotations

import pytest

from backend.models import Board, Car, InvalidPuzzleError, Puzzle, PuzzleDescriptor, Rect, Vector2D

BOARD = Rect.of(0, 0, 6, 6)
GOAL = Vector2D(4, 2)


# -- validation ---------------------------------------------------------------


@pytest.mark.parametrize(
    "cars",
    [
        pytest.param([], id="no_cars"),
        pytest.param([Car.horizontal(5, 0, 2), Car.horizontal(0, 2, 2)], id="car_outside"),
        pytest.param([Car.vertical(2, 1, 3), Car.horizontal(1, 2, 2)], id="overlap"),
        pytest.param([Car(Rect.of(0, 0, 1, 1), Vector2D(1, 1)), Car.horizontal(0, 2, 2)], id="bad_direction"),
        pytest.param([Car.horizontal(0, 2, 3)], id="goal_outside"),
    ],
)
def test_invalid_puzzles_raise(cars: list[Car]) -> None:
    with pytest.raises(InvalidPuzzleError):
        Puzzle(BOARD, GOAL, cars)


def test_invalid_puzzle_error_is_value_error() -> None:
    assert issubclass(InvalidPuzzleError, ValueError)


@pytest.mark.parametrize(
    "data",
    [
        pytest.param({}, id="empty"),
        pytest.param({"board": {"pos": {"x": 0}}, "goal": {}, "cars": []}, id="missing_keys"),
        pytest.param({"board": BOARD.to_dict(), "goal": GOAL.to_dict(), "cars": None}, id="cars_none"),
    ],
)
def test_malformed_dict_raises(data: dict) -> None:
    with pytest.raises(InvalidPuzzleError):
        Puzzle.from_dict(data)


# -- queries ------------------------------------------------------------------


def test_queries_on_default_puzzle() -> None:
    puzzle = Puzzle.default()
    assert puzzle.num_cars == 8
    assert puzzle.goal_car == Car.horizontal(1, 2, 2)
    assert puzzle.goal_rect == Rect.of(4, 2, 2, 1)
    assert puzzle.car_index_at(Vector2D(2, 2)) == 7
    assert puzzle.car_index_at(Vector2D(1, 1)) is None
    assert puzzle.car_index_at(Vector2D(9, 9)) is None
    assert puzzle.car_at(Vector2D(5, 1)) == Car.vertical(5, 0, 3)
    assert puzzle.board.get(Vector2D(4, 5)) == 4
    assert not puzzle.has_won()


def test_one_cell_board_is_won_without_moves() -> None:
    puzzle = Puzzle(Rect.of(0, 0, 1, 1), Vector2D(0, 0), [Car(Rect.of(0, 0, 1, 1), Car.RIGHT)])
    assert puzzle.has_won()
    assert puzzle.gen_moves() == []


# -- move generation ----------------------------------------------------------


def test_gen_moves_on_default_puzzle() -> None:
    moves = Puzzle.default().gen_moves()
    assert [(m.car_index, m.delta) for m in moves] == [
        (0, 1), (0, 2), (0, 3),
        (3, 1), (3, -1),
        (4, 1), (4, -1),
        (5, -1), (5, -2), (5, -3),
        (6, 1),
    ]


def test_gen_moves_results_move_a_single_car() -> None:
    puzzle = Puzzle.default()
    for move in puzzle.gen_moves():
        before = puzzle.car(move.car_index)
        after = move.puzzle.car(move.car_index)
        assert after.pos == before.pos + before.direction.mul(move.delta)
        assert after.rect.size == before.rect.size
        for i in range(puzzle.num_cars):
            if i != move.car_index:
                assert move.puzzle.car(i).rect == puzzle.car(i).rect


def test_moves_are_reversible() -> None:
    puzzle = Puzzle.default()
    for move in puzzle.gen_moves():
        car = puzzle.car(move.car_index)
        dst = car.pos + car.direction.mul(move.delta)
        assert puzzle.apply_move(car.pos, dst) == move.puzzle

        back = [(m.car_index, m.delta) for m in move.puzzle.gen_moves()]
        assert (move.car_index, -move.delta) in back
        assert move.puzzle.move_car(move.car_index, -move.delta) == puzzle


def test_board_follows_moves() -> None:
    puzzle = Puzzle.default()
    moved = puzzle.move_car(5, -3)
    assert moved is not None
    assert moved.board == Board.for_cars(moved.board_rect, moved.cars)
    # The source puzzle is untouched.
    assert puzzle.board.get(Vector2D(5, 4)) == 5
    assert puzzle.car(5).pos == Vector2D(4, 4)


# -- apply_move ---------------------------------------------------------------


def test_apply_move_from_empty_cell() -> None:
    assert Puzzle.default().apply_move(Vector2D(1, 1), Vector2D(2, 1)) is None


def test_apply_move_without_displacement() -> None:
    assert Puzzle.default().apply_move(Vector2D(0, 0), Vector2D(0, 0)) is None


def test_apply_move_outside_board() -> None:
    assert Puzzle.default().apply_move(Vector2D(-1, 0), Vector2D(0, 0)) is None


@pytest.mark.parametrize(
    "src, dst",
    [
        pytest.param(Vector2D(1, 2), Vector2D(2, 2), id="goal_car_blocked"),
        pytest.param(Vector2D(0, 0), Vector2D(4, 0), id="through_car"),
        pytest.param(Vector2D(0, 0), Vector2D(-1, 0), id="off_board"),
        pytest.param(Vector2D(0, 0), Vector2D(1, -1), id="zero_sum"),
    ],
)
def test_apply_move_illegal(src: Vector2D, dst: Vector2D) -> None:
    assert Puzzle.default().apply_move(src, dst) is None


def test_apply_move_drags_from_any_cell_of_the_car() -> None:
    puzzle = Puzzle.default()
    # Car 5 covers (4, 4) and (5, 4); drag it by its right end.
    moved = puzzle.apply_move(Vector2D(5, 4), Vector2D(3, 4))
    assert moved == puzzle.move_car(5, -2)
    assert moved.car(5).pos == Vector2D(2, 4)


def test_move_car_rejects_bad_index_and_zero() -> None:
    puzzle = Puzzle.default()
    assert puzzle.move_car(8, 1) is None
    assert puzzle.move_car(-1, 1) is None
    assert puzzle.move_car(0, 0) is None


# -- identity & serialisation -------------------------------------------------


def test_descriptor_round_trip() -> None:
    puzzle = Puzzle.default()
    descriptor = puzzle.to_descriptor()
    assert isinstance(descriptor, PuzzleDescriptor)
    assert descriptor.board_rect == BOARD
    assert descriptor.goal == GOAL
    assert Puzzle.from_descriptor(descriptor) == puzzle


def test_dict_round_trip_keeps_geometry() -> None:
    puzzle = Puzzle.default().move_car(0, 2)
    loaded = Puzzle.from_dict(puzzle.to_dict())
    assert loaded == puzzle
    assert [c.rect for c in loaded.cars] == [c.rect for c in puzzle.cars]
    assert [c.direction for c in loaded.cars] == [c.direction for c in puzzle.cars]


def test_dict_layout() -> None:
    data = Puzzle(BOARD, GOAL, [Car.horizontal(0, 2, 2)]).to_dict()
    assert data == {
        "board": {"pos": {"x": 0, "y": 0}, "size": {"x": 6, "y": 6}},
        "goal": {"x": 4, "y": 2},
        "cars": [
            {"rect": {"pos": {"x": 0, "y": 2}, "size": {"x": 2, "y": 1}}, "direction": {"x": 1, "y": 0}}
        ],
    }


def test_equality_and_hash_follow_positions() -> None:
    a = Puzzle.default()
    b = Puzzle.default()
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b, a.move_car(0, 1)}) == 2
    assert a.move_car(0, 1).move_car(0, -1) == a


def test_different_goal_is_a_different_puzzle() -> None:
    cars = [Car.horizontal(0, 2, 2)]
    assert Puzzle(BOARD, GOAL, cars) != Puzzle(BOARD, Vector2D(3, 2), cars)


def test_dict_with_non_integer_coordinates_raises() -> None:
    data = Puzzle.default().to_dict()
    data["cars"][0]["rect"]["pos"]["x"] = 1.5
    with pytest.raises(InvalidPuzzleError):
        Puzzle.from_dict(data)


@pytest.mark.parametrize("name", ["cars", "board", "goal", "_hash"])
def test_puzzle_rejects_assignment(name: str) -> None:
    puzzle = Puzzle.default()
    before = hash(puzzle)
    with pytest.raises(AttributeError):
        setattr(puzzle, name, getattr(puzzle, name))
    with pytest.raises(AttributeError):
        delattr(puzzle, name)
    assert hash(puzzle) == before
    assert puzzle == Puzzle.default()
