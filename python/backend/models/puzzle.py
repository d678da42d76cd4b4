"""Puzzle configurations: a board, a goal and the cars on it."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from backend.models.board import Board
from backend.models.car import Car
from backend.models.rect import Rect
from backend.models.vector import Vector2D


class InvalidPuzzleError(ValueError):
    """Raised when cars, goal and board do not form a valid puzzle."""


class Move(NamedTuple):
    """Car ``car_index`` slid ``delta`` cells along its axis, giving ``puzzle``."""

    car_index: int
    delta: int
    puzzle: Puzzle


class PuzzleDescriptor(NamedTuple):
    """The plain structural record a puzzle is built from."""

    board_rect: Rect
    goal: Vector2D
    cars: tuple[Car, ...]


def _check(board_rect: Rect, goal: Vector2D, cars: tuple[Car, ...]) -> None:
    if not cars:
        raise InvalidPuzzleError("A puzzle needs at least the goal car.")
    goal_rect = Rect(goal, cars[-1].rect.size)
    if not board_rect.contains_rect(goal_rect):
        raise InvalidPuzzleError(
            f"The board {board_rect} does not contain the goal {goal_rect}."
        )
    for car in cars:
        if car.direction not in (Car.RIGHT, Car.DOWN):
            raise InvalidPuzzleError(f"Car {car!r} has an invalid direction.")
        if car.rect.w <= 0 or car.rect.h <= 0:
            raise InvalidPuzzleError(f"Car {car!r} has an empty rect.")
        if not board_rect.contains_rect(car.rect):
            raise InvalidPuzzleError(
                f"The board {board_rect} does not contain the car {car.rect}."
            )
    for i, a in enumerate(cars):
        for b in cars[i + 1 :]:
            if a.rect.intersects(b.rect):
                raise InvalidPuzzleError(f"Cars {a.rect} and {b.rect} intersect.")


class Puzzle:
    """An immutable arrangement of cars on a board.

    The last car is the goal car; the puzzle is won when that car sits at
    ``goal``. Transitions (``gen_moves``, ``apply_move``, ``move_car``)
    always return new puzzles.
    """

    __slots__ = ("board", "goal", "cars", "_key", "_hash")

    def __init__(self, board_rect: Rect, goal: Vector2D, cars: Iterable[Car]) -> None:
        cars = tuple(cars)
        _check(board_rect, goal, cars)
        self._init(Board.for_cars(board_rect, cars), goal, cars)

    def _init(self, board: Board, goal: Vector2D, cars: tuple[Car, ...]) -> None:
        key = (board.rect, goal, tuple(c.rect.pos for c in cars))
        object.__setattr__(self, "board", board)
        object.__setattr__(self, "goal", goal)
        object.__setattr__(self, "cars", cars)
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_hash", hash(key))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Puzzle is immutable; cannot set {name!r}.")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Puzzle is immutable; cannot delete {name!r}.")

    @classmethod
    def _unchecked(cls, board: Board, goal: Vector2D, cars: tuple[Car, ...]) -> Puzzle:
        obj = object.__new__(cls)
        obj._init(board, goal, cars)
        return obj

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_descriptor(cls, descriptor: PuzzleDescriptor) -> Puzzle:
        return cls(descriptor.board_rect, descriptor.goal, descriptor.cars)

    @classmethod
    def from_dict(cls, data: dict) -> Puzzle:
        """Load a puzzle from the dict produced by :meth:`to_dict`."""
        try:
            board_rect = Rect.from_dict(data["board"])
            goal = Vector2D.from_dict(data["goal"])
            cars = [Car.from_dict(c) for c in data["cars"]]
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidPuzzleError(f"Malformed puzzle data: {exc!r}") from exc
        return cls(board_rect, goal, cars)

    @classmethod
    def default(cls) -> Puzzle:
        """The classic 6×6 starter puzzle; its shortest solution is 8 moves."""
        return cls(
            Rect.of(0, 0, 6, 6),
            Vector2D(4, 2),
            [
                Car.horizontal(0, 0, 2),
                Car.vertical(0, 1, 3),
                Car.vertical(0, 4, 2),
                Car.vertical(3, 1, 3),
                Car.horizontal(2, 5, 3),
                Car.horizontal(4, 4, 2),
                Car.vertical(5, 0, 3),
                Car.horizontal(1, 2, 2),
            ],
        )

    # -- queries --------------------------------------------------------------

    @property
    def board_rect(self) -> Rect:
        return self.board.rect

    @property
    def goal_car(self) -> Car:
        return self.cars[-1]

    @property
    def goal_rect(self) -> Rect:
        return Rect(self.goal, self.goal_car.rect.size)

    @property
    def num_cars(self) -> int:
        return len(self.cars)

    def car(self, i: int) -> Car:
        return self.cars[i]

    def car_index_at(self, p: Vector2D) -> int | None:
        if not self.board_rect.contains(p):
            return None
        i = self.board.get(p)
        return None if i == Board.EMPTY else i

    def car_at(self, p: Vector2D) -> Car | None:
        i = self.car_index_at(p)
        return None if i is None else self.cars[i]

    def has_won(self) -> bool:
        return self.goal_car.rect.pos == self.goal

    # -- transitions ----------------------------------------------------------

    def _swept_rect(self, car: Car, d: int) -> Rect:
        """The cells *car* newly covers when sliding *d* cells."""
        size = car.rect.size
        delta = car.direction.mul(d)
        # Leading edge: the far side of the car when moving forward, its
        # origin when moving backward.
        lead = delta.signum().add(1).div(2)
        start = lead.mul(size).add(car.rect.pos)
        end = start.add(delta).add(size.mul(car.direction.swap()))
        return Rect.from_unordered(start, end)

    def move_car(self, i: int, d: int) -> Puzzle | None:
        """Slide car *i* by *d* cells, or ``None`` if that slide is illegal."""
        if d == 0 or not 0 <= i < len(self.cars):
            return None
        car = self.cars[i]
        swept = self._swept_rect(car, d)
        if not self.board.rect.contains_rect(swept):
            return None
        if not self.board.all_empty(swept):
            return None

        moved = car.with_move(d)
        cars = self.cars[:i] + (moved,) + self.cars[i + 1 :]
        return Puzzle._unchecked(self.board.with_move(car.rect, moved.rect), self.goal, cars)

    def apply_move(self, src: Vector2D, dst: Vector2D) -> Puzzle | None:
        """Drag the car under *src* so that cell ends up at *dst*.

        Returns ``None`` if the cells are equal, *src* is empty, or the
        displacement is not a legal slide for that car.
        """
        if src == dst:
            return None
        i = self.car_index_at(src)
        if i is None:
            return None
        return self.move_car(i, (dst - src).manhattan_sum())

    def gen_moves(self) -> list[Move]:
        """Every puzzle reachable by sliding one car, in probe order.

        Cars are probed in index order; for each, forward slides of 1, 2, …
        cells come before backward slides of −1, −2, …, each direction
        stopping at the first blocked slide.
        """
        moves: list[Move] = []
        for i in range(len(self.cars)):
            for step in (1, -1):
                d = step
                while (puzzle := self.move_car(i, d)) is not None:
                    moves.append(Move(i, d, puzzle))
                    d += step
        return moves

    def solve(self) -> list[Move] | None:
        from backend.engine.gamesolver.solver import Solver

        return Solver.solve(self)

    # -- serialisation --------------------------------------------------------

    def to_descriptor(self) -> PuzzleDescriptor:
        return PuzzleDescriptor(self.board_rect, self.goal, self.cars)

    def to_dict(self) -> dict:
        return {
            "board": self.board_rect.to_dict(),
            "goal": self.goal.to_dict(),
            "cars": [c.to_dict() for c in self.cars],
        }

    # -- identity -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Puzzle):
            return NotImplemented
        return self._hash == other._hash and self._key == other._key

    def __hash__(self) -> int:
        return self._hash

    def __lt__(self, other: Puzzle) -> bool:
        return self._key[2] < other._key[2]

    def __repr__(self) -> str:
        return f"Puzzle(board={self.board_rect}, goal={self.goal}, cars={list(self.cars)!r})"

    def __str__(self) -> str:
        return str(self.board)
