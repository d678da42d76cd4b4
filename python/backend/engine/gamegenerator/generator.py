"""Generates solvable car puzzles of tunable difficulty."""

from __future__ import annotations

import logging
import math
import random
from collections import deque
from dataclasses import dataclass

from backend.engine.gamegenerator.gradient import GradientPoint, gradient
from backend.engine.gamesolver import Solver
from backend.models.board import Board
from backend.models.car import Car
from backend.models.puzzle import Puzzle
from backend.models.rect import Rect
from backend.models.vector import Vector2D

logger = logging.getLogger(__name__)

# Passed as ``n_tries`` to keep generating until the target is reached.
INFINITE = -1


@dataclass(frozen=True)
class GenerationParams:
    n_cars: int
    n_moves: int
    n_tries: int


@dataclass(frozen=True)
class GeneratorConfig:
    """Board geometry and the difficulty → parameter tables."""

    board_rect: Rect = Rect.of(0, 0, 6, 6)
    goal: Vector2D = Vector2D(4, 2)
    goal_car_size: Vector2D = Vector2D(2, 1)
    # Random car lengths are drawn from [min_car_length, max_car_length).
    min_car_length: int = 2
    max_car_length: int = 4
    cars_gradient: tuple[GradientPoint, ...] = (
        GradientPoint(0.0, 1),
        GradientPoint(1.0, 16),
    )
    moves_gradient: tuple[GradientPoint, ...] = (
        GradientPoint(0.0, 2),
        GradientPoint(0.2, 5),
        GradientPoint(0.5, 13),
        GradientPoint(0.8, 20),
        GradientPoint(1.0, 30),
    )
    tries_gradient: tuple[GradientPoint, ...] = (
        GradientPoint(0.0, 100),
        GradientPoint(1.0, 10000),
    )

    def params_for(self, difficulty: float) -> GenerationParams:
        return GenerationParams(
            n_cars=gradient(difficulty, self.cars_gradient),
            n_moves=gradient(difficulty, self.moves_gradient),
            n_tries=gradient(difficulty, self.tries_gradient),
        )


@dataclass(frozen=True)
class FurthestState:
    """The state found furthest (approximately, in moves) from a win."""

    puzzle: Puzzle
    distance: int


@dataclass(frozen=True)
class GenerationResult:
    puzzle: Puzzle
    solution_length: int
    target_moves: int
    tries: int

    @property
    def reached_target(self) -> bool:
        return self.solution_length >= self.target_moves


def difficulty_for_level(level: int) -> float:
    """Map a level number onto [0, 1), rising quickly then levelling off."""
    return math.atan(level / 20) / (math.pi / 2)


class GameGenerator:
    """Creates puzzles by walking backwards from a solved board.

    Each attempt seeds a won board with random cars, searches its whole
    reachable component for the state furthest from any win, and confirms
    that state's difficulty with an exact solve. The hardest confirmed
    puzzle over all attempts wins.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random()

    # -- seeding --------------------------------------------------------------

    @staticmethod
    def _nth_valid_position(board: Board, size: Vector2D, n: int) -> Vector2D | None:
        """Return the *n*-th position (row-major) where a *size* rect fits."""
        for y in range(board.rect.y, board.rect.y + board.rect.h):
            for x in range(board.rect.x, board.rect.x + board.rect.w):
                r = Rect(Vector2D(x, y), size)
                if board.rect.contains_rect(r) and board.all_empty(r):
                    if n == 0:
                        return r.pos
                    n -= 1
        return None

    def initial_state(self, n_cars: int) -> Puzzle:
        """Return a won puzzle with the goal car and up to *n_cars* others."""
        cfg = self.config
        rng = self.rng
        goal_dir = Car.RIGHT if cfg.goal_car_size.x >= cfg.goal_car_size.y else Car.DOWN
        goal_car = Car(Rect(cfg.goal, cfg.goal_car_size), goal_dir)

        # Indices are irrelevant here; only emptiness is queried.
        board = Board.empty(cfg.board_rect).with_rect_set(goal_car.rect, 0)
        cells_left = cfg.board_rect.area
        cars: list[Car] = []

        for _ in range(n_cars):
            spread = cfg.max_car_length - cfg.min_car_length
            length = int(cfg.min_car_length + spread * rng.random())
            direction = Car.RIGHT if rng.random() < 0.5 else Car.DOWN
            size = Vector2D(length, 1) if direction == Car.RIGHT else Vector2D(1, length)
            pos = self._nth_valid_position(board, size, int(cells_left * rng.random() / 4))
            if pos is None:
                continue
            car = Car(Rect(pos, size), direction)
            cars.append(car)
            board = board.with_rect_set(car.rect, 0)
            cells_left -= car.rect.area

        cars.append(goal_car)
        return Puzzle(cfg.board_rect, cfg.goal, cars)

    # -- search ---------------------------------------------------------------

    @staticmethod
    def furthest_state(start: Puzzle) -> FurthestState:
        """Find the state of *start*'s component furthest from a win.

        Won states reachable from *start* through won states sit at
        distance 0 and their other neighbours at 1. The remaining states
        get their parent's distance plus one, except won states found on
        the way, which drop back to 0. The distance is therefore only an
        estimate of the real solution length.
        """
        seen: dict[Puzzle, int] = {start: 0}
        todo: deque[Puzzle] = deque()

        won: deque[Puzzle] = deque([start])
        while won:
            curr = won.popleft()
            for move in curr.gen_moves():
                nxt = move.puzzle
                if nxt in seen:
                    continue
                if nxt.has_won():
                    seen[nxt] = 0
                    won.append(nxt)
                else:
                    seen[nxt] = 1
                    todo.append(nxt)

        furthest = 0
        furthest_puzzle = start

        while todo:
            curr = todo.popleft()
            dist = seen[curr]
            if furthest < dist:
                furthest = dist
                furthest_puzzle = curr

            for move in curr.gen_moves():
                nxt = move.puzzle
                if nxt not in seen:
                    seen[nxt] = 0 if nxt.has_won() else dist + 1
                    todo.append(nxt)

        return FurthestState(furthest_puzzle, furthest)

    # -- generation -----------------------------------------------------------

    def generate_with_params(self, n_cars: int, n_moves: int, n_tries: int) -> GenerationResult:
        """Try to build a puzzle with at most *n_cars* needing *n_moves* moves.

        Gives up after *n_tries* seeds (never, if ``INFINITE``) and then
        returns the hardest puzzle found so far.
        """
        if n_tries == 0 or n_tries < INFINITE:
            raise ValueError(f"n_tries must be positive or INFINITE, got {n_tries}.")

        logger.info(
            "Generating a board with %d cars taking %d moves to solve, in %s attempts",
            n_cars, n_moves, "unlimited" if n_tries == INFINITE else n_tries,
        )

        # The first attempt is always kept.
        result = self.furthest_state(self.initial_state(n_cars))
        best = result.puzzle
        best_moves = Solver.solution_length(best)
        logger.debug(
            "Attempt 0: distance of %d, %d moves to solve", result.distance, best_moves
        )
        tries = 1

        while (n_tries == INFINITE or tries < n_tries) and best_moves < n_moves:
            start = self.initial_state(n_cars)
            result = self.furthest_state(start)

            if best_moves < result.distance:
                moves = Solver.solution_length(result.puzzle)
                if best_moves < moves:
                    best_moves = moves
                    best = result.puzzle
                logger.debug(
                    "Attempt %d: distance of %d, %d moves to solve",
                    tries, result.distance, moves,
                )
            else:
                logger.debug("Attempt %d: distance of %d", tries, result.distance)
            tries += 1

        if best_moves < n_moves:
            logger.info(
                "Fell short: best board needs %d of %d moves after %d attempts",
                best_moves, n_moves, tries,
            )
        else:
            logger.info("Generated a board needing %d moves in %d attempts", best_moves, tries)

        return GenerationResult(
            puzzle=best, solution_length=best_moves, target_moves=n_moves, tries=tries
        )

    def generate(self, difficulty: float) -> Puzzle:
        """Return a puzzle for *difficulty* in [0, 1]."""
        params = self.config.params_for(difficulty)
        return self.generate_with_params(params.n_cars, params.n_moves, params.n_tries).puzzle

    def for_level(self, level: int) -> Puzzle:
        return self.generate(difficulty_for_level(level))
