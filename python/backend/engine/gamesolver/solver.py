"""Shortest-path solver for car puzzles."""

from __future__ import annotations

import logging
from collections import deque

from backend.models.puzzle import Move, Puzzle

logger = logging.getLogger(__name__)


class UnsolvableError(RuntimeError):
    """A puzzle that must be solvable has no solution.

    Every puzzle this engine produces is reachable from a won state by
    reversible slides, so this signals a bug rather than a user error.
    """


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def solve(puzzle: Puzzle) -> list[Move] | None:
        """Return a shortest move sequence that wins *puzzle*.

        Breadth-first search over single-car slides. A won puzzle gives
        ``[]``; ``None`` means no won puzzle is reachable. Among shortest
        solutions the one found first in ``gen_moves`` order is returned.
        """
        start = Move(-1, 0, puzzle)
        came_from: dict[Puzzle, Move | None] = {puzzle: None}
        todo: deque[Move] = deque([start])

        while todo:
            curr = todo.popleft()

            if curr.puzzle.has_won():
                path: list[Move] = []
                move: Move | None = curr
                while move is not None:
                    path.append(move)
                    move = came_from[move.puzzle]
                path.reverse()
                logger.debug(
                    "Solved in %d moves after visiting %d states",
                    len(path) - 1, len(came_from),
                )
                return path[1:]

            for nxt in curr.puzzle.gen_moves():
                if nxt.puzzle not in came_from:
                    came_from[nxt.puzzle] = curr
                    todo.append(nxt)

        logger.error(
            "No solution after visiting %d states:\n%s", len(came_from), puzzle
        )
        return None

    @staticmethod
    def hint(puzzle: Puzzle) -> Move | None:
        """Return the first move of a shortest solution, or ``None`` if won."""
        if puzzle.has_won():
            return None
        moves = Solver.solve(puzzle)
        if moves is None:
            raise UnsolvableError(f"No solution exists for puzzle:\n{puzzle}")
        return moves[0]

    @staticmethod
    def solution_length(puzzle: Puzzle) -> int:
        """Return the number of moves in a shortest solution of *puzzle*."""
        moves = Solver.solve(puzzle)
        if moves is None:
            raise UnsolvableError(f"No solution exists for puzzle:\n{puzzle}")
        return len(moves)
