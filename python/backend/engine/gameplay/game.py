"""Core gameplay logic — processes moves, hints and level progression."""

from __future__ import annotations

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamesolver import Solver
from backend.engine.gamestate import GameState
from backend.models.puzzle import Move, Puzzle
from backend.models.savegame import SavedGame
from backend.models.vector import Direction, Vector2D


class GamePlay:
    """Orchestrates a single game session."""

    def __init__(self, level: int = 1, generator: GameGenerator | None = None) -> None:
        self.level = level
        self.generator = generator or GameGenerator()
        self.state = GameState(self.generator.for_level(level))

    @classmethod
    def from_puzzle(
        cls, puzzle: Puzzle, level: int = 1, generator: GameGenerator | None = None
    ) -> GamePlay:
        """Create a session around an existing puzzle (e.g. a fixture)."""
        obj = object.__new__(cls)
        obj.level = level
        obj.generator = generator or GameGenerator()
        obj.state = GameState(puzzle)
        return obj

    @classmethod
    def from_saved(cls, saved: SavedGame, generator: GameGenerator | None = None) -> GamePlay:
        obj = cls.from_puzzle(saved.history[0], saved.level, generator)
        obj.state = GameState.from_history(saved.history, saved.cursor)
        return obj

    @property
    def puzzle(self) -> Puzzle:
        return self.state.current

    # -- movement -------------------------------------------------------------

    def move(self, src: Vector2D, dst: Vector2D) -> bool:
        """Drag the car under *src* to *dst*.

        Returns True if the move was legal and applied.
        """
        nxt = self.puzzle.apply_move(src, dst)
        if nxt is None:
            return False
        self.state.push(nxt)
        return True

    def move_car(self, cell: Vector2D, direction: Direction, distance: int = 1) -> bool:
        """Slide the car under *cell* *distance* cells towards *direction*.

        Directions across the car's axis are rejected.
        """
        car = self.puzzle.car_at(cell)
        if car is None or direction.vector.abs() != car.direction:
            return False
        return self.move(cell, cell + direction.vector.mul(distance))

    def undo(self) -> bool:
        return self.state.undo()

    def redo(self) -> bool:
        return self.state.redo()

    # -- hints ----------------------------------------------------------------

    def request_hint(self) -> Move | None:
        """Compute and remember the next move of a shortest solution."""
        self.state.hint = Solver.hint(self.puzzle)
        return self.state.hint

    def apply_hint(self) -> bool:
        hint = self.state.hint or self.request_hint()
        if hint is None:
            return False
        self.state.push(hint.puzzle)
        return True

    # -- levels ---------------------------------------------------------------

    def restart(self) -> None:
        """Start a fresh puzzle at the current level."""
        self.state = GameState(self.generator.for_level(self.level))

    def next_level(self) -> None:
        self.level += 1
        self.restart()

    @property
    def is_won(self) -> bool:
        return self.state.is_solved
