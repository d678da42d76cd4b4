"""Tracks the history and timing of a game in progress."""

from __future__ import annotations

import time
from collections.abc import Sequence

from backend.models.puzzle import Move, Puzzle


class GameState:
    """Holds the puzzle history, a cursor into it, and elapsed time.

    The history is linear: undo and redo move the cursor, and a new move
    made after an undo discards everything that had been undone.
    """

    def __init__(self, puzzle: Puzzle) -> None:
        self.history: list[Puzzle] = [puzzle]
        self.cursor: int = 0
        self.hint: Move | None = None
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    @classmethod
    def from_history(cls, history: Sequence[Puzzle], cursor: int) -> GameState:
        if not history:
            raise ValueError("A game history needs at least one puzzle.")
        if not 0 <= cursor < len(history):
            raise ValueError(f"Cursor {cursor} outside a history of {len(history)}.")
        state = cls(history[0])
        state.history = list(history)
        state.cursor = cursor
        return state

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- history --------------------------------------------------------------

    @property
    def current(self) -> Puzzle:
        return self.history[self.cursor]

    @property
    def move_number(self) -> int:
        return self.cursor

    @property
    def can_undo(self) -> bool:
        return self.cursor > 0

    @property
    def can_redo(self) -> bool:
        return self.cursor < len(self.history) - 1

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self.cursor -= 1
        self.hint = None
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self.cursor += 1
        self.hint = None
        return True

    def push(self, puzzle: Puzzle) -> None:
        """Make *puzzle* the current state, dropping any redo branch."""
        del self.history[self.cursor + 1 :]
        self.history.append(puzzle)
        self.cursor += 1
        self.hint = None

    @property
    def is_solved(self) -> bool:
        return self.current.has_won()
