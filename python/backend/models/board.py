"""Occupancy grid for the car puzzle."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from backend.models.rect import Rect
from backend.models.vector import Vector2D

if TYPE_CHECKING:
    from backend.models.car import Car


@dataclass(frozen=True)
class Board:
    """A dense grid mapping each cell to the index of the car on it.

    Cells are stored row-major in a tuple. ``EMPTY`` marks a free cell.
    Boards are never modified; every ``with_*`` helper returns a copy.
    """

    EMPTY = -1

    rect: Rect
    cells: tuple[int, ...]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def empty(cls, rect: Rect) -> Board:
        return cls(rect=rect, cells=(cls.EMPTY,) * rect.area)

    @classmethod
    def for_rects(cls, rect: Rect, rects: Sequence[Rect]) -> Board:
        """Create a board with every rect stamped with its index."""
        cells = [cls.EMPTY] * rect.area
        for i, r in enumerate(rects):
            for x, y in _coords(r):
                cells[(y - rect.y) * rect.w + (x - rect.x)] = i
        return cls(rect=rect, cells=tuple(cells))

    @classmethod
    def for_cars(cls, rect: Rect, cars: Iterable[Car]) -> Board:
        return cls.for_rects(rect, [c.rect for c in cars])

    # -- queries --------------------------------------------------------------

    def _index(self, x: int, y: int) -> int:
        return (y - self.rect.y) * self.rect.w + (x - self.rect.x)

    def get_xy(self, x: int, y: int) -> int:
        return self.cells[self._index(x, y)]

    def get(self, p: Vector2D) -> int:
        return self.get_xy(p.x, p.y)

    def all_empty(self, r: Rect) -> bool:
        """True if every cell of *r* is ``EMPTY``."""
        return r.all_cells(lambda x, y: self.cells[self._index(x, y)] == Board.EMPTY)

    def rows(self) -> list[list[int]]:
        w = self.rect.w
        return [list(self.cells[i : i + w]) for i in range(0, len(self.cells), w)]

    # -- copies ---------------------------------------------------------------

    def with_move(self, src: Rect, dst: Rect) -> Board:
        """Return a board where the car covering *src* now covers *dst*.

        The caller guarantees both rects belong to one car.
        """
        cells = list(self.cells)
        index = cells[self._index(src.x, src.y)]
        for x, y in _coords(src):
            cells[self._index(x, y)] = Board.EMPTY
        for x, y in _coords(dst):
            cells[self._index(x, y)] = index
        return Board(rect=self.rect, cells=tuple(cells))

    def with_rect_set(self, r: Rect, index: int) -> Board:
        """Return a board with *r* stamped with *index*, nothing cleared."""
        cells = list(self.cells)
        for x, y in _coords(r):
            cells[self._index(x, y)] = index
        return Board(rect=self.rect, cells=tuple(cells))

    def __str__(self) -> str:
        return "\n".join(
            "  " + " ".join("." if v == Board.EMPTY else str(v) for v in row)
            for row in self.rows()
        )


def _coords(r: Rect) -> Iterable[tuple[int, int]]:
    for y in range(r.y, r.y + r.h):
        for x in range(r.x, r.x + r.w):
            yield x, y
