"""Axis-aligned integer rectangles."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from backend.models.vector import Vector2D


@dataclass(frozen=True, order=True)
class Rect:
    """A rectangle on the grid.

    ``pos`` is the inclusive top-left corner, ``pos + size`` the exclusive
    bottom-right one. A rect with a zero-sized side has no cells.
    """

    pos: Vector2D
    size: Vector2D

    # -- construction helpers -------------------------------------------------

    @classmethod
    def of(cls, x: int, y: int, w: int, h: int) -> Rect:
        return cls(Vector2D(x, y), Vector2D(w, h))

    @classmethod
    def from_unordered(cls, a: Vector2D, b: Vector2D) -> Rect:
        """Build the rect spanned by two opposite corners given in any order."""
        lo = a.min(b)
        hi = a.max(b)
        return cls(lo, hi - lo)

    # -- queries --------------------------------------------------------------

    @property
    def x(self) -> int:
        return self.pos.x

    @property
    def y(self) -> int:
        return self.pos.y

    @property
    def w(self) -> int:
        return self.size.x

    @property
    def h(self) -> int:
        return self.size.y

    @property
    def end(self) -> Vector2D:
        return self.pos + self.size

    @property
    def area(self) -> int:
        return self.w * self.h

    def intersects(self, o: Rect) -> bool:
        return (
            self.x < o.x + o.w
            and o.x < self.x + self.w
            and self.y < o.y + o.h
            and o.y < self.y + self.h
        )

    def contains(self, p: Vector2D) -> bool:
        return self.x <= p.x < self.x + self.w and self.y <= p.y < self.y + self.h

    def contains_rect(self, o: Rect) -> bool:
        return (
            self.x <= o.x
            and o.x + o.w <= self.x + self.w
            and self.y <= o.y
            and o.y + o.h <= self.y + self.h
        )

    def cells(self) -> Iterator[Vector2D]:
        """Yield every cell, row by row."""
        for y in range(self.y, self.y + self.h):
            for x in range(self.x, self.x + self.w):
                yield Vector2D(x, y)

    def all_cells(self, predicate: Callable[[int, int], bool]) -> bool:
        for y in range(self.y, self.y + self.h):
            for x in range(self.x, self.x + self.w):
                if not predicate(x, y):
                    return False
        return True

    def with_pos(self, pos: Vector2D) -> Rect:
        return Rect(pos, self.size)

    # -- serialisation --------------------------------------------------------

    def to_dict(self) -> dict:
        return {"pos": self.pos.to_dict(), "size": self.size.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> Rect:
        return cls(Vector2D.from_dict(data["pos"]), Vector2D.from_dict(data["size"]))

    def __str__(self) -> str:
        return f"(x:{self.x} y:{self.y} w:{self.w} h:{self.h})"
