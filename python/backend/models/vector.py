"""Integer 2D vectors and the four screen directions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


@dataclass(frozen=True, order=True)
class Vector2D:
    """An integer point or size on the grid.

    Ordering is lexicographic on ``x`` then ``y``. Every operation returns a
    new vector; arithmetic accepts either another vector or a scalar that is
    applied to both components.
    """

    x: int
    y: int

    # -- arithmetic -----------------------------------------------------------

    def add(self, o: Vector2D | int) -> Vector2D:
        ox, oy = _pair(o)
        return Vector2D(self.x + ox, self.y + oy)

    def sub(self, o: Vector2D | int) -> Vector2D:
        ox, oy = _pair(o)
        return Vector2D(self.x - ox, self.y - oy)

    def mul(self, o: Vector2D | int) -> Vector2D:
        ox, oy = _pair(o)
        return Vector2D(self.x * ox, self.y * oy)

    def div(self, o: Vector2D | int) -> Vector2D:
        ox, oy = _pair(o)
        return Vector2D(self.x // ox, self.y // oy)

    def neg(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def min(self, o: Vector2D | int) -> Vector2D:
        ox, oy = _pair(o)
        return Vector2D(min(self.x, ox), min(self.y, oy))

    def max(self, o: Vector2D | int) -> Vector2D:
        ox, oy = _pair(o)
        return Vector2D(max(self.x, ox), max(self.y, oy))

    def clamp(self, lo: Vector2D | int, hi: Vector2D | int) -> Vector2D:
        return self.min(hi).max(lo)

    def abs(self) -> Vector2D:
        return Vector2D(abs(self.x), abs(self.y))

    def signum(self) -> Vector2D:
        return Vector2D(_sign(self.x), _sign(self.y))

    def swap(self) -> Vector2D:
        return Vector2D(self.y, self.x)

    def manhattan_sum(self) -> int:
        """Signed sum of the components (not the absolute distance)."""
        return self.x + self.y

    __add__ = add
    __sub__ = sub
    __neg__ = neg

    # -- serialisation --------------------------------------------------------

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> Vector2D:
        x, y = data["x"], data["y"]
        if type(x) is not int or type(y) is not int:
            raise TypeError(f"Vector components must be integers, got {x!r}, {y!r}.")
        return cls(x, y)

    def __str__(self) -> str:
        return f"({self.x} {self.y})"


def _pair(o: Vector2D | int) -> tuple[int, int]:
    if isinstance(o, Vector2D):
        return o.x, o.y
    return o, o


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Vector2D:
        return _DIRECTION_VECTORS[self]


_DIRECTION_VECTORS = {
    Direction.UP: Vector2D(0, -1),
    Direction.DOWN: Vector2D(0, 1),
    Direction.LEFT: Vector2D(-1, 0),
    Direction.RIGHT: Vector2D(1, 0),
}
