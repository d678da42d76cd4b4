"""Cars: rectangles that slide along one axis."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.rect import Rect
from backend.models.vector import Vector2D


@dataclass(frozen=True, eq=False, repr=False)
class Car:
    """A car occupying ``rect`` that only moves along ``direction``.

    ``direction`` is either ``Car.RIGHT`` (horizontal) or ``Car.DOWN``
    (vertical).

    Equality, hashing and ordering look at the position only. Two valid cars
    of the same puzzle can never share a position, so within one puzzle the
    position identifies the car; comparing cars across puzzles with
    different geometry is not meaningful.
    """

    RIGHT = Vector2D(1, 0)
    DOWN = Vector2D(0, 1)

    rect: Rect
    direction: Vector2D

    @classmethod
    def horizontal(cls, x: int, y: int, length: int) -> Car:
        return cls(Rect.of(x, y, length, 1), cls.RIGHT)

    @classmethod
    def vertical(cls, x: int, y: int, length: int) -> Car:
        return cls(Rect.of(x, y, 1, length), cls.DOWN)

    # -- queries --------------------------------------------------------------

    @property
    def pos(self) -> Vector2D:
        return self.rect.pos

    @property
    def is_horizontal(self) -> bool:
        return self.direction == Car.RIGHT

    @property
    def length(self) -> int:
        return self.rect.size.mul(self.direction).manhattan_sum()

    def with_move(self, d: int) -> Car:
        """Return this car moved *d* cells along its direction."""
        return Car(self.rect.with_pos(self.rect.pos + self.direction.mul(d)), self.direction)

    # -- identity -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Car):
            return NotImplemented
        return self.rect.pos == other.rect.pos

    def __hash__(self) -> int:
        return hash(self.rect.pos)

    def __lt__(self, other: Car) -> bool:
        return self.rect.pos < other.rect.pos

    def __repr__(self) -> str:
        axis = "RIGHT" if self.is_horizontal else "DOWN"
        return f"Car({self.rect}, {axis})"

    # -- serialisation --------------------------------------------------------

    def to_dict(self) -> dict:
        return {"rect": self.rect.to_dict(), "direction": self.direction.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> Car:
        return cls(Rect.from_dict(data["rect"]), Vector2D.from_dict(data["direction"]))
