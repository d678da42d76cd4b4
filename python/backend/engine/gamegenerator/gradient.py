"""Piecewise-linear lookup tables mapping a difficulty onto integers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import NamedTuple


class GradientPoint(NamedTuple):
    at: float
    value: int


def gradient(x: float, points: Sequence[GradientPoint]) -> int:
    """Interpolate *x* between the two control points around it.

    *points* must be sorted by ``at``. Below the first point the first
    value is returned, at or beyond the last point the last value. The
    interpolated value is rounded half up.
    """
    if x < points[0].at:
        return points[0].value
    for a, b in zip(points, points[1:]):
        if x < b.at:
            t = (x - a.at) / (b.at - a.at)
            return a.value + math.floor((b.value - a.value) * t + 0.5)
    return points[-1].value
