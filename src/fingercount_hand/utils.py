from __future__ import annotations

import math

from .types import Point


def clamp_unit(v: float) -> float:
    return max(-1.0, min(1.0, v))


def distance(p: Point, q: Point) -> float:
    return math.hypot(p.x - q.x, p.y - q.y)


def angle_at(start: Point, end: Point, far: Point) -> float:
    """
    Angle in degrees at `far` of the triangle (start, end, far).

    Same value as the law-of-cosines form, but computed with atan2 so there is no
    arccos domain to fall out of. Result is always in [0, 180]; a zero-length side gives 0.
    """

    ax, ay = start.x - far.x, start.y - far.y
    bx, by = end.x - far.x, end.y - far.y
    cross = ax * by - ay * bx
    dot = ax * bx + ay * by
    return math.degrees(math.atan2(abs(cross), dot))


def angle_law_of_cosines(start: Point, end: Point, far: Point) -> float:
    """Clamped law-of-cosines reference form that `angle_at` is checked against."""
    a = distance(start, far)
    b = distance(end, far)
    c = distance(start, end)
    if a == 0.0 or b == 0.0:
        return 0.0
    return math.degrees(math.acos(clamp_unit((a * a + b * b - c * c) / (2 * a * b))))

