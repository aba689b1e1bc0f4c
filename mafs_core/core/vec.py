from __future__ import annotations

import math

from .matrix import Point


def sub(v: Point, other: Point) -> Point:
    return (v[0] - other[0], v[1] - other[1])


def mag(v: Point) -> float:
    return math.hypot(v[0], v[1])


def dist(v: Point, other: Point) -> float:
    return mag(sub(v, other))
