from __future__ import annotations

import math


def round_to(value: float, precision: int = 0) -> float:
    """Round half away from zero to `precision` decimal places."""
    if not math.isfinite(value):
        return value
    multiplier = 10.0**precision
    scaled = value * multiplier
    if scaled >= 0:
        return math.floor(scaled + 0.5) / multiplier
    return -math.floor(-scaled + 0.5) / multiplier


def clamp(number: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, number))


def inclusive_range(start: float, stop: float, step: float = 1.0) -> list[float]:
    """Values from `start` to `stop` inclusive, spaced by `step`.

    The last value is `stop` when it lands on the grid (within step * 1e-6),
    otherwise the next grid value past the last one below `stop`.
    """
    if step <= 0:
        raise ValueError("step must be > 0")
    out: list[float] = []
    value = start
    while value < stop - step / 2:
        out.append(value)
        value += step

    if not out:
        out.append(start)
        if stop != start:
            out.append(stop)
        return out

    computed_stop = out[-1] + step
    if abs(stop - computed_stop) < step / 1e6:
        out.append(stop)
    else:
        out.append(computed_stop)
    return out
