from __future__ import annotations

from dataclasses import dataclass
import math

from mafs_core.core.numeric import inclusive_range, round_to

from .viewport import Interval, ResolvedViewport

# Load the next pane once only this fraction of the current pane remains visible.
PANE_LOOKAHEAD = 1 / 8


@dataclass(frozen=True)
class PaneLayout:
    """Power-of-two tiling of the visible area, for rendering unbounded plots piecewise."""

    x_panes: tuple[Interval, ...]
    y_panes: tuple[Interval, ...]
    x_pane_range: Interval
    y_pane_range: Interval

    @classmethod
    def empty(cls) -> "PaneLayout":
        return cls(x_panes=(), y_panes=(), x_pane_range=(0.0, 0.0), y_pane_range=(0.0, 0.0))


def pane_size(span: float) -> float:
    return float(2 ** (int(round_to(math.log2(span))) - 1))


def compute_panes(viewport: ResolvedViewport) -> PaneLayout:
    x_panes, x_range = _axis_panes(viewport.x_min, viewport.x_max)
    y_panes, y_range = _axis_panes(viewport.y_min, viewport.y_max)
    return PaneLayout(x_panes=x_panes, y_panes=y_panes, x_pane_range=x_range, y_pane_range=y_range)


def _axis_panes(lo: float, hi: float) -> tuple[tuple[Interval, ...], Interval]:
    size = pane_size(hi - lo)
    lower = size * math.floor(lo / size - PANE_LOOKAHEAD)
    upper = size * math.ceil(hi / size + PANE_LOOKAHEAD)
    panes = tuple((start, start + size) for start in inclusive_range(lower, upper - size, size))
    return panes, (lower, upper)
