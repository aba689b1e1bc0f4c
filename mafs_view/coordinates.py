from __future__ import annotations

import math

import numpy as np

from mafs_core.core.matrix import AffineMatrix, Point, apply, apply_points, compose, invert, translate
from mafs_core.core.numeric import clamp

from .viewport import ResolvedViewport

SCROLL_SENSITIVITY = 300.0
SCROLL_SATURATION = 10.0


def scroll_zoom_factor(delta_y: float) -> float:
    """Map a wheel delta to a zoom factor in (0, 2) through a bounded sigmoid.

    A zero delta gives 1.0; positive deltas give factors above 1.
    """
    scaled = clamp(-delta_y / SCROLL_SENSITIVITY, -SCROLL_SATURATION, SCROLL_SATURATION)
    return 2.0 / (1.0 + math.exp(scaled))


class CoordinateConverter:
    """Screen <-> math conversion for one resolved viewport snapshot."""

    def __init__(self, viewport: ResolvedViewport) -> None:
        self._viewport = viewport

    @property
    def viewport(self) -> ResolvedViewport:
        return self._viewport

    def screen_to_math(self, point: Point) -> Point:
        vp = self._viewport
        px, py = point
        math_x = px / vp.pixel_width * vp.x_span + vp.x_min
        math_y = (1.0 - py / vp.pixel_height) * vp.y_span + vp.y_min
        return (math_x, math_y)

    def math_to_screen(self, point: Point) -> Point:
        return apply(self.math_to_screen_matrix(), point)

    def math_to_screen_matrix(self) -> AffineMatrix:
        ox, oy = self._viewport.pixel_offset
        return compose(translate(-ox, -oy), self._viewport.math_to_pixel)

    def screen_to_math_matrix(self) -> AffineMatrix | None:
        """Inverse of `math_to_screen_matrix`, absent for a degenerate scale."""
        return invert(self.math_to_screen_matrix())

    def math_to_screen_points(self, points: np.ndarray) -> np.ndarray:
        return apply_points(self.math_to_screen_matrix(), points)

    def screen_to_math_points(self, points: np.ndarray) -> np.ndarray:
        vp = self._viewport
        arr = np.asarray(points, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"points must have shape (N, 2), got {arr.shape}")
        out = np.empty_like(arr)
        out[:, 0] = arr[:, 0] / vp.pixel_width * vp.x_span + vp.x_min
        out[:, 1] = (1.0 - arr[:, 1] / vp.pixel_height) * vp.y_span + vp.y_min
        return out

    def pan_delta_to_math(self, delta: Point) -> Point:
        """Camera pan for a screen drag, measured against the pre-camera span.

        Dragging right moves the visible rectangle left, so content follows
        the pointer. Using the base span keeps drag speed independent of zoom.
        """
        vp = self._viewport
        dx, dy = delta
        return (-dx / vp.pixel_width * vp.base_x_span, dy / vp.pixel_height * vp.base_y_span)
