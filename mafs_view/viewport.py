from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
from typing import TypeAlias

from mafs_core.core.matrix import IDENTITY, AffineMatrix, Point, apply
from mafs_core.core.matrix_builder import MatrixBuilder
from mafs_core.core.numeric import round_to

from .errors import ViewConfigError


Interval: TypeAlias = tuple[float, float]

# Decimal places kept on the math->pixel scale so floating noise does not jitter frames.
SCALE_PRECISION = 5


class AspectPolicy(str, Enum):
    CONTAIN = "contain"
    STRETCH = "stretch"

    @classmethod
    def parse(cls, value: "AspectPolicy | str") -> "AspectPolicy":
        if isinstance(value, AspectPolicy):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise ViewConfigError(f"unknown aspect policy: {value!r}") from exc


@dataclass(frozen=True)
class ViewBox:
    """Requested visible math-space area, before aspect correction."""

    x: Interval = (-3.0, 3.0)
    y: Interval = (-3.0, 3.0)
    padding: float = 0.5

    def __post_init__(self) -> None:
        if not math.isfinite(self.padding) or self.padding < 0:
            raise ViewConfigError("view box padding must be a finite value >= 0")

    def padded(self) -> tuple[Interval, Interval]:
        p = self.padding
        return ((self.x[0] - p, self.x[1] + p), (self.y[0] - p, self.y[1] + p))


@dataclass(frozen=True)
class ResolvedViewport:
    """Visible math rectangle for one canvas size and camera state. Never mutated."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float
    pixel_width: float
    pixel_height: float
    math_to_pixel: AffineMatrix
    base_x_span: float
    base_y_span: float

    @property
    def math_min(self) -> Point:
        return (self.x_min, self.y_min)

    @property
    def math_max(self) -> Point:
        return (self.x_max, self.y_max)

    @property
    def x_span(self) -> float:
        return self.x_max - self.x_min

    @property
    def y_span(self) -> float:
        return self.y_max - self.y_min

    @property
    def pixel_offset(self) -> Point:
        # Pixel position of the top-left math corner under the pure-scale matrix.
        return apply(self.math_to_pixel, (self.x_min, self.y_max))

    def bounds(self) -> tuple[float, float, float, float]:
        return (self.x_min, self.x_max, self.y_min, self.y_max)


def aspect_corrected_bounds(
    view_box: ViewBox,
    width: float,
    height: float,
    aspect_policy: AspectPolicy = AspectPolicy.CONTAIN,
) -> tuple[Interval, Interval]:
    (x_min, x_max), (y_min, y_max) = view_box.padded()
    if aspect_policy is AspectPolicy.CONTAIN:
        canvas_aspect = width / height
        requested_aspect = _safe_div(x_max - x_min, y_max - y_min)
        if requested_aspect > canvas_aspect:
            y_center = (y_max + y_min) / 2
            half = (x_max - x_min) / canvas_aspect / 2
            y_min, y_max = y_center - half, y_center + half
        else:
            x_center = (x_max + x_min) / 2
            half = (y_max - y_min) * canvas_aspect / 2
            x_min, x_max = x_center - half, x_center + half
    return ((x_min, x_max), (y_min, y_max))


def resolve_viewport(
    view_box: ViewBox,
    width: float,
    height: float,
    aspect_policy: AspectPolicy = AspectPolicy.CONTAIN,
    camera_matrix: AffineMatrix = IDENTITY,
) -> ResolvedViewport:
    """Compute the camera-adjusted visible rectangle and its math->pixel scale.

    `width` and `height` must be finite and > 0; callers render nothing
    instead of calling this with an empty canvas. Zero spans produce
    infinite scales.
    """
    (x_min, x_max), (y_min, y_max) = aspect_corrected_bounds(view_box, width, height, aspect_policy)
    base_x_span = x_max - x_min
    base_y_span = y_max - y_min

    min_x, min_y = apply(camera_matrix, (x_min, y_min))
    max_x, max_y = apply(camera_matrix, (x_max, y_max))
    x_span = max_x - min_x
    y_span = max_y - min_y

    scale_x = round_to(_safe_div(width, x_span), SCALE_PRECISION)
    scale_y = round_to(_safe_div(-height, y_span), SCALE_PRECISION)
    math_to_pixel = MatrixBuilder().scale(scale_x, scale_y).build()

    return ResolvedViewport(
        x_min=min_x,
        x_max=max_x,
        y_min=min_y,
        y_max=max_y,
        pixel_width=float(width),
        pixel_height=float(height),
        math_to_pixel=math_to_pixel,
        base_x_span=base_x_span,
        base_y_span=base_y_span,
    )


def _safe_div(num: float, den: float) -> float:
    # IEEE semantics for a zero span instead of ZeroDivisionError.
    if den == 0:
        if num == 0:
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den
