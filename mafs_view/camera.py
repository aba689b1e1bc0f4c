from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import math
from typing import Callable

from mafs_core.core.matrix import IDENTITY, AffineMatrix, Point
from mafs_core.core.matrix_builder import MatrixBuilder
from mafs_core.core.numeric import clamp

from .errors import ViewConfigError

LOGGER = logging.getLogger(__name__)

DEFAULT_MIN_ZOOM = 0.5
DEFAULT_MAX_ZOOM = 5.0


@dataclass(frozen=True)
class ZoomLimits:
    min: float = DEFAULT_MIN_ZOOM
    max: float = DEFAULT_MAX_ZOOM

    def __post_init__(self) -> None:
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise ViewConfigError("zoom limits must be finite")
        if not 0 < self.min <= 1:
            raise ViewConfigError(f"zoom min must be in (0, 1], got {self.min}")
        if self.max < 1:
            raise ViewConfigError(f"zoom max must be >= 1, got {self.max}")

    @classmethod
    def default(cls) -> "ZoomLimits":
        return cls(DEFAULT_MIN_ZOOM, DEFAULT_MAX_ZOOM)

    @classmethod
    def disabled(cls) -> "ZoomLimits":
        return cls(1.0, 1.0)

    @property
    def enabled(self) -> bool:
        return self.min < 1 or self.max > 1


@dataclass(frozen=True)
class ZoomRequest:
    """Magnify by `scale` (> 1 zooms in) while keeping math point `at` fixed."""

    at: Point
    scale: float


@dataclass(frozen=True)
class CameraState:
    base_matrix: AffineMatrix = IDENTITY
    accumulated_matrix: AffineMatrix = IDENTITY
    base_zoom: float = 1.0
    zoom: float = 1.0


CameraListener = Callable[[CameraState], None]


class CameraController:
    """Accumulated pan/zoom for one canvas.

    The matrix maps the aspect-corrected base rectangle onto the visible
    rectangle. `set_base()` freezes the current matrix at gesture start and
    every `move()` is computed relative to that frozen base, so an abandoned
    gesture needs no cleanup.
    """

    def __init__(self, zoom_limits: ZoomLimits | None = None) -> None:
        self._zoom_limits = zoom_limits or ZoomLimits.disabled()
        self._state = CameraState()
        self._listeners: list[CameraListener] = []

    @property
    def zoom_limits(self) -> ZoomLimits:
        return self._zoom_limits

    @property
    def state(self) -> CameraState:
        return self._state

    @property
    def matrix(self) -> AffineMatrix:
        return self._state.accumulated_matrix

    @property
    def base_matrix(self) -> AffineMatrix:
        return self._state.base_matrix

    @property
    def cumulative_zoom(self) -> float:
        return self._state.zoom

    def subscribe(self, listener: CameraListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: CameraListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_base(self) -> None:
        state = self._state
        self._state = replace(state, base_matrix=state.accumulated_matrix, base_zoom=state.zoom)

    def move(self, *, pan: Point | None = None, zoom: ZoomRequest | None = None) -> None:
        state = self._state
        builder = MatrixBuilder()
        new_zoom = state.base_zoom
        # Pan is in base-rectangle units and goes through the base zoom.
        if pan is not None:
            builder.translate(pan[0], pan[1])
        builder.then(state.base_matrix)
        if zoom is not None:
            # Soft clamp: shrink this call's factor so the cumulative zoom lands on the limit.
            new_zoom = clamp(state.base_zoom * zoom.scale, self._zoom_limits.min, self._zoom_limits.max)
            factor = new_zoom / state.base_zoom
            if factor != 1.0:
                ax, ay = zoom.at
                builder.translate(-ax, -ay).scale(1.0 / factor, 1.0 / factor).translate(ax, ay)
        self._commit(replace(state, accumulated_matrix=builder.build(), zoom=new_zoom))

    def reset(self) -> None:
        LOGGER.debug("camera reset")
        self._commit(CameraState())

    def _commit(self, new_state: CameraState) -> None:
        changed = new_state.accumulated_matrix != self._state.accumulated_matrix
        self._state = new_state
        if changed:
            for listener in list(self._listeners):
                listener(new_state)
