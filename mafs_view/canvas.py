from __future__ import annotations

import logging
import math
from typing import Callable

from mafs_core.core.matrix import Point

from .camera import CameraController, CameraState, ZoomLimits, ZoomRequest
from .config import CanvasConfig
from .coordinates import CoordinateConverter, scroll_zoom_factor
from .panes import PaneLayout, compute_panes
from .transform_context import TransformContext
from .viewport import ResolvedViewport, ViewBox, resolve_viewport

LOGGER = logging.getLogger(__name__)

ViewportListener = Callable[[ResolvedViewport | None], None]
TapHandler = Callable[[Point], None]


class MathCanvas:
    """Pan/zoom handle for one math-space canvas.

    Owns the camera and the current resolved viewport. The viewport is
    recomputed synchronously on resize, view box, config and camera changes,
    and subscribers receive the new snapshot (or None for an empty canvas).
    """

    def __init__(
        self,
        view_box: ViewBox | None = None,
        width: float = 500.0,
        height: float = 500.0,
        config: CanvasConfig | None = None,
        *,
        on_tap: TapHandler | None = None,
    ) -> None:
        self._view_box = view_box or ViewBox()
        self._config = config or CanvasConfig()
        self._width = float(width)
        self._height = float(height)
        self._on_tap = on_tap
        self._listeners: list[ViewportListener] = []
        self._camera: CameraController | None = None
        self._unsubscribe_camera: Callable[[], None] | None = None
        self._gesture_active = False
        self._viewport: ResolvedViewport | None = None
        self._install_camera(self._config.zoom_limits)
        self._recompute()

    @property
    def camera(self) -> CameraController:
        assert self._camera is not None
        return self._camera

    @property
    def config(self) -> CanvasConfig:
        return self._config

    @property
    def view_box(self) -> ViewBox:
        return self._view_box

    @property
    def size(self) -> tuple[float, float]:
        return (self._width, self._height)

    @property
    def viewport(self) -> ResolvedViewport | None:
        return self._viewport

    @property
    def converter(self) -> CoordinateConverter | None:
        if self._viewport is None:
            return None
        return CoordinateConverter(self._viewport)

    @property
    def gesture_active(self) -> bool:
        return self._gesture_active

    def subscribe(self, listener: ViewportListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def resize(self, width: float, height: float) -> None:
        width = float(width)
        height = float(height)
        if (width, height) == (self._width, self._height):
            return
        LOGGER.debug("canvas resized to %sx%s", width, height)
        self._width = width
        self._height = height
        self._recompute_and_notify()

    def set_view_box(self, view_box: ViewBox) -> None:
        if view_box == self._view_box:
            return
        self._view_box = view_box
        self._recompute_and_notify()

    def set_config(self, config: CanvasConfig) -> None:
        if config == self._config:
            return
        previous_limits = self._config.zoom_limits
        self._config = config
        if config.zoom_limits != previous_limits:
            self._install_camera(config.zoom_limits)
        self._recompute_and_notify()

    def screen_to_math(self, point: Point) -> Point | None:
        converter = self.converter
        if converter is None:
            return None
        return converter.screen_to_math(point)

    def math_to_screen(self, point: Point) -> Point | None:
        converter = self.converter
        if converter is None:
            return None
        return converter.math_to_screen(point)

    def transform_context(self) -> TransformContext | None:
        if self._viewport is None:
            return None
        return TransformContext(view_transform=self._viewport.math_to_pixel)

    def panes(self) -> PaneLayout:
        if self._viewport is None:
            return PaneLayout.empty()
        return compute_panes(self._viewport)

    def on_gesture_start(self) -> None:
        self._gesture_active = True
        self.camera.set_base()

    def on_gesture_update(self, focal_point: Point, cumulative_scale: float, pan_delta: Point) -> None:
        converter = self.converter
        if not self._gesture_active or converter is None:
            return
        pan = converter.pan_delta_to_math(pan_delta) if self._config.pan else None
        zoom = None
        if self._config.zoom_enabled and cumulative_scale != 1.0:
            # Focal point targets what is on screen now, so it uses the live viewport.
            zoom = ZoomRequest(at=converter.screen_to_math(focal_point), scale=cumulative_scale)
        if pan is None and zoom is None:
            return
        self.camera.move(pan=pan, zoom=zoom)

    def on_gesture_end(self) -> None:
        self._gesture_active = False

    def on_scroll(self, delta_y: float, position: Point) -> None:
        converter = self.converter
        if not self._config.zoom_enabled or converter is None:
            return
        at = converter.screen_to_math(position)
        self.camera.set_base()
        self.camera.move(zoom=ZoomRequest(at=at, scale=scroll_zoom_factor(delta_y)))

    def on_tap(self, position: Point) -> Point | None:
        point = self.screen_to_math(position)
        if point is not None and self._on_tap is not None:
            self._on_tap(point)
        return point

    def _install_camera(self, zoom_limits: ZoomLimits) -> None:
        if self._unsubscribe_camera is not None:
            self._unsubscribe_camera()
            LOGGER.debug("recreating camera for zoom limits %s", zoom_limits)
        self._camera = CameraController(zoom_limits)
        self._unsubscribe_camera = self._camera.subscribe(self._on_camera_change)
        self._gesture_active = False

    def _on_camera_change(self, state: CameraState) -> None:
        self._recompute_and_notify()

    def _recompute_and_notify(self) -> None:
        self._recompute()
        for listener in list(self._listeners):
            listener(self._viewport)

    def _recompute(self) -> None:
        if not _valid_dimension(self._width) or not _valid_dimension(self._height):
            if self._viewport is not None:
                LOGGER.warning("canvas size %sx%s is empty; rendering nothing", self._width, self._height)
            self._viewport = None
            return
        self._viewport = resolve_viewport(
            self._config.apply_padding(self._view_box),
            self._width,
            self._height,
            self._config.aspect_policy,
            self.camera.matrix,
        )


def _valid_dimension(value: float) -> bool:
    return math.isfinite(value) and value > 0
