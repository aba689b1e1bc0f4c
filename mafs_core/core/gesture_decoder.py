from __future__ import annotations

import logging
import math
from typing import Protocol

from .events import InputEvent
from .matrix import Point
from . import vec

LOGGER = logging.getLogger(__name__)


class GestureSink(Protocol):
    def on_gesture_start(self) -> None:
        ...

    def on_gesture_update(self, focal_point: Point, cumulative_scale: float, pan_delta: Point) -> None:
        ...

    def on_gesture_end(self) -> None:
        ...

    def on_scroll(self, delta_y: float, position: Point) -> None:
        ...

    def on_tap(self, position: Point) -> object:
        ...


class GestureDecoder:
    """Turns raw pointer events into start/update/end/scroll/tap calls.

    Pan deltas and scale factors are cumulative since the current gesture
    started. A change in the number of active pointers restarts the gesture
    so the receiver re-freezes its base frame.
    """

    def __init__(self, sink: GestureSink, tap_slop_px: float = 4.0) -> None:
        if tap_slop_px < 0:
            raise ValueError("tap_slop_px must be >= 0")
        self._sink = sink
        self._tap_slop_px = tap_slop_px
        self._pointers: dict[int, Point] = {}
        self._active = False
        self._start_focal: Point = (0.0, 0.0)
        self._start_span = 0.0
        self._tap_origin: Point | None = None

    @property
    def active(self) -> bool:
        return self._active

    @property
    def pointer_count(self) -> int:
        return len(self._pointers)

    def handle(self, event: InputEvent) -> None:
        if event.event_type == "wheel":
            if event.delta_y is not None:
                self._sink.on_scroll(float(event.delta_y), event.position)
            return
        if event.event_type == "pointer_down":
            self._on_down(event)
        elif event.event_type == "pointer_move":
            self._on_move(event)
        elif event.event_type == "pointer_up":
            self._on_up(event, cancelled=False)
        elif event.event_type == "pointer_cancel":
            self._on_up(event, cancelled=True)

    def _on_down(self, event: InputEvent) -> None:
        self._pointers[event.pointer_id] = event.position
        self._tap_origin = event.position if len(self._pointers) == 1 else None
        self._restart()

    def _on_move(self, event: InputEvent) -> None:
        if event.pointer_id not in self._pointers:
            return
        self._pointers[event.pointer_id] = event.position
        if self._tap_origin is not None and vec.dist(self._tap_origin, event.position) > self._tap_slop_px:
            self._tap_origin = None
        if not self._active:
            return
        focal = self._focal()
        span = self._span(focal)
        cumulative_scale = span / self._start_span if self._start_span > 0 else 1.0
        self._sink.on_gesture_update(focal, cumulative_scale, vec.sub(focal, self._start_focal))

    def _on_up(self, event: InputEvent, *, cancelled: bool) -> None:
        if self._pointers.pop(event.pointer_id, None) is None:
            return
        tap_origin = self._tap_origin
        self._end()
        if self._pointers:
            self._tap_origin = None
            self._restart()
            return
        self._tap_origin = None
        if tap_origin is not None and not cancelled:
            self._sink.on_tap(event.position)

    def _restart(self) -> None:
        self._end()
        self._start_focal = self._focal()
        self._start_span = self._span(self._start_focal)
        self._active = True
        LOGGER.debug("gesture start with %d pointer(s)", len(self._pointers))
        self._sink.on_gesture_start()

    def _end(self) -> None:
        if not self._active:
            return
        self._active = False
        LOGGER.debug("gesture end")
        self._sink.on_gesture_end()

    def _focal(self) -> Point:
        n = len(self._pointers)
        if n == 0:
            return (0.0, 0.0)
        sx = math.fsum(p[0] for p in self._pointers.values())
        sy = math.fsum(p[1] for p in self._pointers.values())
        return (sx / n, sy / n)

    def _span(self, focal: Point) -> float:
        if len(self._pointers) < 2:
            return 0.0
        return math.fsum(vec.dist(p, focal) for p in self._pointers.values()) / len(self._pointers)
