from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from pathlib import Path
import tomllib
from typing import Any, Union

from .camera import ZoomLimits
from .errors import ViewConfigError
from .viewport import AspectPolicy, Interval, ViewBox

LOGGER = logging.getLogger(__name__)

ZoomOption = Union[bool, ZoomLimits, None]


def resolve_zoom_limits(zoom: ZoomOption) -> ZoomLimits:
    """`None`/`False` disable zoom (fixed at 1), `True` uses the default limits."""
    if zoom is None or zoom is False:
        return ZoomLimits.disabled()
    if zoom is True:
        return ZoomLimits.default()
    if isinstance(zoom, ZoomLimits):
        return zoom
    raise ViewConfigError(f"zoom must be a bool, None or ZoomLimits, got {type(zoom).__name__}")


@dataclass(frozen=True)
class CanvasConfig:
    pan: bool = True
    zoom: ZoomOption = None
    aspect_policy: AspectPolicy = AspectPolicy.CONTAIN
    # Overrides the view box padding when set.
    padding: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.pan, bool):
            raise ViewConfigError("pan must be a bool")
        resolve_zoom_limits(self.zoom)
        object.__setattr__(self, "aspect_policy", AspectPolicy.parse(self.aspect_policy))
        if self.padding is not None and (not math.isfinite(self.padding) or self.padding < 0):
            raise ViewConfigError("padding must be a finite value >= 0")

    @property
    def zoom_enabled(self) -> bool:
        return self.zoom is True or isinstance(self.zoom, ZoomLimits)

    @property
    def zoom_limits(self) -> ZoomLimits:
        return resolve_zoom_limits(self.zoom)

    def apply_padding(self, view_box: ViewBox) -> ViewBox:
        if self.padding is None or self.padding == view_box.padding:
            return view_box
        return ViewBox(x=view_box.x, y=view_box.y, padding=self.padding)


def load_canvas_config(path: str | Path) -> CanvasConfig:
    raw = _read_toml(path)
    table = raw.get("canvas", {})
    if not isinstance(table, dict):
        raise ViewConfigError("[canvas] must be a table")
    pan = table.get("pan", True)
    if not isinstance(pan, bool):
        raise ViewConfigError("canvas.pan must be a boolean")
    padding = table.get("padding")
    config = CanvasConfig(
        pan=pan,
        zoom=_coerce_zoom(table.get("zoom")),
        aspect_policy=AspectPolicy.parse(table.get("aspect_policy", AspectPolicy.CONTAIN.value)),
        padding=None if padding is None else _coerce_float(padding, "canvas.padding"),
    )
    LOGGER.debug("loaded canvas config from %s: %s", path, config)
    return config


def load_view_box(path: str | Path) -> ViewBox | None:
    raw = _read_toml(path)
    table = raw.get("view_box")
    if table is None:
        return None
    if not isinstance(table, dict):
        raise ViewConfigError("[view_box] must be a table")
    defaults = ViewBox()
    return ViewBox(
        x=_coerce_interval(table.get("x", defaults.x), "view_box.x"),
        y=_coerce_interval(table.get("y", defaults.y), "view_box.y"),
        padding=_coerce_float(table.get("padding", defaults.padding), "view_box.padding"),
    )


def _read_toml(path: str | Path) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"canvas config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ViewConfigError(f"invalid TOML in {config_path}: {exc}") from exc


def _coerce_zoom(value: object) -> ZoomOption:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, dict):
        unknown = set(value) - {"min", "max"}
        if unknown:
            raise ViewConfigError(f"canvas.zoom has unknown keys: {sorted(unknown)}")
        return ZoomLimits(
            min=_coerce_float(value.get("min", ZoomLimits.default().min), "canvas.zoom.min"),
            max=_coerce_float(value.get("max", ZoomLimits.default().max), "canvas.zoom.max"),
        )
    raise ViewConfigError("canvas.zoom must be a boolean or a {min, max} table")


def _coerce_float(value: object, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ViewConfigError(f"{label} must be a number")
    return float(value)


def _coerce_interval(value: object, label: str) -> Interval:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ViewConfigError(f"{label} must be a [min, max] pair")
    return (_coerce_float(value[0], label), _coerce_float(value[1], label))
