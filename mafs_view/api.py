from __future__ import annotations

import math

from .camera import ZoomLimits
from .canvas import MathCanvas, TapHandler
from .config import CanvasConfig
from .errors import ViewConfigError
from .viewport import AspectPolicy, ViewBox

DEFAULT_HEIGHT = 500.0


def canvas(
    view_box: ViewBox | None = None,
    *,
    width: float | None = None,
    height: float | None = None,
    pan: bool = True,
    zoom: bool | ZoomLimits | None = None,
    aspect_policy: AspectPolicy | str = AspectPolicy.CONTAIN,
    padding: float | None = None,
    on_tap: TapHandler | None = None,
) -> MathCanvas:
    """Create a canvas; a missing dimension follows the padded view box aspect ratio."""
    view_box = view_box or ViewBox()
    config = CanvasConfig(pan=pan, zoom=zoom, aspect_policy=AspectPolicy.parse(aspect_policy), padding=padding)
    if width is None or height is None:
        (x_min, x_max), (y_min, y_max) = config.apply_padding(view_box).padded()
        x_span = x_max - x_min
        y_span = y_max - y_min
        if not (math.isfinite(x_span) and math.isfinite(y_span) and x_span > 0 and y_span > 0):
            raise ViewConfigError(
                f"cannot derive canvas size from a padded view box with spans {x_span}x{y_span}; pass width and height"
            )
        aspect_ratio = x_span / y_span
        if width is None and height is None:
            height = DEFAULT_HEIGHT
        if width is None:
            if height <= 0:
                raise ValueError("height must be > 0")
            width = max(1.0, round(height * aspect_ratio))
        else:
            if width <= 0:
                raise ValueError("width must be > 0")
            height = max(1.0, round(width / aspect_ratio))
    assert width is not None and height is not None
    return MathCanvas(view_box, width, height, config, on_tap=on_tap)
