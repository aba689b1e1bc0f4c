from mafs_view.api import canvas
from mafs_view.camera import CameraController, CameraState, ZoomLimits, ZoomRequest
from mafs_view.canvas import MathCanvas
from mafs_view.config import CanvasConfig, load_canvas_config, load_view_box
from mafs_view.coordinates import CoordinateConverter, scroll_zoom_factor
from mafs_view.errors import ViewConfigError
from mafs_view.panes import PaneLayout, compute_panes
from mafs_view.transform_context import TransformContext
from mafs_view.viewport import AspectPolicy, ResolvedViewport, ViewBox, resolve_viewport

__all__ = [
    "AspectPolicy",
    "CameraController",
    "CameraState",
    "CanvasConfig",
    "CoordinateConverter",
    "MathCanvas",
    "PaneLayout",
    "ResolvedViewport",
    "TransformContext",
    "ViewBox",
    "ViewConfigError",
    "ZoomLimits",
    "ZoomRequest",
    "canvas",
    "compute_panes",
    "load_canvas_config",
    "load_view_box",
    "resolve_viewport",
    "scroll_zoom_factor",
]
