from .events import InputEvent
from .gesture_decoder import GestureDecoder, GestureSink
from .matrix import (
    IDENTITY,
    AffineMatrix,
    Point,
    apply,
    apply_points,
    compose,
    determinant,
    identity,
    invert,
    is_close,
    rotate,
    scale,
    shear,
    to_css,
    translate,
)
from .matrix_builder import MatrixBuilder

__all__ = [
    "AffineMatrix",
    "GestureDecoder",
    "GestureSink",
    "IDENTITY",
    "InputEvent",
    "MatrixBuilder",
    "Point",
    "apply",
    "apply_points",
    "compose",
    "determinant",
    "identity",
    "invert",
    "is_close",
    "rotate",
    "scale",
    "shear",
    "to_css",
    "translate",
]
