from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TypeAlias

import numpy as np


Point: TypeAlias = tuple[float, float]

DEFAULT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class AffineMatrix:
    """2x3 affine map `(x, y) -> (a*x + c*y + tx, b*x + d*y + ty)`.

    The implicit bottom row is `(0, 0, 1)`.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    def determinant(self) -> float:
        return determinant(self)

    def apply(self, point: Point) -> Point:
        return apply(self, point)

    def inverted(self) -> AffineMatrix | None:
        return invert(self)

    def as_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.tx, self.ty)


IDENTITY = AffineMatrix()


def identity() -> AffineMatrix:
    return IDENTITY


def translate(x: float, y: float) -> AffineMatrix:
    return AffineMatrix(tx=float(x), ty=float(y))


def scale(x: float, y: float) -> AffineMatrix:
    return AffineMatrix(a=float(x), d=float(y))


def rotate(angle: float) -> AffineMatrix:
    """Counter-clockwise rotation by `angle` radians."""
    cos = math.cos(angle)
    sin = math.sin(angle)
    return AffineMatrix(a=cos, b=sin, c=-sin, d=cos)


def shear(x: float, y: float) -> AffineMatrix:
    return AffineMatrix(b=float(y), c=float(x))


def compose(m1: AffineMatrix, m2: AffineMatrix) -> AffineMatrix:
    """Return `m1 ∘ m2`: the map that applies `m2` first, then `m1`."""
    return AffineMatrix(
        a=m1.a * m2.a + m1.c * m2.b,
        b=m1.b * m2.a + m1.d * m2.b,
        c=m1.a * m2.c + m1.c * m2.d,
        d=m1.b * m2.c + m1.d * m2.d,
        tx=m1.a * m2.tx + m1.c * m2.ty + m1.tx,
        ty=m1.b * m2.tx + m1.d * m2.ty + m1.ty,
    )


def determinant(m: AffineMatrix) -> float:
    return m.a * m.d - m.b * m.c


def invert(m: AffineMatrix) -> AffineMatrix | None:
    """Inverse of `m`, or None when the transform is degenerate (determinant 0)."""
    det = determinant(m)
    if det == 0:
        return None
    inv_det = 1.0 / det
    return AffineMatrix(
        a=m.d * inv_det,
        b=-m.b * inv_det,
        c=-m.c * inv_det,
        d=m.a * inv_det,
        tx=(m.c * m.ty - m.d * m.tx) * inv_det,
        ty=(m.b * m.tx - m.a * m.ty) * inv_det,
    )


def apply(m: AffineMatrix, point: Point) -> Point:
    x, y = point
    return (m.a * x + m.c * y + m.tx, m.b * x + m.d * y + m.ty)


def apply_points(m: AffineMatrix, points: np.ndarray) -> np.ndarray:
    """Vectorized `apply` over an `(N, 2)` array of points."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"points must have shape (N, 2), got {arr.shape}")
    out = np.empty_like(arr)
    out[:, 0] = m.a * arr[:, 0] + m.c * arr[:, 1] + m.tx
    out[:, 1] = m.b * arr[:, 0] + m.d * arr[:, 1] + m.ty
    return out


def is_close(m1: AffineMatrix, m2: AffineMatrix, tol: float = DEFAULT_TOLERANCE) -> bool:
    return all(abs(p - q) <= tol for p, q in zip(m1.as_tuple(), m2.as_tuple(), strict=True))


def to_css(m: AffineMatrix) -> str:
    return f"matrix({m.a}, {m.b}, {m.c}, {m.d}, {m.tx}, {m.ty})"
