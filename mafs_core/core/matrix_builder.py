from __future__ import annotations

from .matrix import AffineMatrix, compose, identity, rotate, scale, shear, translate


class MatrixBuilder:
    """Accumulates transforms so they apply to a point in call order.

    Each step left-composes onto the accumulated matrix, so
    `MatrixBuilder().translate(1, 0).scale(2, 2).build()` translates first and
    scales second.
    """

    def __init__(self, seed: AffineMatrix | None = None) -> None:
        self._matrix = seed if seed is not None else identity()

    @classmethod
    def from_matrix(cls, matrix: AffineMatrix) -> "MatrixBuilder":
        return cls(matrix)

    def then(self, matrix: AffineMatrix) -> "MatrixBuilder":
        self._matrix = compose(matrix, self._matrix)
        return self

    def translate(self, x: float, y: float) -> "MatrixBuilder":
        return self.then(translate(x, y))

    def rotate(self, angle: float) -> "MatrixBuilder":
        return self.then(rotate(angle))

    def scale(self, x: float, y: float) -> "MatrixBuilder":
        return self.then(scale(x, y))

    def shear(self, x: float, y: float) -> "MatrixBuilder":
        return self.then(shear(x, y))

    def build(self) -> AffineMatrix:
        return self._matrix
