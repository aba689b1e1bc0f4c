from __future__ import annotations

from dataclasses import dataclass
import logging

from mafs_core.core.matrix import IDENTITY, AffineMatrix, Point, apply, compose, invert
from mafs_core.core.matrix_builder import MatrixBuilder

from .coordinates import CoordinateConverter

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformContext:
    """User transform stack plus the math->pixel view transform.

    `user_transform` positions drawables inside math space (nested
    transforms compose onto it); `view_transform` is the viewport's pure
    scale into pixel space.
    """

    user_transform: AffineMatrix = IDENTITY
    view_transform: AffineMatrix = IDENTITY

    @property
    def combined(self) -> AffineMatrix:
        return compose(self.view_transform, self.user_transform)

    def nested(
        self,
        *,
        matrix: AffineMatrix | None = None,
        translate: Point | None = None,
        scale: Point | None = None,
        rotate: float | None = None,
        shear: Point | None = None,
    ) -> "TransformContext":
        """Child context; steps apply in the order matrix, translate, scale,
        rotate, shear, then this context's user transform."""
        builder = MatrixBuilder()
        if matrix is not None:
            builder.then(matrix)
        if translate is not None:
            builder.translate(*translate)
        if scale is not None:
            builder.scale(*scale)
        if rotate is not None:
            builder.rotate(rotate)
        if shear is not None:
            builder.shear(*shear)
        builder.then(self.user_transform)
        return TransformContext(user_transform=builder.build(), view_transform=self.view_transform)

    def user_to_math(self, point: Point) -> Point:
        return apply(self.user_transform, point)

    def screen_to_user(self, point: Point, converter: CoordinateConverter) -> Point | None:
        """Screen point expressed in this context's user space.

        Returns None when the user transform is degenerate; callers skip the
        conversion for that frame.
        """
        inverse = invert(self.user_transform)
        if inverse is None:
            LOGGER.warning("user transform is not invertible; skipping screen->user conversion")
            return None
        return apply(inverse, converter.screen_to_math(point))
