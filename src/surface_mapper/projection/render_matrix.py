"""Lift 3x3 homographies into the 4x4 form consumed by 3D-capable compositors."""

from __future__ import annotations

import numpy as np

from surface_mapper.errors import Err, ErrorKind, MappingError, Ok, Result
from surface_mapper.geometry.homography import W_EPSILON
from surface_mapper.geometry.primitives import Matrix3x3, Matrix4x4, Point2D, PointLike


def embed_homography(homography: Matrix3x3) -> Matrix4x4:
    """Embed ``homography`` so that (x, y, 0, 1) maps with a divide on w.

    Row/column layout::

        [ h00 h01 0 h02 ]
        [ h10 h11 0 h12 ]
        [ 0   0   1 0   ]
        [ h20 h21 0 h22 ]

    The result is stored column-major.
    """
    h00, h01, h02, h10, h11, h12, h20, h21, h22 = homography.values
    return Matrix4x4(
        (
            h00, h10, 0.0, h20,
            h01, h11, 0.0, h21,
            0.0, 0.0, 1.0, 0.0,
            h02, h12, 0.0, h22,
        )
    )


def apply_matrix4(matrix: Matrix4x4, point: PointLike, *, w_epsilon: float = W_EPSILON) -> Result[Point2D]:
    p = Point2D.of(point)
    x, y, _, w = matrix.to_array() @ np.array([p.x, p.y, 0.0, 1.0])
    if abs(w) < w_epsilon:
        return Err(
            MappingError(
                kind=ErrorKind.DEGENERATE_PROJECTION,
                message=f"Matrix w is ~0 at {p.as_tuple()} (degenerate transform)",
            )
        )
    return Ok(Point2D(float(x / w), float(y / w)))


def css_matrix3d(homography: Matrix3x3) -> str:
    """CSS ``transform`` value for an element sized to the source rectangle."""
    return embed_homography(homography).to_css()
