"""Homography utilities for mapping a surface rectangle onto a stage quad."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple, Union

import cv2
import numpy as np

from surface_mapper.errors import (
    Err,
    ErrorKind,
    InternalConsistencyError,
    MappingError,
    Ok,
    Result,
)
from surface_mapper.geometry.primitives import Matrix3x3, Point2D, PointLike, Quad
from surface_mapper.geometry.validation import DEFAULT_EPSILON, validate_quad

W_EPSILON = 1e-12
CONSISTENCY_TOLERANCE = 1e-6


def rect_corners(width: float, height: float) -> Quad:
    return Quad(
        Point2D(0.0, 0.0),
        Point2D(float(width), 0.0),
        Point2D(float(width), float(height)),
        Point2D(0.0, float(height)),
    )


def solve_linear_system(matrix: np.ndarray, rhs: np.ndarray) -> Result[np.ndarray]:
    """Solve ``matrix @ x = rhs`` by Gauss-Jordan elimination with partial pivoting.

    Args:
        matrix: Square array of shape (N, N).
        rhs: Array of shape (N,).

    Returns:
        ``Ok`` with the solution vector, or ``Err`` of kind ``SINGULAR_SYSTEM``
        when some column has no non-zero pivot left.
    """
    a = np.array(matrix, dtype=np.float64)
    b = np.array(rhs, dtype=np.float64)
    n = a.shape[0]

    for col in range(n):
        pivot_row = col + int(np.argmax(np.abs(a[col:, col])))
        if a[pivot_row, col] == 0:
            return Err(
                MappingError(
                    kind=ErrorKind.SINGULAR_SYSTEM,
                    message=f"Homography system is singular (column {col} has no pivot)",
                )
            )
        if pivot_row != col:
            a[[col, pivot_row]] = a[[pivot_row, col]]
            b[[col, pivot_row]] = b[[pivot_row, col]]

        pivot = a[col, col]
        a[col, col:] /= pivot
        b[col] /= pivot

        factors = a[:, col].copy()
        factors[col] = 0.0
        a[:, col:] -= np.outer(factors, a[col, col:])
        b -= factors * b[col]

    return Ok(b)


def build_rect_to_quad_system(width: float, height: float, quad: Quad) -> Tuple[np.ndarray, np.ndarray]:
    """Assemble the 8x8 system for h00..h21 with h22 fixed to 1."""
    rows = []
    rhs = []
    for source, target in zip(rect_corners(width, height), quad):
        sx, sy = source.x, source.y
        tx, ty = target.x, target.y
        rows.append([sx, sy, 1.0, 0.0, 0.0, 0.0, -tx * sx, -tx * sy])
        rhs.append(tx)
        rows.append([0.0, 0.0, 0.0, sx, sy, 1.0, -ty * sx, -ty * sy])
        rhs.append(ty)
    return np.array(rows, dtype=np.float64), np.array(rhs, dtype=np.float64)


def solve_rect_to_quad(
    width: float,
    height: float,
    quad: Quad,
    *,
    epsilon: float = DEFAULT_EPSILON,
    check_consistency: bool = True,
) -> Result[Matrix3x3]:
    """Compute the homography taking the ``width x height`` rectangle onto ``quad``.

    The rectangle corners (0,0), (W,0), (W,H), (0,H) map to quad corners
    p0..p3 in that order. With ``check_consistency`` the four corners are
    reprojected and a mismatch raises ``InternalConsistencyError``.
    """
    if width <= 0 or height <= 0:
        return Err(
            MappingError(
                kind=ErrorKind.INVALID_DIMENSIONS,
                message=f"Width and height must be positive, got {width}x{height}",
            )
        )

    validation = validate_quad(quad, epsilon)
    if not validation.ok:
        return validation

    matrix, rhs = build_rect_to_quad_system(width, height, quad)
    solved = solve_linear_system(matrix, rhs)
    if not solved.ok:
        return solved

    h = solved.value
    homography = Matrix3x3(tuple(float(value) for value in h) + (1.0,))

    if check_consistency:
        _check_rect_to_quad(width, height, quad, homography)
    return Ok(homography)


def _check_rect_to_quad(width: float, height: float, quad: Quad, homography: Matrix3x3) -> None:
    for source, target in zip(rect_corners(width, height), quad):
        mapped = project_point(homography, source)
        if not mapped.ok:
            raise InternalConsistencyError(
                f"Corner {source.as_tuple()} does not project through the solved homography"
            )
        point = mapped.value
        if abs(point.x - target.x) > CONSISTENCY_TOLERANCE or abs(point.y - target.y) > CONSISTENCY_TOLERANCE:
            raise InternalConsistencyError(
                f"Corner {source.as_tuple()} mapped to {point.as_tuple()}, expected {target.as_tuple()}"
            )


def project_point(homography: Matrix3x3, point: PointLike, *, w_epsilon: float = W_EPSILON) -> Result[Point2D]:
    """Map ``point`` through ``homography`` including the perspective divide."""
    p = Point2D.of(point)
    h = homography.values
    x_prime = h[0] * p.x + h[1] * p.y + h[2]
    y_prime = h[3] * p.x + h[4] * p.y + h[5]
    w_prime = h[6] * p.x + h[7] * p.y + h[8]

    if abs(w_prime) < w_epsilon:
        return Err(_degenerate(p))
    return Ok(Point2D(x_prime / w_prime, y_prime / w_prime))


def project_points(
    homography: Matrix3x3,
    points: Union[np.ndarray, Sequence[PointLike]],
    *,
    w_epsilon: float = W_EPSILON,
) -> Result[Tuple[Point2D, ...]]:
    """Vectorised ``project_point``; fails if any point hits the vanishing line."""
    if isinstance(points, np.ndarray):
        coords = points.astype(np.float64).reshape(-1, 2)
    else:
        coords = np.array([Point2D.of(point).as_tuple() for point in points], dtype=np.float64).reshape(-1, 2)

    homogeneous = np.hstack([coords, np.ones((coords.shape[0], 1))])
    mapped = homogeneous @ homography.to_array().T
    w = mapped[:, 2]
    degenerate = np.flatnonzero(np.abs(w) < w_epsilon)
    if degenerate.size:
        x, y = coords[degenerate[0]]
        return Err(_degenerate(Point2D(float(x), float(y))))

    xy = mapped[:, :2] / w[:, None]
    return Ok(tuple(Point2D(float(x), float(y)) for x, y in xy))


def warp_polygon(
    points: Iterable[PointLike],
    homography: Union[Matrix3x3, np.ndarray],
    *,
    w_epsilon: float = W_EPSILON,
) -> np.ndarray:
    """Apply a homography to polygon vertices with OpenCV.

    Raises:
        DegenerateProjectionError: a vertex lies on the vanishing line, where
            ``cv2.perspectiveTransform`` would silently emit (0, 0).
    """
    matrix = homography.to_array() if isinstance(homography, Matrix3x3) else np.asarray(homography, dtype=np.float64)
    pts = np.array([Point2D.of(point).as_tuple() for point in points], dtype=np.float64).reshape(-1, 2)
    w = pts @ matrix[2, :2] + matrix[2, 2]
    degenerate = np.flatnonzero(np.abs(w) < w_epsilon)
    if degenerate.size:
        x, y = pts[degenerate[0]]
        raise _degenerate(Point2D(float(x), float(y))).to_exception()
    warped = cv2.perspectiveTransform(pts.reshape(-1, 1, 2), matrix)
    return warped.reshape(-1, 2)


def _degenerate(point: Point2D) -> MappingError:
    return MappingError(
        kind=ErrorKind.DEGENERATE_PROJECTION,
        message=f"Homography w is ~0 at {point.as_tuple()} (degenerate transform)",
    )
