"""Geometry primitives, quad validation and homography math."""

from .homography import (  # noqa: F401
    W_EPSILON,
    project_point,
    project_points,
    rect_corners,
    solve_linear_system,
    solve_rect_to_quad,
    warp_polygon,
)
from .primitives import Matrix3x3, Matrix4x4, Point2D, Polygon, Quad  # noqa: F401
from .validation import (  # noqa: F401
    DEFAULT_EPSILON,
    has_collinear_triplet,
    has_duplicate_points,
    is_clockwise,
    is_self_intersecting,
    quad_area,
    segments_intersect,
    validate_quad,
)
