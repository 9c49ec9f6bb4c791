"""Perspective mapping of surface rectangles onto stage quads."""

from .config import StageConfig, load_config  # noqa: F401
from .errors import Err, ErrorKind, MappingError, Ok, QuadDefect  # noqa: F401
from .geometry import (  # noqa: F401
    Matrix3x3,
    Matrix4x4,
    Point2D,
    Polygon,
    Quad,
    project_point,
    solve_rect_to_quad,
    validate_quad,
)
from .layout import FullscreenAlign, FullscreenFit, centroid, fullscreen_quad, quad_from_rect, scale_quad  # noqa: F401
from .projection import SurfaceMapper, embed_homography  # noqa: F401
