"""Render-matrix embedding and per-surface stage mapping."""

from .mapper import SurfaceMapper, SurfaceTransform  # noqa: F401
from .render_matrix import apply_matrix4, css_matrix3d, embed_homography  # noqa: F401
