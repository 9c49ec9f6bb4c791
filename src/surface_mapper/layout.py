"""Quad helpers used to build or adjust surface targets before solving."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from surface_mapper.geometry.primitives import Point2D, Quad


class FullscreenFit(str, Enum):
    STRETCH = "stretch"
    CONTAIN = "contain"
    COVER = "cover"


class FullscreenAlign(str, Enum):
    CENTER = "center"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


def quad_from_rect(x: float, y: float, width: float, height: float) -> Quad:
    """Clockwise quad for an axis-aligned rectangle, starting top-left."""
    return Quad(
        Point2D(x, y),
        Point2D(x + width, y),
        Point2D(x + width, y + height),
        Point2D(x, y + height),
    )


def centroid(quad: Quad) -> Point2D:
    return Point2D(
        sum(point.x for point in quad) / len(quad),
        sum(point.y for point in quad) / len(quad),
    )


def scale_quad(quad: Quad, scale_x: float, scale_y: float, origin: Optional[Point2D] = None) -> Quad:
    """Scale each corner's offset from ``origin`` (the centroid by default)."""
    if scale_x == 1 and scale_y == 1:
        return quad
    center = origin if origin is not None else centroid(quad)
    return Quad(
        *(
            Point2D(
                center.x + (point.x - center.x) * scale_x,
                center.y + (point.y - center.y) * scale_y,
            )
            for point in quad
        )
    )


def fullscreen_quad(
    stage_width: float,
    stage_height: float,
    content_width: float,
    content_height: float,
    fit: Optional[FullscreenFit] = None,
    align: Optional[FullscreenAlign] = None,
) -> Quad:
    """Target quad placing content on the stage according to ``fit`` and ``align``.

    Both default to unset: an unset ``fit`` stretches to the stage and an
    unset ``align`` anchors the top-left corner. Non-positive content sizes
    fall back to the stage size on that axis.
    """
    fit = FullscreenFit(fit) if fit is not None else FullscreenFit.STRETCH
    align = FullscreenAlign(align) if align is not None else FullscreenAlign.TOP_LEFT

    safe_width = content_width if content_width > 0 else stage_width
    safe_height = content_height if content_height > 0 else stage_height

    target_width = stage_width
    target_height = stage_height
    if fit is not FullscreenFit.STRETCH:
        ratios = (stage_width / safe_width, stage_height / safe_height)
        scale = min(ratios) if fit is FullscreenFit.CONTAIN else max(ratios)
        target_width = safe_width * scale
        target_height = safe_height * scale

    spare_x = stage_width - target_width
    spare_y = stage_height - target_height
    offsets = {
        FullscreenAlign.CENTER: (spare_x / 2, spare_y / 2),
        FullscreenAlign.TOP_LEFT: (0.0, 0.0),
        FullscreenAlign.TOP_RIGHT: (spare_x, 0.0),
        FullscreenAlign.BOTTOM_LEFT: (0.0, spare_y),
        FullscreenAlign.BOTTOM_RIGHT: (spare_x, spare_y),
    }
    offset_x, offset_y = offsets[align]
    return quad_from_rect(offset_x, offset_y, target_width, target_height)
