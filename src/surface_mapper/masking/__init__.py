"""Mask rasterization for surface polygons."""

from .mask_builder import MaskBuilder, MaskBuildResult  # noqa: F401
