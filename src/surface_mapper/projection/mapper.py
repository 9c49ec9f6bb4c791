"""Keeps per-surface homographies for a stage and renders surface content through them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

import cv2
import numpy as np
from loguru import logger

from surface_mapper.config import MathConfig, StageConfig
from surface_mapper.errors import Ok, Result
from surface_mapper.geometry import Matrix3x3, Point2D, Polygon, Quad, project_points, solve_rect_to_quad
from surface_mapper.masking import MaskBuilder
from surface_mapper.projection.render_matrix import css_matrix3d

GeometryKey = Tuple[float, float, Quad]


@dataclass(slots=True)
class SurfaceTransform:
    id: str
    width: float
    height: float
    quad: Quad
    homography: Matrix3x3
    mask: Optional[Polygon] = None
    visible: bool = True

    @property
    def key(self) -> GeometryKey:
        return (self.width, self.height, self.quad)

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return max(1, int(round(self.width))), max(1, int(round(self.height)))


class SurfaceMapper:
    """Projects surface content through cached homographies into stage image space.

    A surface is re-solved only when its ``(width, height, quad)`` changes. A
    rejected update leaves the previous transform in place.
    """

    def __init__(
        self,
        stage_size: Tuple[int, int],
        math_config: Optional[MathConfig] = None,
        mask_builder: Optional[MaskBuilder] = None,
    ) -> None:
        self._stage_size = (int(stage_size[0]), int(stage_size[1]))
        self._math = math_config or MathConfig()
        self._mask_builder = mask_builder or MaskBuilder()
        self._surfaces: Dict[str, SurfaceTransform] = {}

    @classmethod
    def from_config(cls, config: StageConfig) -> "SurfaceMapper":
        mapper = cls((config.stage.width, config.stage.height), math_config=config.math)
        for surface in config.surfaces:
            result = mapper.set_surface(
                surface.id,
                surface.width,
                surface.height,
                surface.target_quad(config.stage),
                mask=surface.mask_polygon(),
                visible=surface.visible,
            )
            if not result.ok:
                logger.error("Surface {} has unusable geometry: {}", surface.id, result.error.message)
                result.unwrap()
        logger.info("Surface mapper initialized with {} surface(s)", len(mapper.surface_ids()))
        return mapper

    @property
    def stage_size(self) -> Tuple[int, int]:
        return self._stage_size

    def set_surface(
        self,
        surface_id: str,
        width: float,
        height: float,
        quad: Quad,
        *,
        mask: Optional[Polygon] = None,
        visible: bool = True,
    ) -> Result[Matrix3x3]:
        key: GeometryKey = (float(width), float(height), quad)
        current = self._surfaces.get(surface_id)
        if current is not None and current.key == key:
            current.mask = mask
            current.visible = visible
            return Ok(current.homography)

        result = solve_rect_to_quad(
            width,
            height,
            quad,
            epsilon=self._math.epsilon,
            check_consistency=self._math.consistency_check,
        )
        if not result.ok:
            logger.debug("Geometry update for {} rejected: {}", surface_id, result.error.message)
            return result

        self._surfaces[surface_id] = SurfaceTransform(
            id=surface_id,
            width=float(width),
            height=float(height),
            quad=quad,
            homography=result.value,
            mask=mask,
            visible=visible,
        )
        logger.debug("Homography for {} solved", surface_id)
        return result

    def remove_surface(self, surface_id: str) -> None:
        del self._surfaces[surface_id]

    def surface_ids(self) -> List[str]:
        return list(self._surfaces.keys())

    def surface(self, surface_id: str) -> SurfaceTransform:
        return self._surfaces[surface_id]

    def homography(self, surface_id: str) -> Matrix3x3:
        return self._surfaces[surface_id].homography

    def css_transform(self, surface_id: str) -> str:
        return css_matrix3d(self._surfaces[surface_id].homography)

    def project_polygon(self, polygon: Polygon, surface_id: str) -> Result[Tuple[Point2D, ...]]:
        """Map polygon vertices from surface space onto the stage."""
        homography = self._surfaces[surface_id].homography
        return project_points(homography, polygon.points, w_epsilon=self._math.w_epsilon)

    def warp_content(self, image: np.ndarray, surface_id: str) -> np.ndarray:
        """Warp ``image`` (any resolution) onto the stage through the surface quad."""
        surface = self._surfaces[surface_id]
        image_height, image_width = image.shape[:2]
        to_surface = np.diag([surface.width / image_width, surface.height / image_height, 1.0])
        matrix = surface.homography.to_array() @ to_surface
        return cv2.warpPerspective(image, matrix, dsize=self._stage_size, flags=cv2.INTER_LINEAR)

    def warp_mask(self, surface_id: str) -> np.ndarray:
        """Stage-space coverage of a surface, honouring its mask polygon."""
        surface = self._surfaces[surface_id]
        width, height = surface.pixel_size
        if surface.mask is None:
            coverage = np.full((height, width), 255, dtype=np.uint8)
        else:
            coverage = self._mask_builder.build((height, width), [surface.mask]).composite_mask
        return self.warp_content(coverage, surface_id)

    def render_stage(self, contents: Mapping[str, np.ndarray]) -> np.ndarray:
        """Composite visible surfaces in insertion order onto a black BGR stage."""
        width, height = self._stage_size
        canvas = np.zeros((height, width, 3), dtype=np.float32)
        for surface_id, surface in self._surfaces.items():
            image = contents.get(surface_id)
            if image is None or not surface.visible:
                continue
            image = _as_bgr(image, surface_id)
            warped = self.warp_content(image, surface_id).astype(np.float32)
            alpha = self.warp_mask(surface_id).astype(np.float32)[..., None] / 255.0
            canvas = warped * alpha + canvas * (1.0 - alpha)
        return np.clip(canvas, 0, 255).astype(np.uint8)


def _as_bgr(image: np.ndarray, surface_id: str) -> np.ndarray:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    channels = image.shape[2]
    if channels == 3:
        return image
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    if channels == 1:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    raise ValueError(f"Content for surface '{surface_id}' has unsupported channel count {channels}")
