"""Utilities to construct binary masks from surface polygons."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import cv2
import numpy as np

from surface_mapper.geometry.primitives import Polygon


@dataclass(slots=True)
class MaskBuildResult:
    composite_mask: np.ndarray
    per_polygon_masks: List[np.ndarray]


class MaskBuilder:
    """Rasterizes mask polygons into uint8 masks (255 inside, 0 outside)."""

    def __init__(self, blur_kernel: int = 1) -> None:
        blur_kernel = max(1, blur_kernel)
        self._blur_kernel = blur_kernel if blur_kernel % 2 == 1 else blur_kernel + 1

    def build(self, frame_shape: Tuple[int, int], polygons: Iterable[Polygon]) -> MaskBuildResult:
        height, width = frame_shape
        composite = np.zeros((height, width), dtype=np.uint8)
        per_polygon: List[np.ndarray] = []

        for polygon in polygons:
            mask = np.zeros_like(composite)
            points = np.round(polygon.to_array()).astype(np.int32).reshape((-1, 1, 2))
            cv2.fillPoly(mask, [points], 255)
            composite = cv2.bitwise_or(composite, mask)
            per_polygon.append(mask)

        if self._blur_kernel > 1:
            kernel = (self._blur_kernel, self._blur_kernel)
            composite = cv2.GaussianBlur(composite, kernel, sigmaX=0)
            per_polygon = [cv2.GaussianBlur(mask, kernel, sigmaX=0) for mask in per_polygon]

        return MaskBuildResult(composite_mask=composite, per_polygon_masks=per_polygon)
