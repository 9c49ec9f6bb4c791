"""Configuration schema and loader for stage/surface descriptions."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from surface_mapper.geometry.primitives import Polygon, Quad
from surface_mapper.layout import FullscreenAlign, FullscreenFit, fullscreen_quad


class LoggingConfig(BaseModel):
    level: str = Field("INFO")
    output: str = Field("stdout")


class MathConfig(BaseModel):
    epsilon: float = Field(1e-6, gt=0.0)
    w_epsilon: float = Field(1e-12, gt=0.0)
    consistency_check: bool = True


class StageSize(BaseModel):
    resolution: List[int] = Field(..., min_length=2, max_length=2)

    @field_validator("resolution")
    @classmethod
    def ensure_positive(cls, value: List[int]) -> List[int]:
        if any(side <= 0 for side in value):
            raise ValueError(f"Stage resolution must be positive, got {value}")
        return value

    @property
    def width(self) -> int:
        return self.resolution[0]

    @property
    def height(self) -> int:
        return self.resolution[1]


class FullscreenLayoutConfig(BaseModel):
    fit: FullscreenFit = FullscreenFit.STRETCH
    align: FullscreenAlign = FullscreenAlign.CENTER


class SurfaceConfig(BaseModel):
    id: str
    resolution: List[float] = Field(..., min_length=2, max_length=2)
    quad: Optional[Annotated[List[List[float]], Field(min_length=4, max_length=4)]] = None
    fullscreen: Optional[FullscreenLayoutConfig] = None
    mask: Optional[Annotated[List[List[float]], Field(min_length=3)]] = None
    visible: bool = True

    @field_validator("quad", "mask")
    @classmethod
    def ensure_pairs(cls, value: Optional[List[List[float]]]) -> Optional[List[List[float]]]:
        if value is None:
            return value
        bad = [point for point in value if len(point) != 2]
        if bad:
            raise ValueError(f"Points must be [x, y] pairs, got {bad}")
        return value

    @model_validator(mode="after")
    def ensure_target(self) -> "SurfaceConfig":
        if self.quad is None and self.fullscreen is None:
            raise ValueError(f"Surface '{self.id}' needs either a quad or a fullscreen layout")
        return self

    @property
    def width(self) -> float:
        return self.resolution[0]

    @property
    def height(self) -> float:
        return self.resolution[1]

    def target_quad(self, stage: StageSize) -> Quad:
        if self.quad is not None:
            return Quad.from_points(self.quad)
        layout = self.fullscreen
        return fullscreen_quad(stage.width, stage.height, self.width, self.height, layout.fit, layout.align)

    def mask_polygon(self) -> Optional[Polygon]:
        if self.mask is None:
            return None
        return Polygon.from_points(self.mask)


class StageConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    math: MathConfig = Field(default_factory=MathConfig)
    stage: StageSize
    surfaces: List[SurfaceConfig] = Field(default_factory=list)

    @field_validator("surfaces")
    @classmethod
    def ensure_unique_ids(cls, value: List[SurfaceConfig]) -> List[SurfaceConfig]:
        seen: Dict[str, int] = {}
        for surface in value:
            seen[surface.id] = seen.get(surface.id, 0) + 1
        duplicates = [surface_id for surface_id, count in seen.items() if count > 1]
        if duplicates:
            raise ValueError(f"Duplicate surface ids: {duplicates}")
        return value

    def surface_by_id(self, surface_id: str) -> SurfaceConfig:
        for surface in self.surfaces:
            if surface.id == surface_id:
                return surface
        raise KeyError(f"Surface '{surface_id}' not found in configuration")


def load_config(path: str | Path) -> StageConfig:
    """Load stage configuration from YAML file."""
    with open(path, "r", encoding="utf-8") as handle:
        raw: Dict[str, object] = yaml.safe_load(handle)
    return StageConfig.model_validate(raw)
