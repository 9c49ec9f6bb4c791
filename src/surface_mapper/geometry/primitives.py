"""Value types shared by the mapping math: points, quads, polygons and matrices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple, Sequence, Tuple, Union

import numpy as np

from surface_mapper.errors import Err, ErrorKind, MappingError, Ok, Result

PointLike = Union["Point2D", Sequence[float]]


@dataclass(frozen=True, slots=True)
class Point2D:
    """Pixel coordinate, origin top-left, y grows downward."""

    x: float
    y: float

    @classmethod
    def of(cls, value: PointLike) -> "Point2D":
        if isinstance(value, Point2D):
            return value
        x, y = value
        return cls(float(x), float(y))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


class Quad(NamedTuple):
    """Exactly four corners, ordered p0 -> p3.

    Clockwise ordering (top-left, top-right, bottom-right, bottom-left for a
    rectangle) is what the validator expects.
    """

    p0: Point2D
    p1: Point2D
    p2: Point2D
    p3: Point2D

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> "Quad":
        corners = [Point2D.of(point) for point in points]
        if len(corners) != 4:
            raise ValueError(f"Quad requires exactly 4 points, got {len(corners)}")
        return cls(*corners)

    def to_array(self) -> np.ndarray:
        return np.array([point.as_tuple() for point in self], dtype=np.float64)


@dataclass(frozen=True, slots=True)
class Polygon:
    """Open-ended outline used for masks; at least three points."""

    points: Tuple[Point2D, ...]

    def __post_init__(self) -> None:
        if len(self.points) < 3:
            raise ValueError(f"Polygon requires at least 3 points, got {len(self.points)}")

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> "Polygon":
        return cls(tuple(Point2D.of(point) for point in points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def to_array(self) -> np.ndarray:
        return np.array([point.as_tuple() for point in self.points], dtype=np.float64)


@dataclass(frozen=True, slots=True)
class Matrix3x3:
    """2D projective transform, row-major, usually normalized so h22 == 1."""

    values: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.values) != 9:
            raise ValueError(f"Matrix3x3 requires 9 values, got {len(self.values)}")

    @classmethod
    def identity(cls) -> "Matrix3x3":
        return cls((1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Matrix3x3":
        flat = np.asarray(array, dtype=np.float64).reshape(-1)
        return cls(tuple(float(value) for value in flat))

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    def __iter__(self):
        return iter(self.values)

    def to_array(self) -> np.ndarray:
        return np.array(self.values, dtype=np.float64).reshape(3, 3)

    def normalized(self) -> "Result[Matrix3x3]":
        """Scale so h22 == 1; fails when h22 is 0 (the origin maps to infinity)."""
        scale = self.values[8]
        if scale == 0:
            return Err(
                MappingError(
                    kind=ErrorKind.DEGENERATE_PROJECTION,
                    message="Cannot normalize a homography with h22 == 0",
                )
            )
        return Ok(Matrix3x3(tuple(value / scale for value in self.values)))


@dataclass(frozen=True, slots=True)
class Matrix4x4:
    """4x4 transform stored column-major, the order CSS ``matrix3d`` expects."""

    values: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.values) != 16:
            raise ValueError(f"Matrix4x4 requires 16 values, got {len(self.values)}")

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    def __iter__(self):
        return iter(self.values)

    def to_array(self) -> np.ndarray:
        # column-major storage, so the reshape yields the transpose
        return np.array(self.values, dtype=np.float64).reshape(4, 4).T

    def to_css(self) -> str:
        return "matrix3d(" + ", ".join(repr(float(value)) for value in self.values) + ")"
