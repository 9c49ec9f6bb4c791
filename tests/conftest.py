"""Shared fixtures for the surface_mapper test suite."""

from __future__ import annotations

import pytest

from surface_mapper.geometry import Quad


@pytest.fixture
def trapezoid() -> Quad:
    """Clockwise, non-degenerate target used across the solver tests."""
    return Quad.from_points([(10, 10), (210, 10), (200, 110), (0, 100)])


@pytest.fixture
def keystone() -> Quad:
    return Quad.from_points([(120, 140), (560, 180), (540, 520), (100, 470)])


@pytest.fixture
def bowtie() -> Quad:
    # edges p1p2 and p3p0 cross; the larger lobe keeps the shoelace sum positive
    return Quad.from_points([(0, 0), (100, 0), (0, 200), (60, 100)])
