"""Tests for quad layout helpers."""

from __future__ import annotations

import pytest

from surface_mapper.geometry import Point2D, Quad
from surface_mapper.layout import (
    FullscreenAlign,
    FullscreenFit,
    centroid,
    fullscreen_quad,
    quad_from_rect,
    scale_quad,
)


def corners(quad: Quad):
    return [point.as_tuple() for point in quad]


@pytest.mark.parametrize(("x", "y", "w", "h"), [(0, 0, 10, 10), (15, -3, 7.5, 20), (100, 200, 1, 3)])
def test_centroid_of_rect(x, y, w, h) -> None:
    center = centroid(quad_from_rect(x, y, w, h))

    assert center.x == pytest.approx(x + w / 2)
    assert center.y == pytest.approx(y + h / 2)


def test_scale_identity(keystone: Quad) -> None:
    assert scale_quad(keystone, 1, 1) == keystone


def test_scale_about_centroid() -> None:
    scaled = scale_quad(quad_from_rect(0, 0, 100, 50), 2, 0.5)

    assert corners(scaled) == [(-50.0, 12.5), (150.0, 12.5), (150.0, 37.5), (-50.0, 37.5)]
    assert centroid(scaled) == Point2D(50.0, 25.0)


def test_scale_about_origin() -> None:
    scaled = scale_quad(quad_from_rect(10, 10, 10, 10), 3, 2, origin=Point2D(0, 0))

    assert corners(scaled) == [(30.0, 20.0), (60.0, 20.0), (60.0, 40.0), (30.0, 40.0)]


def test_contain_center() -> None:
    quad = fullscreen_quad(1000, 500, 400, 400, FullscreenFit.CONTAIN, FullscreenAlign.CENTER)

    assert corners(quad) == [(250.0, 0.0), (750.0, 0.0), (750.0, 500.0), (250.0, 500.0)]


def test_cover_center_overflows_stage() -> None:
    quad = fullscreen_quad(1000, 500, 400, 400, FullscreenFit.COVER, FullscreenAlign.CENTER)

    assert corners(quad) == [(0.0, -250.0), (1000.0, -250.0), (1000.0, 750.0), (0.0, 750.0)]


def test_stretch_ignores_aspect() -> None:
    quad = fullscreen_quad(1000, 500, 400, 400, FullscreenFit.STRETCH, FullscreenAlign.BOTTOM_RIGHT)

    assert corners(quad) == [(0.0, 0.0), (1000.0, 0.0), (1000.0, 500.0), (0.0, 500.0)]


@pytest.mark.parametrize(
    ("align", "origin"),
    [
        (FullscreenAlign.TOP_LEFT, (0.0, 0.0)),
        (FullscreenAlign.TOP_RIGHT, (500.0, 0.0)),
        (FullscreenAlign.BOTTOM_LEFT, (0.0, 0.0)),
        (FullscreenAlign.BOTTOM_RIGHT, (500.0, 0.0)),
        (FullscreenAlign.CENTER, (250.0, 0.0)),
    ],
)
def test_contain_alignment(align: FullscreenAlign, origin) -> None:
    quad = fullscreen_quad(1000, 500, 400, 400, FullscreenFit.CONTAIN, align)

    assert quad.p0.as_tuple() == origin
    assert quad.p2.x - quad.p0.x == pytest.approx(500.0)


def test_contain_tall_stage_aligns_bottom() -> None:
    quad = fullscreen_quad(400, 1000, 200, 100, FullscreenFit.CONTAIN, FullscreenAlign.BOTTOM_LEFT)

    assert corners(quad) == [(0.0, 800.0), (400.0, 800.0), (400.0, 1000.0), (0.0, 1000.0)]


def test_non_positive_content_falls_back_to_stage() -> None:
    quad = fullscreen_quad(800, 600, 0, -5, FullscreenFit.CONTAIN, FullscreenAlign.CENTER)

    assert corners(quad) == [(0.0, 0.0), (800.0, 0.0), (800.0, 600.0), (0.0, 600.0)]


def test_unset_fit_and_align() -> None:
    quad = fullscreen_quad(1000, 500, 400, 400, None, None)

    assert corners(quad) == [(0.0, 0.0), (1000.0, 0.0), (1000.0, 500.0), (0.0, 500.0)]


def test_string_values_accepted() -> None:
    quad = fullscreen_quad(1000, 500, 400, 400, "contain", "top-right")

    assert quad.p0.as_tuple() == (500.0, 0.0)


def test_defaults_stretch_from_top_left() -> None:
    assert fullscreen_quad(1000, 500, 400, 400) == fullscreen_quad(1000, 500, 400, 400, None, None)
    assert corners(fullscreen_quad(800, 600, 400, 100, FullscreenFit.CONTAIN)) == [
        (0.0, 0.0),
        (800.0, 0.0),
        (800.0, 200.0),
        (0.0, 200.0),
    ]
