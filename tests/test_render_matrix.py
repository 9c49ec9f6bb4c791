"""Tests for lifting homographies into 4x4 render matrices."""

from __future__ import annotations

import numpy as np
import pytest

from surface_mapper.errors import ErrorKind
from surface_mapper.geometry import Matrix3x3, Quad, project_point, solve_rect_to_quad
from surface_mapper.projection import apply_matrix4, css_matrix3d, embed_homography


def test_layout_is_column_major() -> None:
    matrix = Matrix3x3((1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0))

    embedded = embed_homography(matrix)

    assert embedded.values == (
        1.0, 4.0, 0.0, 7.0,
        2.0, 5.0, 0.0, 8.0,
        0.0, 0.0, 1.0, 0.0,
        3.0, 6.0, 0.0, 9.0,
    )
    expected = np.array(
        [
            [1.0, 2.0, 0.0, 3.0],
            [4.0, 5.0, 0.0, 6.0],
            [0.0, 0.0, 1.0, 0.0],
            [7.0, 8.0, 0.0, 9.0],
        ]
    )
    np.testing.assert_array_equal(embedded.to_array(), expected)


def test_z_axis_passes_through(keystone: Quad) -> None:
    embedded = embed_homography(solve_rect_to_quad(400, 300, keystone).unwrap()).to_array()

    np.testing.assert_array_equal(embedded[2], [0.0, 0.0, 1.0, 0.0])
    np.testing.assert_array_equal(embedded[:, 2], [0.0, 0.0, 1.0, 0.0])


@pytest.mark.parametrize("point", [(0, 0), (400, 300), (37.5, 201.25), (-50, 1000)])
def test_embedding_round_trip_matches_projection(keystone: Quad, point) -> None:
    homography = solve_rect_to_quad(400, 300, keystone).unwrap()

    via_matrix = apply_matrix4(embed_homography(homography), point).unwrap()
    direct = project_point(homography, point).unwrap()

    assert via_matrix.x == pytest.approx(direct.x, abs=1e-9)
    assert via_matrix.y == pytest.approx(direct.y, abs=1e-9)


def test_apply_matrix4_reports_degenerate_w() -> None:
    homography = Matrix3x3((1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 1.0, 0.0, -5.0))

    result = apply_matrix4(embed_homography(homography), (5.0, 0.0))

    assert result.kind is ErrorKind.DEGENERATE_PROJECTION


def test_css_string() -> None:
    css = css_matrix3d(Matrix3x3.identity())

    assert css == (
        "matrix3d(1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, "
        "0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0)"
    )
