"""Geometric checks deciding whether a quad can be the target of a homography."""

from __future__ import annotations

from surface_mapper.errors import Err, MappingError, Ok, QuadDefect, Result
from surface_mapper.geometry.primitives import Point2D, Quad

DEFAULT_EPSILON = 1e-6

_TRIPLETS = ((0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3))


def cross(a: Point2D, b: Point2D, c: Point2D) -> float:
    """Z component of (b - a) x (c - a)."""
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def quad_area(quad: Quad) -> float:
    """Signed shoelace area; positive for clockwise quads in y-down space."""
    total = 0.0
    for index in range(4):
        current = quad[index]
        following = quad[(index + 1) % 4]
        total += current.x * following.y - following.x * current.y
    return total / 2.0


def is_clockwise(quad: Quad) -> bool:
    return quad_area(quad) > 0


def has_duplicate_points(quad: Quad) -> bool:
    for i in range(4):
        for j in range(i + 1, 4):
            if quad[i] == quad[j]:
                return True
    return False


def has_collinear_triplet(quad: Quad, epsilon: float = DEFAULT_EPSILON) -> bool:
    return any(abs(cross(quad[i], quad[j], quad[k])) <= epsilon for i, j, k in _TRIPLETS)


def segments_intersect(
    a: Point2D,
    b: Point2D,
    c: Point2D,
    d: Point2D,
    epsilon: float = DEFAULT_EPSILON,
) -> bool:
    """Return True when segments ab and cd properly cross.

    Touching endpoints and collinear overlap do not count; every orientation
    sign must be clear of ``epsilon``.
    """
    abc = cross(a, b, c)
    abd = cross(a, b, d)
    cda = cross(c, d, a)
    cdb = cross(c, d, b)

    if all(abs(value) <= epsilon for value in (abc, abd, cda, cdb)):
        return False

    straddles_ab = (abc > epsilon and abd < -epsilon) or (abc < -epsilon and abd > epsilon)
    straddles_cd = (cda > epsilon and cdb < -epsilon) or (cda < -epsilon and cdb > epsilon)
    return straddles_ab and straddles_cd


def is_self_intersecting(quad: Quad, epsilon: float = DEFAULT_EPSILON) -> bool:
    p0, p1, p2, p3 = quad
    return segments_intersect(p0, p1, p2, p3, epsilon) or segments_intersect(p1, p2, p3, p0, epsilon)


def validate_quad(quad: Quad, epsilon: float = DEFAULT_EPSILON) -> Result[Quad]:
    """Check ``quad`` against every invariant, reporting the first one violated."""
    if has_duplicate_points(quad):
        return _reject(QuadDefect.DUPLICATE_POINT)
    if has_collinear_triplet(quad, epsilon):
        return _reject(QuadDefect.COLLINEAR_POINTS)

    area = quad_area(quad)
    if abs(area) <= epsilon:
        return _reject(QuadDefect.DEGENERATE_AREA)
    if area <= 0:
        return _reject(QuadDefect.WRONG_ORIENTATION)

    if is_self_intersecting(quad, epsilon):
        return _reject(QuadDefect.SELF_INTERSECTING)
    return Ok(quad)


def _reject(defect: QuadDefect) -> Err:
    return Err(MappingError.invalid_quad(defect))
