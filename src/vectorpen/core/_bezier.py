"""Internal cubic Bezier helpers for path flattening.

This is an internal module containing helpers for FlattenedPath.
Not intended for public use.
"""

import math

from vectorpen.domain import Point

# Guards against runaway subdivision on degenerate input
_MAX_DEPTH = 16


def _mid(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def flatten_cubic(points: list[Point], tolerance: float, _depth: int = 0) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision. The flatness test measures
    how far the control points stray from the chord, which also catches
    S-shaped curves whose midpoint happens to sit on the chord.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, including both end points
    """
    p0, p1, p2, p3 = points

    if _depth >= _MAX_DEPTH or _is_flat(p0, p1, p2, p3, tolerance):
        return [p0, p3]

    # First level
    q1 = _mid(p0, p1)
    q2 = _mid(p1, p2)
    q3 = _mid(p2, p3)

    # Second level
    r1 = _mid(q1, q2)
    r2 = _mid(q2, q3)

    # Third level (curve point at t=0.5)
    mid = _mid(r1, r2)

    left = flatten_cubic([p0, q1, r1, mid], tolerance, _depth + 1)
    right = flatten_cubic([mid, r2, q3, p3], tolerance, _depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def _is_flat(p0: Point, p1: Point, p2: Point, p3: Point, tolerance: float) -> bool:
    """Check both control points lie within tolerance of the chord p0-p3."""
    dx = p3.x - p0.x
    dy = p3.y - p0.y
    chord = math.hypot(dx, dy)

    if chord == 0:
        return max(p0.distance_to(p1), p0.distance_to(p2)) <= tolerance

    d1 = abs((p1.x - p0.x) * dy - (p1.y - p0.y) * dx) / chord
    d2 = abs((p2.x - p0.x) * dy - (p2.y - p0.y) * dx) / chord
    return max(d1, d2) <= tolerance
