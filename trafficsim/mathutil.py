"""Planar geometry tests and Bezier sampling helpers."""

from __future__ import annotations

import math
import struct
from collections.abc import Sequence

from trafficsim.geometry import Vector2, Vector3

RAD2DEG = 57.2957795131


def point_inside_triangle(point: Vector2, a: Vector2, b: Vector2, c: Vector2) -> bool:
    """Whether the point lies strictly inside the triangle, in either winding."""
    as_x = point.x - a.x
    as_y = point.y - a.y

    s_ab = (b.x - a.x) * as_y - (b.y - a.y) * as_x > 0.0

    return ((c.x - a.x) * as_y - (c.y - a.y) * as_x > 0.0) != s_ab and (
        (c.x - b.x) * (point.y - b.y) - (c.y - b.y) * (point.x - b.x) > 0.0
    ) == s_ab


def point_inside_rectangle(point: Vector2, a: Vector2, b: Vector2, c: Vector2, d: Vector2) -> bool:
    return point_inside_triangle(point, a, b, c) or point_inside_triangle(point, a, c, d)


def point_inside_cone(
    point: Vector2,
    cone_origin: Vector2,
    cone_dir: Vector2,
    cone_angle: float,
    cone_length: float,
) -> bool:
    """Whether the point lies in the triangle approximating a 2D view cone."""
    direction = cone_dir.safe_normal()
    left = cone_origin + direction.rotated(-cone_angle * 0.5) * cone_length
    right = cone_origin + direction.rotated(cone_angle * 0.5) * cone_length
    return point_inside_triangle(point, cone_origin, left, right)


def point_beyond_line(point: Vector2, line_normal: Vector2, line_pos: Vector2) -> bool:
    return line_normal.dot(point - line_pos) > 0


def point_inside_bounding_box(point: Vector2, box_min: Vector2, box_max: Vector2) -> bool:
    return box_min.x <= point.x <= box_max.x and box_min.y <= point.y <= box_max.y


def all_points_in_front_of_any_polygon_side(
    points: Sequence[Vector2], polygon_corners: Sequence[Vector2]
) -> bool:
    """Whether some side of the polygon has every point on its outer side."""
    count = len(polygon_corners)
    if count == 0:
        return False

    center = Vector2()
    for corner in polygon_corners:
        center = center + corner
    center = center / count

    for corner, following in zip(polygon_corners, [*polygon_corners[1:], polygon_corners[0]]):
        side = Vector3.from_xy(following - corner)
        if side.is_zero():
            continue

        center_to_side = Vector3.from_xy(corner - center)
        normal = (center_to_side - center_to_side.project_onto(side)).xy()

        if all(point_beyond_line(p, normal, corner) for p in points):
            return True

    return False


def polygons_intersect(a_corners: Sequence[Vector2], b_corners: Sequence[Vector2]) -> bool:
    """Separating-axis overlap test for two convex polygons."""
    if len(a_corners) < 3 or len(b_corners) < 3:
        return False

    return not all_points_in_front_of_any_polygon_side(
        a_corners, b_corners
    ) and not all_points_in_front_of_any_polygon_side(b_corners, a_corners)


def signed_angle_cw(a: Vector2, b: Vector2) -> float:
    """Angle of b relative to a in degrees, within (-180, 180]."""
    angle = math.atan2(b.y, b.x) - math.atan2(a.y, a.x)
    if angle > math.pi:
        return (angle - 2 * math.pi) * RAD2DEG
    if angle <= -math.pi:
        return (angle + 2 * math.pi) * RAD2DEG
    return angle * RAD2DEG


def sample_bezier3(
    p0: Vector3, p1: Vector3, p2: Vector3, t: float
) -> tuple[Vector3, Vector3]:
    """Point and unit tangent of a quadratic curve in the XY plane.

    The curve reaches p2 at t = 0 and p0 at t = 1.
    """
    u = 1.0 - t
    x = p0.x * t * t + p1.x * 2 * t * u + p2.x * u * u
    y = p0.y * t * t + p1.y * 2 * t * u + p2.y * u * u

    dx = 2 * (p0.x - 2 * p1.x + p2.x) * t + 2 * p1.x - 2 * p2.x
    dy = 2 * (p0.y - 2 * p1.y + p2.y) * t + 2 * p1.y - 2 * p2.y

    tangent = Vector3(dx, dy, 0.0)
    squared = tangent.size_squared()
    if squared > 1e-8:
        tangent = tangent / math.sqrt(squared)

    return Vector3(x, y, 0.0), tangent


def sample_bezier4(p0: Vector3, p1: Vector3, p2: Vector3, p3: Vector3, t: float) -> Vector3:
    """Point on a cubic curve in the XY plane."""
    u = 1.0 - t
    x = u**3 * p0.x + 3 * t * u**2 * p1.x + 3 * t * t * u * p2.x + t**3 * p3.x
    y = u**3 * p0.y + 3 * t * u**2 * p1.y + 3 * t * t * u * p2.y + t**3 * p3.y
    return Vector3(x, y, 0.0)


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


_STEP = _f32(0.01)


def bezier_curve_length(p0: Vector3, p1: Vector3, p2: Vector3) -> float:
    """Polyline length of the quadratic curve, starting the walk from p0."""
    length = 0.0
    previous = p0
    t = 0.0
    while t < 1.0:
        point, _ = sample_bezier3(p0, p1, p2, t)
        length += math.hypot(point.x - previous.x, point.y - previous.y)
        previous = point
        t = _f32(t + _STEP)
    return length