"""Deciding which of two overlapping traffic entities has to wait for the other.

The functions work on any object that exposes ``collision_rectangle``,
``future_collision_rectangle``, ``move_direction`` and ``yielding``. Vehicles
waiting to pull out of a parking space also expose ``waiting_to_depart``;
while it is set, their future collision rectangle marks the area that has to
be clear before they may leave.
"""

from __future__ import annotations

from typing import Any

from trafficsim.geometry import Vector2, Vector3


def _waiting_to_depart(entity: Any) -> bool:
    return bool(getattr(entity, "waiting_to_depart", False))


def _goes_first(me: Any, other: Any) -> bool:
    # An arbitrary but consistent order: both entities reach opposite answers.
    return id(me) > id(other)


def resolve_overlap(me: Any, other: Any) -> bool:
    """Whether ``me`` must wait for ``other`` once their colliders overlap.

    Exactly one of the two is told to wait, so that the overlap resolves.
    """
    my_position = me.collision_rectangle.position
    other_position = other.collision_rectangle.position

    a_dir: Vector3 = me.move_direction
    b_dir: Vector3 = other.move_direction
    ab_dir_dot = a_dir.dot(b_dir)

    a_to_b = other_position - my_position
    ab_dir = a_to_b.safe_normal()
    ab_dot = a_dir.dot(ab_dir)

    if my_position == other_position:
        return _goes_first(me, other)

    if ab_dir_dot >= 0.0:
        # Going the same way: the one in front goes first, if both agree on who that is.
        ba_dot = b_dir.dot(-ab_dir)
        if ab_dot != 0.0 and ba_dot != 0.0:
            b_in_front_of_a = ab_dot > 0.0
            a_in_front_of_b = ba_dot > 0.0
            if b_in_front_of_a != a_in_front_of_b:
                return b_in_front_of_a

    if other.yielding and not me.yielding:
        return False
    if me.yielding and not other.yielding:
        return True

    # The one with more free space ahead of it goes first.
    ab_sideways = (a_to_b - a_to_b.project_onto_normal(a_dir)).size_squared()
    ba_sideways = (a_to_b - a_to_b.project_onto_normal(b_dir)).size_squared()

    if ab_sideways == ba_sideways:
        return _goes_first(me, other)

    return ab_sideways < ba_sideways


def departure_blocked_by(me: Any, other: Any) -> bool | None:
    """Verdict for a vehicle waiting to depart, checked against its departure area.

    Returns False when the two are too far apart to ever touch, True when the
    departure area is occupied, False when it is occupied by another vehicle
    that is also waiting (one of them must be let go), and None when the area
    is clear and the ordinary rules decide.
    """
    my_future = me.future_collision_rectangle
    other_collision = other.collision_rectangle

    dimension_sum = my_future.dimensions + other_collision.dimensions
    if my_future.position.distance_squared(other_collision.position) > (
        dimension_sum.dot(dimension_sum) * 0.25
    ):
        return False

    if my_future.intersects(other_collision):
        return not _waiting_to_depart(other)

    return None


def blocked_by(me: Any, other: Any | None) -> bool:
    """Whether ``me`` has to stop because of ``other``."""
    if other is None:
        return False

    me_waiting = _waiting_to_depart(me)
    if _waiting_to_depart(other) and not me_waiting:
        return False

    if me_waiting:
        verdict = departure_blocked_by(me, other)
        if verdict is not None:
            return verdict

    my_collision = me.collision_rectangle
    my_future = me.future_collision_rectangle
    other_collision = other.collision_rectangle
    other_future = other.future_collision_rectangle

    dimension_sum = (
        my_collision.dimensions
        + other_collision.dimensions
        + my_future.dimensions
        + other_future.dimensions
    )
    if my_collision.position.distance_squared(other_collision.position) > (
        dimension_sum.dot(dimension_sum) * 0.25
    ):
        # Farther apart than half their summed diagonals: they cannot touch.
        return False

    if (
        my_collision.intersects(other_collision)
        or my_future.intersects(other_collision)
        or my_future.intersects(other_future)
    ):
        return resolve_overlap(me, other)

    return False


def blocked_by_point(me: Any, position: Vector3, point: Vector3) -> bool:
    """Whether ``point`` lies in the footprint of ``me``, located at ``position``."""
    collision = me.collision_rectangle
    dimensions = collision.dimensions

    if point.distance_squared(position) > dimensions.dot(dimensions) * 0.25:
        return False

    return collision.contains_point(Vector2(point.x, point.y))