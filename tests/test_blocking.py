import pytest

from trafficsim.blocking import (
    blocked_by,
    blocked_by_point,
    departure_blocked_by,
    resolve_overlap,
)
from trafficsim.collision import CollisionRectangle
from trafficsim.geometry import Quat, Vector3

CAR_DIMENSIONS = Vector3(500.0, 200.0, 150.0)


class FakeEntity:
    def __init__(
        self,
        position,
        direction=Vector3(1.0, 0.0, 0.0),
        future_position=None,
        dimensions=CAR_DIMENSIONS,
        future_dimensions=None,
        yielding=False,
        waiting_to_depart=False,
    ):
        self.collision_rectangle = CollisionRectangle(dimensions, position, Quat.identity())
        self.future_collision_rectangle = CollisionRectangle(
            future_dimensions if future_dimensions is not None else dimensions,
            future_position if future_position is not None else position,
            Quat.identity(),
        )
        self.move_direction = direction
        self.yielding = yielding
        self.waiting_to_depart = waiting_to_depart


def test_none_never_blocks():
    me = FakeEntity(Vector3())
    assert blocked_by(me, None) is False


def test_far_apart_entities_do_not_block():
    a = FakeEntity(Vector3())
    b = FakeEntity(Vector3(10000.0, 0.0, 0.0))
    assert blocked_by(a, b) is False
    assert blocked_by(b, a) is False


def test_car_behind_waits_for_car_in_front():
    rear = FakeEntity(Vector3())
    front = FakeEntity(Vector3(300.0, 0.0, 0.0))
    assert blocked_by(rear, front) is True
    assert blocked_by(front, rear) is False


def test_same_position_exactly_one_waits():
    a = FakeEntity(Vector3())
    b = FakeEntity(Vector3())
    assert blocked_by(a, b) != blocked_by(b, a)


def test_yielding_entity_waits_when_head_on():
    a = FakeEntity(Vector3(), direction=Vector3(1.0, 0.0, 0.0), yielding=True)
    b = FakeEntity(Vector3(300.0, 0.0, 0.0), direction=Vector3(-1.0, 0.0, 0.0))
    assert resolve_overlap(a, b) is True
    assert resolve_overlap(b, a) is False


@pytest.mark.parametrize(
    "b_position, b_direction",
    [
        (Vector3(300.0, 50.0, 0.0), Vector3(-1.0, 0.0, 0.0)),
        (Vector3(100.0, 150.0, 0.0), Vector3(0.0, 1.0, 0.0)),
        (Vector3(200.0, -100.0, 0.0), Vector3(0.0, -1.0, 0.0)),
        (Vector3(-250.0, 30.0, 0.0), Vector3(1.0, 0.0, 0.0)),
    ],
)
def test_overlap_resolution_is_antisymmetric(b_position, b_direction):
    a = FakeEntity(Vector3(), direction=Vector3(1.0, 0.0, 0.0))
    b = FakeEntity(b_position, direction=b_direction)
    assert blocked_by(a, b) != blocked_by(b, a)


def test_future_rectangle_overlap_counts():
    a = FakeEntity(Vector3(), future_position=Vector3(700.0, 0.0, 0.0))
    b = FakeEntity(Vector3(1100.0, 0.0, 0.0))
    assert not a.collision_rectangle.intersects(b.collision_rectangle)
    assert blocked_by(a, b) is True


def test_nothing_overlaps_within_range():
    a = FakeEntity(Vector3())
    b = FakeEntity(Vector3(0.0, 600.0, 0.0))
    assert blocked_by(a, b) is False
    assert blocked_by(b, a) is False


def test_waiting_vehicle_does_not_block_moving_one():
    moving = FakeEntity(Vector3())
    parked = FakeEntity(Vector3(300.0, 0.0, 0.0), waiting_to_depart=True)
    assert blocked_by(moving, parked) is False


def test_departure_area_occupied_blocks():
    parked = FakeEntity(Vector3(0.0, 500.0, 0.0), future_position=Vector3(), waiting_to_depart=True)
    passing = FakeEntity(Vector3(100.0, 0.0, 0.0))
    assert departure_blocked_by(parked, passing) is True
    assert blocked_by(parked, passing) is True


def test_two_waiting_vehicles_do_not_deadlock():
    a = FakeEntity(Vector3(0.0, 500.0, 0.0), future_position=Vector3(), waiting_to_depart=True)
    b = FakeEntity(Vector3(100.0, 0.0, 0.0), waiting_to_depart=True)
    assert departure_blocked_by(a, b) is False
    assert blocked_by(a, b) is False


def test_departure_area_far_away_is_clear():
    parked = FakeEntity(Vector3(), waiting_to_depart=True)
    other = FakeEntity(Vector3(10000.0, 0.0, 0.0))
    assert departure_blocked_by(parked, other) is False


def test_point_inside_footprint_blocks():
    me = FakeEntity(Vector3())
    assert blocked_by_point(me, Vector3(), Vector3(100.0, 50.0, 0.0)) is True


def test_point_far_away_does_not_block():
    me = FakeEntity(Vector3())
    assert blocked_by_point(me, Vector3(), Vector3(5000.0, 0.0, 0.0)) is False


def test_point_near_but_outside_footprint_does_not_block():
    me = FakeEntity(Vector3())
    assert blocked_by_point(me, Vector3(), Vector3(0.0, 150.0, 0.0)) is False