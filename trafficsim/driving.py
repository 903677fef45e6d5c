"""Speed, animation and overtaking rules for simulated cars."""

from __future__ import annotations

import math
import random as _random
from dataclasses import dataclass

from trafficsim.geometry import Quat, Vector3

MIN_MOVING_SPEED = 50.0
STOP_APPROACH_SPEED = 150.0
WIDTH_OF_AREA_CHECK = 220.0
FRONTAL_SIGHT_LENGTH = 2500.0
ALLOWED_ROTATION_DIFFERENCE_IN_FRONT = 8.0


def _lerp(a: float, b: float, alpha: float) -> float:
    return a + alpha * (b - a)


def _lerp_vector(a: Vector3, b: Vector3, alpha: float) -> Vector3:
    return a + (b - a) * alpha


def _clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value < high:
        return value
    return high


def _dist_2d(a: Vector3, b: Vector3) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


@dataclass
class DriverCharacteristics:
    """Per-driver values that shape how a car is driven."""

    max_speed: float = 600.0
    normal_speed_multiplier: float = 1.0

    @classmethod
    def random(cls, rng: _random.Random | None = None) -> DriverCharacteristics:
        """A driver who goes 1 to 1.2 times the speed limit."""
        rng = rng if rng is not None else _random.Random()
        return cls(max_speed=600.0, normal_speed_multiplier=1.0 + rng.uniform(0.0, 0.2))


@dataclass
class OvertakeSettings:
    """Tuning for when and how a car overtakes.

    The collision-check offsets default to values derived from the merge and
    keep-lane distances.
    """

    allow: bool = True
    allow_both_ways: bool = True
    max_speed_diff_multiplier: float = 0.83
    max_speed_diff_multiplier_behind: float = 1.2
    min_speed_diff_multiplier_front: float = 1.1
    merge_distance: float = 1650.0
    keep_lane_distance: float = 300.0

    collision_check_length_behind: float = 2000.0
    collision_check_offset_behind: float | None = None

    collision_check_length_side: float = 1000.0
    collision_check_offset_side: float | None = None

    collision_check_length_front: float = 2500.0
    collision_check_offset_front: float | None = None

    def __post_init__(self) -> None:
        lead = self.merge_distance + self.keep_lane_distance
        if self.collision_check_offset_behind is None:
            self.collision_check_offset_behind = (-500.0 - 1000.0) - lead
        if self.collision_check_offset_side is None:
            self.collision_check_offset_side = 0.0 - lead
        if self.collision_check_offset_front is None:
            self.collision_check_offset_front = (500.0 + 1250.0) - lead


@dataclass(frozen=True)
class OvertakeManeuver:
    """Where an overtake leaves its lane and where it joins the adjacent one."""

    stay_at_lane_point: Vector3
    merge_to_point: Vector3
    lane_forward: Vector3
    lane_length: float
    progress: float


def future_view_scale(move_speed: float) -> float:
    """How much longer the predicted collider is; faster cars look further ahead."""
    return max(move_speed * 0.004 - 1.0, 1.0)


def car_next_speed(
    move_speed: float,
    target_speed: float,
    delta_time: float,
    in_stop_area: bool,
    in_future_stop_area: bool,
    blocked: bool,
) -> float:
    """The car's speed after one frame.

    A car stops fully only when both its colliders are in an active stop area,
    slows for blockers, creeps towards an upcoming active stop area, and
    otherwise eases towards its target speed.
    """
    if in_stop_area and in_future_stop_area:
        return _lerp(move_speed, 0.0, delta_time * 3)
    if blocked:
        return _lerp(move_speed, 0.0, delta_time * 2)
    if in_future_stop_area:
        return _lerp(move_speed, STOP_APPROACH_SPEED, 0.66 * delta_time)
    if move_speed != target_speed:
        return _lerp(move_speed, target_speed, 0.46 * delta_time)
    return move_speed


def anim_acceleration(
    move_speed: float, speed_before: float, previous: float, delta_time: float
) -> float:
    """Smoothed acceleration value for animation; changes at most delta_time per frame."""
    low = previous - delta_time
    high = previous + delta_time
    if move_speed < MIN_MOVING_SPEED:
        return _clamp(0.0, low, high)
    return _clamp((move_speed - speed_before) * delta_time * 100.0, low, high)


def anim_steering_angle(rotation: Quat, future_rotation: Quat) -> float:
    """Front-wheel angle from the current and predicted headings; positive turns right."""
    a = rotation.forward()
    a_right = rotation.right()
    b = future_rotation.forward()
    lr = -(a - b).dot(a_right)

    sign = 0.0 if lr == 0.0 else (-1.0 if lr < 0 else 1.0)
    angle = math.acos(_clamp(a.dot(b), -1.0, 1.0)) * 90
    return sign * angle * 2.0


def anim_wheel_rotation_speed(move_speed: float, reversing: bool) -> float:
    if move_speed < MIN_MOVING_SPEED:
        return 0.0
    return -move_speed / 100 if reversing else move_speed / 100


def overtake_merge_points(
    lane_start: Vector3,
    lane_end: Vector3,
    adjacent_start: Vector3,
    adjacent_end: Vector3,
    position: Vector3,
    settings: OvertakeSettings | None = None,
) -> OvertakeManeuver | None:
    """Plan the lane change, or None if too little of the lane is left to merge."""
    settings = settings if settings is not None else OvertakeSettings()

    lane_length = _dist_2d(lane_start, lane_end)
    if lane_length == 0.0:
        return None
    progress = _dist_2d(lane_start, position) / lane_length

    if not lane_length * (1 - progress) >= settings.merge_distance:
        return None

    progress_merge = progress + settings.merge_distance / lane_length
    progress_stay = progress + settings.keep_lane_distance / lane_length

    return OvertakeManeuver(
        stay_at_lane_point=_lerp_vector(lane_start, lane_end, progress_stay),
        merge_to_point=_lerp_vector(adjacent_start, adjacent_end, progress_merge),
        lane_forward=(adjacent_end - adjacent_start).safe_normal(),
        lane_length=lane_length,
        progress=progress,
    )


def overtake_custom_points(
    current_location: Vector3,
    forward: Vector3,
    wheelbase: float,
    stay_at_lane_point: Vector3,
    merge_to_point: Vector3,
) -> list[Vector3]:
    """The custom points that open an overtaking path, in driving order."""
    return [
        current_location - forward * wheelbase,
        current_location,
        stay_at_lane_point,
        merge_to_point,
    ]