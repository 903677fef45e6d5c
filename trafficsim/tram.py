"""Tram speed and blocking rules, plus the light areas that protect tram crossings."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from trafficsim.blocking import resolve_overlap
from trafficsim.geometry import Vector3
from trafficsim.lights import TrafficLightGroup, TrafficLightState

SLOW_SPEED_THRESHOLD = 300.0


def _lerp(a: float, b: float, alpha: float) -> float:
    return a + alpha * (b - a)


def tram_next_speed(
    move_speed: float, target_speed: float, delta_time: float, halted: bool
) -> float:
    """The tram's speed after one frame.

    A halted tram (stopped, yielding or blocked) brakes towards zero. Otherwise it
    eases towards its target speed, faster while it is moving slowly.
    """
    if halted:
        return _lerp(move_speed, 0.0, 0.99 * delta_time)
    if move_speed == target_speed:
        return move_speed
    slow = 0 < move_speed < SLOW_SPEED_THRESHOLD or -SLOW_SPEED_THRESHOLD < move_speed < 0
    rate = 0.97 if slow else 0.66
    return _lerp(move_speed, target_speed, rate * delta_time)


def bounding_sphere_radius(collision_dimensions: Vector3) -> float:
    """A radius that holds both the tram's collider and its predicted collider."""
    return 1.5 * math.sqrt(collision_dimensions.dot(collision_dimensions))


def tram_blocked_by(me: Any, other: Any | None, bounding_radius: float) -> bool:
    """Whether the tram ``me`` has to stop because of ``other``."""
    if other is None:
        return False

    my_collision = me.collision_rectangle
    other_collision = other.collision_rectangle

    if my_collision.position.distance_squared(other_collision.position) > (
        bounding_radius * bounding_radius
    ):
        return False

    my_future = me.future_collision_rectangle

    if (
        my_collision.intersects(other_collision)
        or my_future.intersects(other_collision)
        or my_future.intersects(other.future_collision_rectangle)
    ):
        return resolve_overlap(me, other)

    return False


def tram_blocked_by_point(
    me: Any, position: Vector3, point: Vector3, bounding_radius: float
) -> bool:
    """Whether ``point`` lies in the footprint of the tram located at ``position``."""
    if (point - position).size_squared() > bounding_radius * bounding_radius:
        return False
    return me.collision_rectangle.contains_point(point)


class TramLightAreaState(Enum):
    GREEN = 0
    YELLOW = 1
    RED = 2


@dataclass
class _PendingState:
    remaining: float
    state: TramLightAreaState


class TramLightArea:
    """Turns crossing lights red while trams are inside, with a yellow phase in between."""

    def __init__(
        self,
        red_groups: Iterable[TrafficLightGroup] | None = None,
        clear_groups: Iterable[TrafficLightGroup] | None = None,
        yellow_time: float = 2.0,
    ) -> None:
        self.red_groups = list(red_groups) if red_groups is not None else []
        self.clear_groups = list(clear_groups) if clear_groups is not None else []
        self.yellow_time = yellow_time
        self.state = TramLightAreaState.GREEN
        self._trams_inside = 0
        self._pending: list[_PendingState] = []

    @property
    def trams_inside(self) -> int:
        return self._trams_inside

    @property
    def pending_changes(self) -> int:
        return len(self._pending)

    def on_tram_enter(self) -> None:
        self._trams_inside += 1
        if self._trams_inside == 1:
            self.state = TramLightAreaState.YELLOW
            self._pending.append(_PendingState(self.yellow_time, TramLightAreaState.RED))

    def on_tram_exit(self) -> None:
        self._trams_inside -= 1
        if self._trams_inside == 0:
            self.state = TramLightAreaState.YELLOW
            self._pending.append(_PendingState(self.yellow_time, TramLightAreaState.GREEN))

    def tick(self, delta_time: float) -> None:
        """Advance the delayed state changes, applying those that fall due in order."""
        due: list[_PendingState] = []
        waiting: list[_PendingState] = []
        for pending in self._pending:
            pending.remaining -= delta_time
            (due if pending.remaining <= 0 else waiting).append(pending)
        self._pending = waiting
        for pending in sorted(due, key=lambda p: p.remaining):
            self.state = pending.state


class TramIntersectionController:
    """Sets the traffic lights of a tram crossing from the state of its light areas.

    Lights of an active area follow its state; the "red when clear" lights only
    follow it when no other area is active at the same time.
    """

    def __init__(self, light_areas: Iterable[TramLightArea | None] | None = None) -> None:
        areas = list(light_areas) if light_areas is not None else []
        if any(area is None for area in areas):
            raise ValueError("tram light areas are not all assigned")
        self._areas: list[TramLightArea] = areas  # type: ignore[assignment]

    @property
    def light_areas(self) -> list[TramLightArea]:
        return list(self._areas)

    def tick(self) -> None:
        for area in self._areas:
            for group in (*area.red_groups, *area.clear_groups):
                group.set_light_state(TrafficLightState.GREEN)

        active = [area for area in self._areas if area.state != TramLightAreaState.GREEN]
        if not active:
            return

        for area in active:
            light = (
                TrafficLightState.YELLOW
                if area.state == TramLightAreaState.YELLOW
                else TrafficLightState.RED
            )
            for group in area.red_groups:
                group.set_light_state(light)
            if len(active) == 1:
                for group in area.clear_groups:
                    group.set_light_state(light)