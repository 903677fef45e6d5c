"""Traffic light groups and the intersection controller that cycles them."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum
from typing import Protocol

from trafficsim.geometry import Vector3


class TrafficLightState(IntEnum):
    """One bit per lamp, so states can be combined bitwise."""

    OFF = 0
    RED = 0b0001
    YELLOW = 0b0010
    RED_YELLOW = 0b0011
    GREEN = 0b0100


class StopAreaLike(Protocol):
    def activate(self) -> None: ...

    def deactivate(self) -> None: ...


class LightDisplay(Protocol):
    def set_light_state(self, state: TrafficLightState) -> None: ...


class VisualTrafficLight:
    """A traffic light as seen in the world; it only shows the state it is given."""

    def __init__(self, location: Vector3 | None = None) -> None:
        self.location = location if location is not None else Vector3()
        self.state = TrafficLightState.OFF

    def set_light_state(self, state: TrafficLightState) -> None:
        self.state = state


class TrafficLightGroup:
    """Synchronised lights that show the same state and guard the same stop areas."""

    def __init__(
        self,
        name: str = "TrafficLightGroup",
        visual_lights: Iterable[LightDisplay | None] | None = None,
        stop_areas: Iterable[StopAreaLike | None] | None = None,
        yellow_light_duration: float = 2.0,
        green_light_duration: float = 12.0,
    ) -> None:
        self.name = name
        self.visual_lights = list(visual_lights) if visual_lights is not None else []
        self.stop_areas = list(stop_areas) if stop_areas is not None else []
        self.yellow_light_duration = yellow_light_duration
        self.green_light_duration = green_light_duration
        self._state = TrafficLightState.OFF
        self._time_remaining = 0.0
        self._intersection: IntersectionController | None = None

    @property
    def light_state(self) -> TrafficLightState:
        return self._state

    @property
    def time_remaining(self) -> float:
        return self._time_remaining

    @property
    def intersection(self) -> IntersectionController | None:
        return self._intersection

    def begin_play(self) -> None:
        """A group outside any intersection starts red and cycles on its own."""
        if self._intersection is None:
            self.set_light_state(TrafficLightState.RED)

    def tick(self, delta_time: float) -> None:
        if self._time_remaining <= 0 or (
            self._intersection is not None and self._state == TrafficLightState.RED
        ):
            return

        self._time_remaining -= delta_time
        if self._time_remaining > 0:
            return

        if self._state == TrafficLightState.RED:
            self.set_light_state(TrafficLightState.RED_YELLOW)
        elif self._state == TrafficLightState.YELLOW:
            self.set_light_state(TrafficLightState.RED)
            if self._intersection is not None:
                self._intersection.cycle_finished()
        elif self._state == TrafficLightState.RED_YELLOW:
            self.set_light_state(TrafficLightState.GREEN)
        elif self._state == TrafficLightState.GREEN:
            self.set_light_state(TrafficLightState.YELLOW)

    def connect(self, intersection: IntersectionController) -> None:
        self._intersection = intersection
        self.set_light_state(TrafficLightState.RED)

    def cycle(self) -> None:
        """Start a green phase; only groups that belong to an intersection do this."""
        if self._intersection is None:
            return
        self.set_light_state(TrafficLightState.RED_YELLOW)

    def set_light_state(self, new_state: TrafficLightState) -> None:
        if new_state == self._state:
            return

        self._state = new_state

        if new_state == TrafficLightState.RED:
            self._time_remaining = self.green_light_duration
            self._set_stop_areas(active=True)
        elif new_state in (TrafficLightState.YELLOW, TrafficLightState.RED_YELLOW):
            self._time_remaining = self.yellow_light_duration
            self._set_stop_areas(active=True)
        elif new_state == TrafficLightState.GREEN:
            self._time_remaining = self.green_light_duration
            self._set_stop_areas(active=False)

        for light in self.visual_lights:
            if light is not None:
                light.set_light_state(new_state)

    def _set_stop_areas(self, *, active: bool) -> None:
        for area in self.stop_areas:
            if area is None:
                continue
            if active:
                area.activate()
            else:
                area.deactivate()


class IntersectionController:
    """Gives each light group of an intersection its green phase in turn."""

    def __init__(self, groups: Iterable[TrafficLightGroup] | None = None) -> None:
        self._groups = list(groups) if groups is not None else []
        self.cycling_group = 0

    @property
    def groups(self) -> list[TrafficLightGroup]:
        return list(self._groups)

    def begin_play(self) -> None:
        if not self._groups:
            raise ValueError("IntersectionController has no traffic light groups set")
        for group in self._groups:
            group.connect(self)
        self._groups[self.cycling_group].cycle()

    def cycle_finished(self) -> None:
        self.cycling_group += 1
        if self.cycling_group == len(self._groups):
            self.cycling_group = 0
        self._groups[self.cycling_group].cycle()

    def reset_lights(self) -> None:
        """Turn every group red and restart the cycle from the current group."""
        for group in self._groups:
            group.set_light_state(TrafficLightState.RED)
        current = self._groups[self.cycling_group]
        current.set_light_state(TrafficLightState.GREEN)
        current.cycle()