"""Trackside triggers that change tram speeds, with optional delays."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


class SpeedControlled(Protocol):
    def set_move_speed(self, speed: float) -> None: ...


STATION_APPROACH_SPEED = 500.0


@dataclass
class _Timer:
    remaining: float
    action: Callable[[], None]


class _TimerQueue:
    """Delayed actions that fire once their time has run out."""

    def __init__(self) -> None:
        self._timers: list[_Timer] = []

    def __len__(self) -> int:
        return len(self._timers)

    def schedule(self, delay: float, action: Callable[[], None]) -> None:
        self._timers.append(_Timer(delay, action))

    def tick(self, delta_time: float) -> None:
        due, waiting = [], []
        for timer in self._timers:
            timer.remaining -= delta_time
            (due if timer.remaining <= 0 else waiting).append(timer)
        self._timers = waiting
        for timer in due:
            timer.action()


class TramStationArea:
    """Slows trams down in a station and sends them off after a stop."""

    def __init__(self, stop_time: float = 10.0, leave_speed: float = 1000.0) -> None:
        self.stop_time = stop_time
        self.leave_speed = leave_speed
        self._timers = _TimerQueue()

    @property
    def pending_releases(self) -> int:
        return len(self._timers)

    def on_tram_enter(self, tram: SpeedControlled) -> None:
        tram.set_move_speed(STATION_APPROACH_SPEED)

    def on_tram_exit(self, tram: SpeedControlled) -> None:
        """Halt the tram and release it once the stop time has passed."""
        tram.set_move_speed(0.0)
        self._timers.schedule(self.stop_time, lambda: self.release_tram(tram))

    def release_tram(self, tram: SpeedControlled) -> None:
        tram.set_move_speed(self.leave_speed)

    def tick(self, delta_time: float) -> None:
        self._timers.tick(delta_time)


class TramControlPoint:
    """Sets a tram's target speed, at once or after a delay of at least one second."""

    def __init__(self, target_speed: float = 500.0, delay: float = 0.0) -> None:
        self.target_speed = target_speed
        self.delay = delay
        self._timers = _TimerQueue()

    @property
    def pending(self) -> int:
        return len(self._timers)

    def on_tram_enter(self, tram: SpeedControlled) -> None:
        if self.delay >= 1:
            self._timers.schedule(self.delay, lambda: tram.set_move_speed(self.target_speed))
        else:
            tram.set_move_speed(self.target_speed)

    def tick(self, delta_time: float) -> None:
        self._timers.tick(delta_time)