import pytest

from trafficsim.geometry import Vector3
from trafficsim.lights import (
    IntersectionController,
    TrafficLightGroup,
    TrafficLightState,
    VisualTrafficLight,
)


class FakeStopArea:
    def __init__(self):
        self.active = None

    def activate(self):
        self.active = True

    def deactivate(self):
        self.active = False


def test_red_yellow_is_red_and_yellow_bits():
    combined = TrafficLightState.RED | TrafficLightState.YELLOW
    assert TrafficLightState(combined) is TrafficLightState.RED_YELLOW


def test_visual_light_shows_given_state():
    light = VisualTrafficLight(Vector3(1.0, 2.0, 3.0))
    light.set_light_state(TrafficLightState.GREEN)
    assert light.state is TrafficLightState.GREEN
    assert light.location == Vector3(1.0, 2.0, 3.0)


def test_standalone_group_starts_red_and_activates_stop_areas():
    area = FakeStopArea()
    light = VisualTrafficLight()
    group = TrafficLightGroup("g", [light], [area])
    group.begin_play()
    assert group.light_state is TrafficLightState.RED
    assert area.active is True
    assert light.state is TrafficLightState.RED
    assert group.time_remaining == group.green_light_duration


def test_standalone_group_cycles_on_its_own():
    group = TrafficLightGroup("g", green_light_duration=12.0)
    group.begin_play()
    group.tick(12.0)
    assert group.light_state is TrafficLightState.RED_YELLOW


def test_cycle_without_intersection_does_nothing():
    group = TrafficLightGroup("g")
    group.begin_play()
    group.cycle()
    assert group.light_state is TrafficLightState.RED


def test_full_cycle_in_intersection():
    area = FakeStopArea()
    g0 = TrafficLightGroup("a", stop_areas=[area], yellow_light_duration=2.0, green_light_duration=12.0)
    g1 = TrafficLightGroup("b")
    controller = IntersectionController([g0, g1])
    controller.begin_play()

    assert g0.light_state is TrafficLightState.RED_YELLOW
    assert g1.light_state is TrafficLightState.RED

    g0.tick(2.0)
    assert g0.light_state is TrafficLightState.GREEN
    assert area.active is False

    g0.tick(12.0)
    assert g0.light_state is TrafficLightState.YELLOW
    assert area.active is True

    g0.tick(2.0)
    assert g0.light_state is TrafficLightState.RED
    assert controller.cycling_group == 1
    assert g1.light_state is TrafficLightState.RED_YELLOW


def test_red_group_in_intersection_does_not_tick():
    g0 = TrafficLightGroup("a")
    g1 = TrafficLightGroup("b")
    controller = IntersectionController([g0, g1])
    controller.begin_play()
    g1.tick(1000.0)
    assert g1.light_state is TrafficLightState.RED


def test_setting_same_state_keeps_timer():
    group = TrafficLightGroup("g")
    group.begin_play()
    group.set_light_state(TrafficLightState.RED_YELLOW)
    group.tick(0.5)
    before = group.time_remaining
    group.set_light_state(TrafficLightState.RED_YELLOW)
    assert group.time_remaining == before


def test_cycle_finished_wraps_around():
    groups = [TrafficLightGroup("a"), TrafficLightGroup("b")]
    controller = IntersectionController(groups)
    controller.begin_play()
    controller.cycling_group = 1
    controller.cycle_finished()
    assert controller.cycling_group == 0
    assert groups[0].light_state is TrafficLightState.RED_YELLOW


def test_reset_lights_restarts_from_current_group():
    groups = [TrafficLightGroup("a"), TrafficLightGroup("b")]
    controller = IntersectionController(groups)
    controller.begin_play()
    controller.cycling_group = 1
    controller.reset_lights()
    assert groups[0].light_state is TrafficLightState.RED
    assert groups[1].light_state is TrafficLightState.RED_YELLOW


def test_empty_intersection_raises():
    with pytest.raises(ValueError):
        IntersectionController([]).begin_play()


def test_connect_sets_red_and_links_intersection():
    group = TrafficLightGroup("g")
    controller = IntersectionController([group])
    group.connect(controller)
    assert group.intersection is controller
    assert group.light_state is TrafficLightState.RED