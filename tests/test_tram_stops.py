from trafficsim.tram_stops import TramControlPoint, TramStationArea


class FakeTram:
    def __init__(self):
        self.speeds = []

    def set_move_speed(self, speed):
        self.speeds.append(speed)


def test_station_slows_tram_on_enter():
    station = TramStationArea()
    tram = FakeTram()
    station.on_tram_enter(tram)
    assert tram.speeds == [500.0]


def test_station_releases_after_stop_time():
    station = TramStationArea(stop_time=10.0, leave_speed=1000.0)
    tram = FakeTram()
    station.on_tram_exit(tram)
    assert tram.speeds == [0.0]
    assert station.pending_releases == 1

    station.tick(9.5)
    assert tram.speeds == [0.0]

    station.tick(0.5)
    assert tram.speeds == [0.0, 1000.0]
    assert station.pending_releases == 0


def test_station_handles_several_trams_independently():
    station = TramStationArea(stop_time=10.0, leave_speed=1000.0)
    first, second = FakeTram(), FakeTram()
    station.on_tram_exit(first)
    station.tick(5.0)
    station.on_tram_exit(second)
    station.tick(5.0)
    assert first.speeds == [0.0, 1000.0]
    assert second.speeds == [0.0]
    station.tick(5.0)
    assert second.speeds == [0.0, 1000.0]


def test_control_point_without_delay_acts_immediately():
    point = TramControlPoint(target_speed=500.0, delay=0.0)
    tram = FakeTram()
    point.on_tram_enter(tram)
    assert tram.speeds == [500.0]
    assert point.pending == 0


def test_control_point_short_delay_acts_immediately():
    point = TramControlPoint(target_speed=500.0, delay=0.5)
    tram = FakeTram()
    point.on_tram_enter(tram)
    assert tram.speeds == [500.0]


def test_control_point_delay_waits():
    point = TramControlPoint(target_speed=500.0, delay=2.0)
    tram = FakeTram()
    point.on_tram_enter(tram)
    assert tram.speeds == []
    point.tick(1.0)
    assert tram.speeds == []
    point.tick(1.0)
    assert tram.speeds == [500.0]
    assert point.pending == 0