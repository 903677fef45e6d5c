"""Traffic scenario records and their binary save-file format."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path

from trafficsim.geometry import Vector3

_VEC = struct.Struct("<3d")
_F32 = struct.Struct("<f")
_I32 = struct.Struct("<i")
_U32 = struct.Struct("<I")

SAVE_EXTENSION = ".sav"


class _Reader:
    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = memoryview(data)
        self._offset = 0

    def _unpack(self, fmt: struct.Struct) -> tuple:
        end = self._offset + fmt.size
        if end > len(self._data):
            raise ValueError("scenario data is truncated")
        values = fmt.unpack_from(self._data, self._offset)
        self._offset = end
        return values

    def vector(self) -> Vector3:
        return Vector3(*self._unpack(_VEC))

    def rotator(self) -> Rotator:
        return Rotator(*self._unpack(_VEC))

    def f32(self) -> float:
        return self._unpack(_F32)[0]

    def i32(self) -> int:
        return self._unpack(_I32)[0]

    def boolean(self) -> bool:
        return self._unpack(_U32)[0] != 0

    def count(self) -> int:
        n = self.i32()
        if n < 0:
            raise ValueError(f"negative array length {n} in scenario data")
        return n


def _put_vector(out: bytearray, v: Vector3) -> None:
    out += _VEC.pack(v.x, v.y, v.z)


def _put_rotator(out: bytearray, r: Rotator) -> None:
    out += _VEC.pack(r.pitch, r.yaw, r.roll)


@dataclass(frozen=True)
class Rotator:
    """Euler rotation in degrees."""

    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0


@dataclass
class CarScenarioData:
    location: Vector3 = field(default_factory=Vector3)
    rotation: Rotator = field(default_factory=Rotator)
    speed: float = 500.0
    simulate: bool = True
    route_start: Vector3 = field(default_factory=Vector3)
    route_end: Vector3 = field(default_factory=Vector3)
    spawn_rate: float = 1.0

    def _write(self, out: bytearray) -> None:
        _put_vector(out, self.location)
        _put_rotator(out, self.rotation)
        out += _F32.pack(self.speed)
        out += _U32.pack(1 if self.simulate else 0)
        _put_vector(out, self.route_start)
        _put_vector(out, self.route_end)
        out += _F32.pack(self.spawn_rate)

    @classmethod
    def _read(cls, reader: _Reader) -> CarScenarioData:
        return cls(
            location=reader.vector(),
            rotation=reader.rotator(),
            speed=reader.f32(),
            simulate=reader.boolean(),
            route_start=reader.vector(),
            route_end=reader.vector(),
            spawn_rate=reader.f32(),
        )


@dataclass
class IntersectionScenarioData:
    green_times: list[float] = field(default_factory=list)
    first_green: int = 0

    def _write(self, out: bytearray) -> None:
        out += _I32.pack(len(self.green_times))
        for value in self.green_times:
            out += _F32.pack(value)
        out += _I32.pack(self.first_green)

    @classmethod
    def _read(cls, reader: _Reader) -> IntersectionScenarioData:
        times = [reader.f32() for _ in range(reader.count())]
        return cls(green_times=times, first_green=reader.i32())


@dataclass
class PedestrianScenarioData:
    location: Vector3 = field(default_factory=Vector3)

    def _write(self, out: bytearray) -> None:
        _put_vector(out, self.location)

    @classmethod
    def _read(cls, reader: _Reader) -> PedestrianScenarioData:
        return cls(location=reader.vector())


@dataclass
class PlayerScenarioData:
    location: Vector3 = field(default_factory=Vector3)
    rotation: Rotator = field(default_factory=Rotator)

    def _write(self, out: bytearray) -> None:
        _put_vector(out, self.location)
        _put_rotator(out, self.rotation)

    @classmethod
    def _read(cls, reader: _Reader) -> PlayerScenarioData:
        return cls(location=reader.vector(), rotation=reader.rotator())


@dataclass
class ScenarioData:
    """Everything saved for one scenario. The name is not part of the file."""

    scenario_name: str = ""
    player_data: PlayerScenarioData = field(default_factory=PlayerScenarioData)
    car_data: list[CarScenarioData] = field(default_factory=list)
    pedestrian_data: list[PedestrianScenarioData] = field(default_factory=list)
    intersection_data: list[IntersectionScenarioData] = field(default_factory=list)
    random_car_amount: int = 0
    random_car_min_distance: float = 100.0

    def to_bytes(self) -> bytes:
        out = bytearray()
        self.player_data._write(out)
        for items in (self.car_data, self.pedestrian_data, self.intersection_data):
            out += _I32.pack(len(items))
            for item in items:
                item._write(out)
        out += _I32.pack(self.random_car_amount)
        out += _F32.pack(self.random_car_min_distance)
        return bytes(out)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> ScenarioData:
        """Decode a save file; raises ValueError if it is truncated or malformed."""
        reader = _Reader(data)
        player = PlayerScenarioData._read(reader)
        cars = [CarScenarioData._read(reader) for _ in range(reader.count())]
        pedestrians = [PedestrianScenarioData._read(reader) for _ in range(reader.count())]
        intersections = [IntersectionScenarioData._read(reader) for _ in range(reader.count())]
        return cls(
            player_data=player,
            car_data=cars,
            pedestrian_data=pedestrians,
            intersection_data=intersections,
            random_car_amount=reader.i32(),
            random_car_min_distance=reader.f32(),
        )


def default_scenario_directory() -> Path:
    return Path.home() / "Documents" / "CiThruS2" / "Scenarios"


class ScenarioStore:
    """Saves and loads scenarios as files in one directory."""

    def __init__(self, directory: str | Path | None = None) -> None:
        self.directory = Path(directory) if directory is not None else default_scenario_directory()

    def path_for(self, name: str) -> Path:
        return self.directory / f"{name}{SAVE_EXTENSION}"

    def save(self, data: ScenarioData) -> Path:
        path = self.path_for(data.scenario_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data.to_bytes())
        return path

    def load(self, name: str) -> ScenarioData:
        """Load a scenario; raises FileNotFoundError or ValueError if it cannot be read."""
        path = self.path_for(name)
        blob = path.read_bytes()
        if not blob:
            raise ValueError(f"scenario file {path} is empty")
        return ScenarioData.from_bytes(blob)

    def names(self) -> list[str]:
        """File names of all saved scenarios, sorted."""
        if not self.directory.is_dir():
            return []
        return sorted(p.name for p in self.directory.glob(f"*{SAVE_EXTENSION}") if p.is_file())