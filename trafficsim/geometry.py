"""Small vector and quaternion types using an X-forward, Y-right, Z-up frame."""

from __future__ import annotations

import math
from dataclasses import dataclass

_SMALL_NUMBER = 1e-8


@dataclass(frozen=True, slots=True)
class Vector2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector2:
        return Vector2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def safe_normal(self) -> Vector2:
        """Unit vector in the same direction, or the zero vector if too short."""
        squared = self.x * self.x + self.y * self.y
        if squared > _SMALL_NUMBER:
            return self / math.sqrt(squared)
        return Vector2()

    def rotated(self, degrees: float) -> Vector2:
        """This vector rotated by the given angle in degrees."""
        rad = math.radians(degrees)
        s, c = math.sin(rad), math.cos(rad)
        return Vector2(c * self.x - s * self.y, s * self.x + c * self.y)


@dataclass(frozen=True, slots=True)
class Vector3:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_xy(cls, point: Vector2, z: float = 0.0) -> Vector3:
        return cls(point.x, point.y, z)

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def size(self) -> float:
        return math.sqrt(self.size_squared())

    def size_squared(self) -> float:
        return self.dot(self)

    def safe_normal(self) -> Vector3:
        """Unit vector in the same direction, or the zero vector if too short."""
        squared = self.size_squared()
        if squared > _SMALL_NUMBER:
            return self / math.sqrt(squared)
        return Vector3()

    def project_onto(self, other: Vector3) -> Vector3:
        """Projection of this vector onto an arbitrary (non-zero) vector."""
        return other * (self.dot(other) / other.dot(other))

    def project_onto_normal(self, normal: Vector3) -> Vector3:
        """Projection of this vector onto a vector assumed to be unit length."""
        return normal * self.dot(normal)

    def distance_squared(self, other: Vector3) -> float:
        return (self - other).size_squared()

    def xy(self) -> Vector2:
        return Vector2(self.x, self.y)

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def orientation_quat(self) -> Quat:
        """Rotation that turns the forward axis towards this vector, without roll."""
        yaw = math.atan2(self.y, self.x)
        pitch = math.atan2(self.z, math.hypot(self.x, self.y))
        sp, cp = math.sin(pitch * 0.5), math.cos(pitch * 0.5)
        sy, cy = math.sin(yaw * 0.5), math.cos(yaw * 0.5)
        return Quat(sp * sy, -sp * cy, cp * sy, cp * cy)


def _cross(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@dataclass(frozen=True, slots=True)
class Quat:
    """An immutable rotation quaternion."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def identity(cls) -> Quat:
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_axis_angle(cls, axis: Vector3, degrees: float) -> Quat:
        unit = axis.safe_normal()
        half = math.radians(degrees) * 0.5
        s = math.sin(half)
        return cls(unit.x * s, unit.y * s, unit.z * s, math.cos(half))

    def rotate(self, vector: Vector3) -> Vector3:
        q = Vector3(self.x, self.y, self.z)
        t = _cross(q, vector) * 2.0
        return vector + t * self.w + _cross(q, t)

    def forward(self) -> Vector3:
        return self.rotate(Vector3(1.0, 0.0, 0.0))

    def right(self) -> Vector3:
        return self.rotate(Vector3(0.0, 1.0, 0.0))