"""Z-aligned oriented boxes used for cheap collision checks."""

from __future__ import annotations

from trafficsim.geometry import Quat, Vector2, Vector3
from trafficsim.mathutil import point_inside_rectangle, polygons_intersect


class CollisionRectangle:
    """A box whose footprint is a 2D rectangle and whose height spans [bottom, top].

    Rotation about the X or Y axes only stretches the vertical extent.
    """

    def __init__(
        self,
        dimensions: Vector3 | None = None,
        position: Vector3 | None = None,
        rotation: Quat | None = None,
    ) -> None:
        self._dimensions = dimensions if dimensions is not None else Vector3()
        self._position = position if position is not None else Vector3()
        self._rotation = rotation if rotation is not None else Quat.identity()
        self._corners: list[Vector2] = []
        self._top = 0.0
        self._bottom = 0.0
        self._update_shape()

    @property
    def position(self) -> Vector3:
        return self._position

    @position.setter
    def position(self, value: Vector3) -> None:
        self._position = value
        self._update_shape()

    @property
    def rotation(self) -> Quat:
        return self._rotation

    @rotation.setter
    def rotation(self, value: Quat) -> None:
        self._rotation = value
        self._update_shape()

    @property
    def dimensions(self) -> Vector3:
        return self._dimensions

    @dimensions.setter
    def dimensions(self, value: Vector3) -> None:
        self._dimensions = Vector3(max(value.x, 0.0), max(value.y, 0.0), max(value.z, 0.0))
        self._update_shape()

    @property
    def top(self) -> float:
        return self._top

    @property
    def bottom(self) -> float:
        return self._bottom

    def intersects(self, other: CollisionRectangle) -> bool:
        return (
            self._top > other._bottom
            and self._bottom < other._top
            and polygons_intersect(self._corners, other._corners)
        )

    def contains_point(self, point: Vector2 | Vector3) -> bool:
        """Whether the point lies inside the footprint; height is ignored."""
        if isinstance(point, Vector3):
            point = point.xy()
        return point_inside_rectangle(point, *self._corners)

    def intersects_triangle(self, corner0: Vector2, corner1: Vector2, corner2: Vector2) -> bool:
        return polygons_intersect(self._corners, [corner0, corner1, corner2])

    def corners(self) -> list[Vector3]:
        """The four top corners followed by the four bottom corners."""
        top = [Vector3.from_xy(c, self._top) for c in self._corners]
        bottom = [Vector3.from_xy(c, self._bottom) for c in self._corners]
        return top + bottom

    def edges(self) -> list[tuple[Vector3, Vector3]]:
        """The twelve box edges: top ring, bottom ring, then vertical sides."""
        all_corners = self.corners()
        top, bottom = all_corners[:4], all_corners[4:]
        ring = [(i, (i + 1) % 4) for i in range(4)]
        return (
            [(top[i], top[j]) for i, j in ring]
            + [(bottom[i], bottom[j]) for i, j in ring]
            + list(zip(top, bottom))
        )

    def _update_shape(self) -> None:
        hx = self._dimensions.x * 0.5
        hy = self._dimensions.y * 0.5
        local = [
            Vector3(-hx, -hy, 0.0),
            Vector3(hx, -hy, 0.0),
            Vector3(hx, hy, 0.0),
            Vector3(-hx, hy, 0.0),
        ]
        world = [self._position + self._rotation.rotate(v) for v in local]

        heights = [self._position.z, *(c.z for c in world)]
        self._corners = [c.xy() for c in world]
        self._top = max(heights) + self._dimensions.z * 0.5
        self._bottom = min(heights) - self._dimensions.z * 0.5