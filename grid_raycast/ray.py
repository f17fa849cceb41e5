"""
Ray class encapsulating origin and unit direction, with casting helpers.
"""
import math
from typing import Iterable, Tuple

from .errors import DegenerateDirectionError
from .grid import OccupancyGrid, _as_point


class Ray:
    def __init__(self, origin: Iterable[float], direction: Iterable[float]):
        self.origin = _as_point(origin)
        self.direction = _as_point(direction, "direction")

    @classmethod
    def towards(cls, origin: Iterable[float], target: Iterable[float]) -> "Ray":
        """Ray from *origin* with the normalized heading of *target - origin*."""
        ox, oy = _as_point(origin)
        tx, ty = _as_point(target, "target")
        length = math.hypot(tx - ox, ty - oy)
        if length == 0.0 or not math.isfinite(length):
            raise DegenerateDirectionError(
                f"cannot aim from {(ox, oy)} at {(tx, ty)}: no heading"
            )
        return cls((ox, oy), ((tx - ox) / length, (ty - oy) / length))

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin}, direction={self.direction})"

    def point_at(self, distance: float) -> Tuple[float, float]:
        """Point reached after travelling *distance* along the ray."""
        return OccupancyGrid.hit_point(self.origin, self.direction, distance)

    def cast(
        self,
        grid: OccupancyGrid,
        max_distance: float = float('inf'),
        *,
        hit_origin_cell: bool = False
    ) -> float:
        """Delegate to OccupancyGrid.cast_ray."""
        return grid.cast_ray(self.origin, self.direction, max_distance,
                             hit_origin_cell=hit_origin_cell)

    def traverse(self, grid: OccupancyGrid, max_distance: float = float('inf')):
        """Delegate to OccupancyGrid.traverse."""
        return grid.traverse(self.origin, self.direction, max_distance)
