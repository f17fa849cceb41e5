"""
Numba-accelerated 2D DDA ("digital differential analyzer") ray casting on a
uniform occupancy grid.

Public API
----------
cast_ray(origin, direction, grid, cell_size, max_distance)
    - distance to the first occupied cell the ray enters, else max_distance

traverse_cells(origin, direction, grid, cell_size, max_distance)
    - generator yielding every in-bounds cell visited (row, col, t_enter)

hit_point(origin, direction, distance)
    - world point reached after travelling *distance* along the ray
"""
from __future__ import annotations

import math
from typing import Generator, Iterable, Optional, Tuple

from .grid import OccupancyGrid


def _resolve_grid(grid, cell_size: Optional[float]) -> OccupancyGrid:
    """Accept an OccupancyGrid or a 2D array-like of wall flags."""
    if isinstance(grid, OccupancyGrid):
        if cell_size is None or float(cell_size) == grid.cell_size:
            return grid
        return OccupancyGrid(grid.rows, grid.cols, cell_size=cell_size, cells=grid.cells)
    if cell_size is None:
        raise ValueError("cell_size is required when grid is not an OccupancyGrid")
    return OccupancyGrid.from_array(grid, cell_size=cell_size)


def cast_ray(origin:       Iterable[float],
             direction:    Iterable[float],
             grid,
             cell_size:    Optional[float] = None,
             max_distance: float = math.inf,
             *,
             hit_origin_cell: bool = False) -> float:
    """
    Return the distance travelled along *direction* before entering an
    occupied cell of *grid*, or exactly *max_distance* if none is entered.

    Parameters
    ----------
    origin          : array-like(2), world coordinates (x, y)
    direction       : array-like(2), unit vector
    grid            : OccupancyGrid or 2D array-like indexed [row, col]
    cell_size       : world side length of a cell (defaults to the grid's own)
    max_distance    : travel budget, never exceeded by the result
    hit_origin_cell : report 0.0 when the origin already lies in a wall
    """
    g = _resolve_grid(grid, cell_size)
    return g.cast_ray(origin, direction, max_distance, hit_origin_cell=hit_origin_cell)


def traverse_cells(origin:       Iterable[float],
                   direction:    Iterable[float],
                   grid,
                   cell_size:    Optional[float] = None,
                   max_distance: float = math.inf
                   ) -> Generator[Tuple[int, int, float], None, None]:
    """Yield `(row, col, t_enter)` for every in-bounds cell the ray visits."""
    g = _resolve_grid(grid, cell_size)
    return g.traverse(origin, direction, max_distance)


def hit_point(origin:    Iterable[float],
              direction: Iterable[float],
              distance:  float) -> Tuple[float, float]:
    return OccupancyGrid.hit_point(origin, direction, distance)
