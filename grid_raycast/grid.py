"""
User-facing OccupancyGrid class: a uniform 2D grid of wall flags stored in one
flat row-major buffer, plus the ray queries that run against it.
"""
import logging
import math
from typing import Generator, Iterable, Optional, Tuple

import numpy as np

from ._core import _cast, _march
from .errors import DegenerateDirectionError

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------
# Argument coercion shared by the grid and the functional API
# -------------------------------------------------------------------------
def _as_point(point: Iterable[float], name: str = "origin") -> Tuple[float, float]:
    p = np.asarray(point, dtype=np.float64)
    if p.shape != (2,):
        raise ValueError(f"{name} must have exactly two components, got shape {p.shape}")
    return float(p[0]), float(p[1])


def _as_origin(origin: Iterable[float]) -> Tuple[float, float]:
    ox, oy = _as_point(origin)
    if not (math.isfinite(ox) and math.isfinite(oy)):
        raise ValueError(f"origin must be finite, got ({ox}, {oy})")
    return ox, oy


def _as_direction(direction: Iterable[float]) -> Tuple[float, float]:
    dx, dy = _as_point(direction, "direction")
    if not (math.isfinite(dx) and math.isfinite(dy)):
        raise DegenerateDirectionError(f"direction must be finite, got ({dx}, {dy})")
    if dx == 0.0 and dy == 0.0:
        raise DegenerateDirectionError("direction (0, 0) has no heading")
    return dx, dy


def _check_cell_size(cell_size: float) -> float:
    cell_size = float(cell_size)
    if not math.isfinite(cell_size) or cell_size <= 0.0:
        raise ValueError(f"cell_size must be a positive finite number, got {cell_size}")
    return cell_size


def _check_budget(max_distance: float) -> float:
    max_distance = float(max_distance)
    if math.isnan(max_distance) or max_distance < 0.0:
        raise ValueError(f"max_distance must be >= 0, got {max_distance}")
    return max_distance


class OccupancyGrid:
    """Uniform ``rows x cols`` grid of square cells; row is y, col is x."""

    def __init__(
        self,
        rows: int,
        cols: int,
        *,
        cell_size: float = 1.0,
        cells: Optional[Iterable[int]] = None,
    ) -> None:
        rows, cols = int(rows), int(cols)
        if rows < 0 or cols < 0:
            raise ValueError(f"grid shape must be non-negative, got ({rows}, {cols})")
        self._rows = rows
        self._cols = cols
        self._cell_size = _check_cell_size(cell_size)

        if cells is None:
            self._cells = np.zeros(rows * cols, dtype=np.uint8)
        else:
            flat = np.asarray(cells).ravel()
            if flat.size != rows * cols:
                raise ValueError(
                    f"cells has {flat.size} entries, expected {rows} * {cols} = {rows * cols}"
                )
            self._cells = np.ascontiguousarray(flat != 0, dtype=np.uint8)

    @classmethod
    def from_array(cls, array, *, cell_size: float = 1.0) -> "OccupancyGrid":
        """Build a grid from a 2D array-like indexed ``[row, col]``."""
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValueError("grid array must be 2-D")
        return cls(arr.shape[0], arr.shape[1], cell_size=cell_size, cells=arr)

    # ---------------------------------------------------------------------
    # Shape and storage
    # ---------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._cols

    @property
    def cell_size(self) -> float:
        return self._cell_size

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the flat row-major buffer."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def as_array(self) -> np.ndarray:
        """Read-only ``(rows, cols)`` view of the buffer."""
        return self.cells.reshape(self.shape)

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def bounds(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """World extent as ``((xmin, ymin), (xmax, ymax))``."""
        return (0.0, 0.0), (self._cols * self._cell_size, self._rows * self._cell_size)

    def __repr__(self) -> str:
        return (f"OccupancyGrid(rows={self._rows}, cols={self._cols}, "
                f"cell_size={self._cell_size}, occupied={self.occupied_count()})")

    # ---------------------------------------------------------------------
    # Cell access
    # ---------------------------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._rows and 0 <= col < self._cols

    def _index(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            raise IndexError(f"cell ({row}, {col}) outside grid of shape {self.shape}")
        return row * self._cols + col

    def __getitem__(self, key: Tuple[int, int]) -> bool:
        row, col = key
        return bool(self._cells[self._index(row, col)])

    def __setitem__(self, key: Tuple[int, int], occupied: bool) -> None:
        row, col = key
        self._cells[self._index(row, col)] = 1 if occupied else 0

    def is_occupied(self, row: int, col: int) -> bool:
        """Occupancy of ``(row, col)``; cells outside the grid are open."""
        if not self.in_bounds(row, col):
            return False
        return bool(self._cells[row * self._cols + col])

    def set_cell(self, row: int, col: int, occupied: bool = True) -> None:
        self[row, col] = occupied

    def clear(self) -> None:
        """Mark every cell open."""
        self._cells.fill(0)
        logger.debug("cleared %dx%d grid", self._rows, self._cols)

    def cell_at(self, x: float, y: float) -> Tuple[int, int]:
        """``(row, col)`` containing world point (x, y); may lie outside the grid."""
        return (int(math.floor(y / self._cell_size)),
                int(math.floor(x / self._cell_size)))

    def paint_at(self, x: float, y: float, occupied: bool = True) -> bool:
        """
        Set the cell under world point (x, y). Points outside the grid are
        ignored; returns whether a cell was written.
        """
        row, col = self.cell_at(x, y)
        if not self.in_bounds(row, col):
            return False
        self._cells[row * self._cols + col] = 1 if occupied else 0
        logger.debug("cell (%d, %d) set to %s", row, col, "wall" if occupied else "open")
        return True

    # ---------------------------------------------------------------------
    # Ray queries
    # ---------------------------------------------------------------------
    def cast_ray(
        self,
        origin: Iterable[float],
        direction: Iterable[float],
        max_distance: float = math.inf,
        *,
        hit_origin_cell: bool = False,
    ) -> float:
        """
        Distance along *direction* (a unit vector) from *origin* to the
        boundary of the first occupied cell the ray enters, or *max_distance*
        if no occupied cell is entered within that budget.

        The origin's own cell is only tested when *hit_origin_cell* is set,
        in which case an occupied origin cell yields ``0.0``.
        """
        ox, oy = _as_origin(origin)
        dx, dy = _as_direction(direction)
        max_distance = _check_budget(max_distance)
        return float(_cast(ox, oy, dx, dy, self._cells, self._rows, self._cols,
                           self._cell_size, max_distance, bool(hit_origin_cell)))

    def traverse(
        self,
        origin: Iterable[float],
        direction: Iterable[float],
        max_distance: float = math.inf,
    ) -> Generator[Tuple[int, int, float], None, None]:
        """
        Yield ``(row, col, t_enter)`` for each in-bounds cell the ray visits,
        starting with the origin cell (``t_enter == 0``) when it is inside.
        """
        ox, oy = _as_origin(origin)
        dx, dy = _as_direction(direction)
        max_distance = _check_budget(max_distance)

        # a line crosses at most rows + cols + 1 cells of a rectangle
        max_cells = self._rows + self._cols + 2
        buf_rc = np.empty((max_cells, 2), dtype=np.int64)
        buf_t = np.empty(max_cells, dtype=np.float64)

        visited = _march(ox, oy, dx, dy, self._rows, self._cols,
                         self._cell_size, max_distance, buf_rc, buf_t)
        for i in range(visited):
            yield int(buf_rc[i, 0]), int(buf_rc[i, 1]), float(buf_t[i])

    @staticmethod
    def hit_point(origin: Iterable[float], direction: Iterable[float],
                  distance: float) -> Tuple[float, float]:
        """World point ``origin + direction * distance``."""
        ox, oy = _as_point(origin)
        dx, dy = _as_point(direction, "direction")
        return ox + dx * distance, oy + dy * distance
