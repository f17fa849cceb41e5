"""
Low-level Numba kernels for 2D DDA traversal of a flat row-major occupancy buffer.
"""
import math
from typing import Tuple

import numpy as np
from numba import njit


@njit(cache=True)
def _step_lengths(dx: float, dy: float) -> Tuple[float, float]:
    """
    Ray distance per unit of x and per unit of y along the line's slope.
    An axis the ray is parallel to gets +inf so it never wins a comparison.
    """
    if dx == 0.0:
        sx = math.inf
    else:
        sx = math.sqrt(1.0 + (dy / dx) * (dy / dx))
    if dy == 0.0:
        sy = math.inf
    else:
        sy = math.sqrt(1.0 + (dx / dy) * (dx / dy))
    return sx, sy


@njit(cache=True)
def _setup(ox: float, oy: float, dx: float, dy: float, cell_size: float,
           rows: int, cols: int, clamp: bool):
    """
    Starting cell, per-axis step, per-cell ray length and distance to the
    first grid line on each axis. With *clamp* the cell is pulled into the
    grid first (for a start point on the grid's outer edge).
    """
    sx, sy = _step_lengths(dx, dy)

    # floor: a point on a grid line belongs to the cell with the larger coordinate
    col = int(math.floor(ox / cell_size))
    row = int(math.floor(oy / cell_size))
    if clamp:
        col = min(max(col, 0), cols - 1)
        row = min(max(row, 0), rows - 1)

    step_x = -1 if dx < 0.0 else 1
    step_y = -1 if dy < 0.0 else 1

    if sx == math.inf:
        len_x = math.inf
    elif step_x == -1:
        len_x = (ox - col * cell_size) * sx
    else:
        len_x = ((col + 1) * cell_size - ox) * sx

    if sy == math.inf:
        len_y = math.inf
    elif step_y == -1:
        len_y = (oy - row * cell_size) * sy
    else:
        len_y = ((row + 1) * cell_size - oy) * sy

    return col, row, step_x, step_y, sx * cell_size, sy * cell_size, len_x, len_y


@njit(cache=True)
def _ray_box_intersect(ox: float, oy: float, dx: float, dy: float,
                       width: float, height: float) -> Tuple[float, float]:
    """
    Slab test against the box [0, width] x [0, height]; returns
    (t_near, t_far) or (inf, -inf) on a miss. A zero component requires the
    origin to lie inside that slab, half-open like the floor cell lookup.
    """
    t0 = -math.inf
    t1 = math.inf
    for k in range(2):
        o = ox if k == 0 else oy
        d = dx if k == 0 else dy
        hi = width if k == 0 else height
        if d == 0.0:
            if o < 0.0 or o >= hi:
                return math.inf, -math.inf
            tn = -math.inf
            tf = math.inf
        else:
            tn = (0.0 - o) / d
            tf = (hi - o) / d
            if tn > tf:
                tn, tf = tf, tn
        if tn > t0:
            t0 = tn
        if tf < t1:
            t1 = tf
        if t0 > t1:
            return math.inf, -math.inf
    return t0, t1


@njit(cache=True)
def _entry(ox: float, oy: float, dx: float, dy: float,
           rows: int, cols: int, cell_size: float, max_distance: float):
    """
    Where the walk starts. An origin inside the grid starts in place; one
    outside is moved to the point where the ray enters the grid, and the
    distance skipped is returned as the offset.

    Returns (reachable, inside, offset, px, py).
    """
    width = cols * cell_size
    height = rows * cell_size
    if 0.0 <= ox < width and 0.0 <= oy < height:
        return True, True, 0.0, ox, oy

    if rows == 0 or cols == 0:
        return False, False, 0.0, ox, oy
    t_near, t_far = _ray_box_intersect(ox, oy, dx, dy, width, height)
    if t_near > t_far or t_far < 0.0:
        return False, False, 0.0, ox, oy
    if t_near <= 0.0:
        t_near = 0.0
    if t_near >= max_distance:
        return False, False, 0.0, ox, oy

    px = ox + dx * t_near
    py = oy + dy * t_near
    # snap onto the face the ray enters through; o + d * t loses it for far origins
    if dx != 0.0 and ((0.0 if dx > 0.0 else width) - ox) / dx == t_near:
        px = 0.0 if dx > 0.0 else width
    elif dy != 0.0 and ((0.0 if dy > 0.0 else height) - oy) / dy == t_near:
        py = 0.0 if dy > 0.0 else height
    px = min(max(px, 0.0), width)
    py = min(max(py, 0.0), height)
    return True, False, t_near, px, py


@njit(cache=True)
def _occupied(cells: np.ndarray, rows: int, cols: int, row: int, col: int) -> bool:
    if row < 0 or row >= rows or col < 0 or col >= cols:
        return False
    return cells[row * cols + col] != 0


@njit(cache=True)
def _escaped(row: int, col: int, rows: int, cols: int,
             step_x: int, step_y: int, parallel_x: bool, parallel_y: bool) -> bool:
    """True once no later cell on this ray can be inside the grid."""
    if col < 0:
        if step_x < 0 or parallel_x:
            return True
    elif col >= cols:
        if step_x > 0:
            return True
    if row < 0:
        if step_y < 0 or parallel_y:
            return True
    elif row >= rows:
        if step_y > 0:
            return True
    return False


@njit(cache=True)
def _cast(ox: float, oy: float, dx: float, dy: float,
          cells: np.ndarray, rows: int, cols: int,
          cell_size: float, max_distance: float,
          test_origin: bool) -> float:
    """
    Distance at which the ray enters its first occupied cell, or
    *max_distance* when none is entered within the budget.
    """
    reachable, inside, offset, px, py = _entry(ox, oy, dx, dy, rows, cols,
                                               cell_size, max_distance)
    if not reachable:
        return max_distance

    col, row, step_x, step_y, dt_x, dt_y, len_x, len_y = _setup(px, py, dx, dy, cell_size,
                                                                rows, cols, not inside)
    parallel_x = dx == 0.0
    parallel_y = dy == 0.0

    if not inside:
        # the entry cell is entered at *offset* and must be tested
        if _occupied(cells, rows, cols, row, col):
            return offset
    elif test_origin and _occupied(cells, rows, cols, row, col):
        return 0.0

    while not _escaped(row, col, rows, cols, step_x, step_y, parallel_x, parallel_y):
        # ties advance y first
        if len_x < len_y:
            distance = offset + len_x
            if distance >= max_distance:
                break
            col += step_x
            len_x += dt_x
        else:
            distance = offset + len_y
            if distance >= max_distance:
                break
            row += step_y
            len_y += dt_y

        if _occupied(cells, rows, cols, row, col):
            return distance

    return max_distance


@njit(cache=True)
def _march(ox: float, oy: float, dx: float, dy: float,
           rows: int, cols: int,
           cell_size: float, max_distance: float,
           out_rc: np.ndarray, out_t: np.ndarray) -> int:
    """
    Record every in-bounds cell the ray visits into the pre-allocated
    buffers (`out_rc`, `out_t`) and return the number of valid entries.
    """
    reachable, inside, offset, px, py = _entry(ox, oy, dx, dy, rows, cols,
                                               cell_size, max_distance)
    capacity = out_t.shape[0]
    if not reachable or capacity == 0:
        return 0

    col, row, step_x, step_y, dt_x, dt_y, len_x, len_y = _setup(px, py, dx, dy, cell_size,
                                                                rows, cols, not inside)
    parallel_x = dx == 0.0
    parallel_y = dy == 0.0

    count = 0
    if 0 <= row < rows and 0 <= col < cols:
        out_rc[0, 0] = row
        out_rc[0, 1] = col
        out_t[0] = offset
        count = 1

    while count < capacity:
        if _escaped(row, col, rows, cols, step_x, step_y, parallel_x, parallel_y):
            break

        if len_x < len_y:
            distance = offset + len_x
            if distance >= max_distance:
                break
            col += step_x
            len_x += dt_x
        else:
            distance = offset + len_y
            if distance >= max_distance:
                break
            row += step_y
            len_y += dt_y

        if 0 <= row < rows and 0 <= col < cols:
            out_rc[count, 0] = row
            out_rc[count, 1] = col
            out_t[count] = distance
            count += 1

    return count
