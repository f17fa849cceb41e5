"""
Split a segment into dashes for dotted overlays.
"""
import math
from typing import Generator, Iterable, Tuple

from .grid import _as_point

Point = Tuple[float, float]


def dashed_segments(start: Iterable[float],
                    end: Iterable[float],
                    dash_length: float) -> Generator[Tuple[Point, Point], None, None]:
    """
    Yield ``(p0, p1)`` pairs to draw for a dashed line from *start* to *end*.

    The walk takes ``floor(|end - start| / (2 * dash_length))`` steps of
    *dash_length*; step ``i`` covers ``[(i + 1) * dash_length, (i + 2) * dash_length]``
    along the line and only even steps are drawn.
    """
    dash_length = float(dash_length)
    if not math.isfinite(dash_length) or dash_length <= 0.0:
        raise ValueError(f"dash_length must be a positive finite number, got {dash_length}")

    sx, sy = _as_point(start, "start")
    ex, ey = _as_point(end, "end")
    distance = math.hypot(ex - sx, ey - sy)
    if not math.isfinite(distance):
        raise ValueError("dashed segment endpoints must be finite")
    if distance == 0.0:
        return

    ux, uy = (ex - sx) / distance, (ey - sy) / distance
    steps = int(distance // (2.0 * dash_length))
    for i in range(0, steps, 2):
        a = dash_length * (i + 1)
        b = a + dash_length
        yield (sx + ux * a, sy + uy * a), (sx + ux * b, sy + uy * b)
