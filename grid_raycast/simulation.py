"""
Per-frame state update for an interactive ray-casting playground.

All state lives in a `SimulationState` passed to `update`; nothing is kept at
module level, so the same function drives any number of independent scenes.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from .config import CasterConfig
from .dashed import dashed_segments
from .grid import OccupancyGrid
from .ray import Ray

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass
class SimulationState:
    grid: OccupancyGrid
    origin: Point
    config: CasterConfig = field(default_factory=CasterConfig)

    @classmethod
    def create(cls, config: Optional[CasterConfig] = None) -> "SimulationState":
        """Empty grid sized by *config*, origin at the centre of the view."""
        config = config if config is not None else CasterConfig()
        grid = OccupancyGrid(config.rows, config.cols, cell_size=config.cell_size)
        origin = (config.view_width / 2.0, config.view_height / 2.0)
        return cls(grid=grid, origin=origin, config=config)


@dataclass(frozen=True)
class FrameInput:
    target: Point
    up: bool = False
    left: bool = False
    down: bool = False
    right: bool = False
    paint: bool = False
    erase: bool = False
    clear: bool = False


@dataclass(frozen=True)
class FrameResult:
    origin: Point
    target: Point
    direction: Point
    distance: float
    hit_point: Point
    dash_length: float
    overlay_length: float

    def overlay_segments(self) -> Iterator[Tuple[Point, Point]]:
        """Dashes continuing the ray past the target."""
        if self.direction == (0.0, 0.0):
            return iter(())
        end = (self.target[0] + self.direction[0] * self.overlay_length,
               self.target[1] + self.direction[1] * self.overlay_length)
        return dashed_segments(self.target, end, self.dash_length)


def update(state: SimulationState, frame: FrameInput) -> FrameResult:
    """Apply one frame of input to *state* and cast the ray toward the target."""
    cfg = state.config
    x, y = state.origin
    if frame.up:
        y -= cfg.origin_speed
    if frame.left:
        x -= cfg.origin_speed
    if frame.down:
        y += cfg.origin_speed
    if frame.right:
        x += cfg.origin_speed
    state.origin = (x, y)

    target = (float(frame.target[0]), float(frame.target[1]))
    if frame.paint:
        state.grid.paint_at(target[0], target[1], True)
    elif frame.erase:
        state.grid.paint_at(target[0], target[1], False)

    if frame.clear:
        state.grid.clear()

    if target == state.origin:
        # nothing to aim at
        direction = (0.0, 0.0)
        distance = 0.0
        hit = state.origin
    else:
        ray = Ray.towards(state.origin, target)
        direction = ray.direction
        distance = ray.cast(state.grid, cfg.max_distance)
        hit = ray.point_at(distance)

    logger.debug("origin=%s target=%s distance=%.4f", state.origin, target, distance)
    return FrameResult(
        origin=state.origin,
        target=target,
        direction=direction,
        distance=distance,
        hit_point=hit,
        dash_length=cfg.dash_length,
        overlay_length=cfg.overlay_scale * cfg.max_distance,
    )
