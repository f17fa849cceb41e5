"""
2D DDA ray casting on uniform occupancy grids.
"""
import logging

from .config import CasterConfig
from .dashed import dashed_segments
from .errors import DegenerateDirectionError
from .grid import OccupancyGrid
from .log import setup_logging
from .ray import Ray
from .simulation import FrameInput, FrameResult, SimulationState, update
from .traversal import cast_ray, hit_point, traverse_cells

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CasterConfig",
    "DegenerateDirectionError",
    "FrameInput",
    "FrameResult",
    "OccupancyGrid",
    "Ray",
    "SimulationState",
    "cast_ray",
    "dashed_segments",
    "hit_point",
    "setup_logging",
    "traverse_cells",
    "update",
]
