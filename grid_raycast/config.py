"""
Configuration for the ray-casting playground.
"""
import logging
import math
from dataclasses import dataclass, fields
from typing import Any, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CasterConfig:
    """Grid dimensions, ray budget and overlay settings for a simulation."""

    rows: int = 80
    cols: int = 80
    cell_size: float = 20.0
    max_distance: float = 1000.0
    origin_speed: float = 8.0
    dash_length: float = 4.0
    # the dotted continuation past the target is this many budgets long
    overlay_scale: float = 100.0
    # visible area; the origin starts at its centre
    view_width: float = 800.0
    view_height: float = 800.0

    def __post_init__(self) -> None:
        if self.rows < 0 or self.cols < 0:
            raise ValueError(f"grid shape must be non-negative, got ({self.rows}, {self.cols})")
        for name in ("cell_size", "dash_length"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{name} must be a positive finite number, got {value}")
        for name in ("max_distance", "origin_speed", "overlay_scale",
                     "view_width", "view_height"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"{name} must be a non-negative finite number, got {value}")

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "CasterConfig":
        """Build a config from a mapping, coercing types and dropping unknown keys."""
        known = {f.name: f for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            if key not in known:
                logger.warning("ignoring unknown config key %r", key)
                continue
            kwargs[key] = int(value) if known[key].type in (int, "int") else float(value)
        return cls(**kwargs)

    @property
    def world_size(self):
        """World extent ``(width, height)`` of the configured grid."""
        return self.cols * self.cell_size, self.rows * self.cell_size
