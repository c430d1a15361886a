"""Quantized mapping between dial values and arc angles."""

from __future__ import annotations

import math

import numpy as np

from ..models import DialConfig
from ..utils import clamp


def round_half_up(x: float) -> int:
    """Round to the nearest integer, ties going up (``2.5 -> 3``)."""
    return int(math.floor(x + 0.5))


class ValueAngleMapper:
    """Convert between quantized values and angles for one :class:`DialConfig`.

    Angles are in degrees, measured clockwise from the top of the dial. Values
    are always of the form ``min_value + k * step`` with ``0 <= k <= num_steps``.
    """

    def __init__(self, config: DialConfig) -> None:
        self.config = config

    @property
    def num_steps(self) -> int:
        return self.config.num_steps

    @property
    def per_step_angle(self) -> float:
        return self.config.per_step_angle

    def value_at(self, k: int) -> float:
        """The ``k``-th quantized value; the last step is exactly ``max_value``."""
        if k >= self.num_steps:
            return self.config.max_value
        return self.config.min_value + k * self.config.step

    def angle_from_value(self, value: float) -> float:
        cfg = self.config
        return (
            value - cfg.min_value
        ) / cfg.step * self.per_step_angle + cfg.min_angle_deg

    def value_from_angle(self, angle_deg: float) -> float:
        """Quantize ``angle_deg``; angles in the gap saturate at the end-stops."""
        cfg = self.config
        if angle_deg <= cfg.min_angle_deg:
            return cfg.min_value
        if angle_deg >= cfg.max_angle_deg:
            return cfg.max_value

        steps = round_half_up(
            max(angle_deg - cfg.min_angle_deg, 0.0) / self.per_step_angle
        )
        return self.value_at(steps)

    def quantize(self, value: float) -> float:
        """Clamp ``value`` into range and snap it to the nearest step."""
        cfg = self.config
        v = clamp(value, cfg.min_value, cfg.max_value)
        steps = round_half_up((v - cfg.min_value) / cfg.step)
        return self.value_at(min(max(steps, 0), self.num_steps))

    def tick_values(self) -> np.ndarray:
        """Values marked with a point on the arc: every second step, min first."""
        ks = np.arange(0, self.num_steps + 1, 2, dtype=np.float64)
        return self.config.min_value + ks * self.config.step

    def tick_angles(self) -> np.ndarray:
        # angle_from_value is plain arithmetic, so it broadcasts over arrays.
        return self.angle_from_value(self.tick_values())  # type: ignore[arg-type,return-value]


__all__ = ["ValueAngleMapper", "round_half_up"]
