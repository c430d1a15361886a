"""Geometry helpers used throughout the engine and render layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, TypeVar, Union

import math

import numpy as np

Number = TypeVar("Number", float, np.ndarray)

FULL_CIRCLE_DEG = 360.0


def degrees_to_radians(angle: Number) -> Number:
    return angle * math.pi / 180.0


def radians_to_degrees(angle: Number) -> Number:
    return angle * 180.0 / math.pi


def polar_to_cartesian(
    center_x: float, center_y: float, radius: float, angle_deg: Number
) -> Tuple[Number, Number]:
    """Point at ``angle_deg`` on the circle around ``(center_x, center_y)``.

    ``angle_deg`` may be a scalar or a NumPy array; arrays give arrays back.
    """
    theta = degrees_to_radians(angle_deg)
    if isinstance(theta, np.ndarray):
        return center_x + radius * np.cos(theta), center_y + radius * np.sin(theta)
    x = center_x + radius * math.cos(theta)
    y = center_y + radius * math.sin(theta)
    return x, y


@dataclass(frozen=True)
class ArcSegment:
    """An arc drawn from ``start`` (at ``end_deg``) back to ``end`` (at ``start_deg``).

    This mirrors SVG's elliptical-arc command: the pen starts on the end
    angle and sweeps towards the start angle with sweep-flag 0.
    """

    start: Tuple[float, float]
    end: Tuple[float, float]
    radius: float
    large_arc: bool
    closed: bool
    start_deg: float
    end_deg: float

    @property
    def sweep_deg(self) -> float:
        return self.end_deg - self.start_deg

    def to_svg(self) -> str:
        parts: list[Union[str, float, int]] = [
            "M",
            self.start[0],
            self.start[1],
            "A",
            self.radius,
            self.radius,
            0,
            1 if self.large_arc else 0,
            0,
            self.end[0],
            self.end[1],
        ]
        if self.closed:
            parts.append("z")
        return " ".join(format_number(p) for p in parts)


def format_number(part: Union[str, float, int]) -> str:
    if isinstance(part, str):
        return part
    if float(part).is_integer():
        return str(int(part))
    return repr(float(part))


def arc_segment(
    center_x: float,
    center_y: float,
    radius: float,
    start_angle_deg: float,
    end_angle_deg: float,
) -> ArcSegment:
    """Structured arc from ``start_angle_deg`` to ``end_angle_deg``.

    A sweep of exactly 360° would be a zero-length SVG arc, so it is drawn as
    359° and marked closed instead.
    """
    full = end_angle_deg - start_angle_deg == FULL_CIRCLE_DEG
    if full:
        end_angle_deg = start_angle_deg + FULL_CIRCLE_DEG - 1.0

    start = polar_to_cartesian(center_x, center_y, radius, end_angle_deg)
    end = polar_to_cartesian(center_x, center_y, radius, start_angle_deg)
    large_arc = end_angle_deg - start_angle_deg > 180.0

    return ArcSegment(
        start=(float(start[0]), float(start[1])),
        end=(float(end[0]), float(end[1])),
        radius=float(radius),
        large_arc=large_arc,
        closed=full,
        start_deg=float(start_angle_deg),
        end_deg=float(end_angle_deg),
    )


def describe_arc(
    center_x: float,
    center_y: float,
    radius: float,
    start_angle_deg: float,
    end_angle_deg: float,
) -> str:
    """SVG path data for the arc from ``start_angle_deg`` to ``end_angle_deg``."""
    return arc_segment(
        center_x, center_y, radius, start_angle_deg, end_angle_deg
    ).to_svg()


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to the inclusive range ``[lo, hi]``."""
    return max(lo, min(hi, value))


__all__ = [
    "ArcSegment",
    "arc_segment",
    "describe_arc",
    "polar_to_cartesian",
    "degrees_to_radians",
    "radians_to_degrees",
    "clamp",
    "format_number",
    "FULL_CIRCLE_DEG",
]
