"""Shared helpers for the radial_dial engine and render layers."""

from .geometry import (
    ArcSegment,
    arc_segment,
    clamp,
    degrees_to_radians,
    describe_arc,
    format_number,
    polar_to_cartesian,
    radians_to_degrees,
)

__all__ = [
    "ArcSegment",
    "arc_segment",
    "clamp",
    "format_number",
    "degrees_to_radians",
    "describe_arc",
    "polar_to_cartesian",
    "radians_to_degrees",
]
