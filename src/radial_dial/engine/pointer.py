"""Normalized pointer events and the pointer-to-angle transform."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import math

from ..utils import radians_to_degrees

TAU = 2.0 * math.pi

# Applied to the pointer angle before quantization so a pointer resting on the
# maximum angle lands on ``max_value`` instead of flickering at the boundary.
POINTER_ANGLE_BIAS = 0.999


class PointerKind(Enum):
    START = "start"
    MOVE = "move"
    END = "end"


class PointerSource(Enum):
    MOUSE = "mouse"
    TOUCH = "touch"


@dataclass(frozen=True)
class ContainerBounds:
    """Screen-space bounding box of the element hosting the dial."""

    left: float
    top: float
    width: float
    height: float

    @property
    def pivot(self) -> Tuple[float, float]:
        """Container centre, in container-relative coordinates."""
        return self.width / 2.0, self.height / 2.0


@dataclass(frozen=True)
class PointerEvent:
    """A mouse or touch event reduced to what the dial engine needs.

    For mouse input ``client_x``/``client_y`` carry the pointer position. For
    touch input ``touches`` lists the active touch points and only the first
    one is used.
    """

    kind: PointerKind
    bounds: ContainerBounds
    client_x: float = 0.0
    client_y: float = 0.0
    source: PointerSource = PointerSource.MOUSE
    touches: Sequence[Tuple[float, float]] = ()

    @property
    def is_touch(self) -> bool:
        return self.source is PointerSource.TOUCH

    def primary_point(self) -> Optional[Tuple[float, float]]:
        if self.is_touch:
            return tuple(self.touches[0]) if self.touches else None  # type: ignore[return-value]
        return self.client_x, self.client_y


def relative_coordinates(
    event: PointerEvent, bounds: Optional[ContainerBounds] = None
) -> Tuple[float, float]:
    """Pointer position relative to the container's top-left corner.

    A touch event without any touch point falls back to ``client_x``/``client_y``.
    """
    box = bounds if bounds is not None else event.bounds
    point = event.primary_point()
    if point is None:
        point = (event.client_x, event.client_y)
    return point[0] - box.left, point[1] - box.top


def angle_from_pointer(x: float, y: float, pivot_x: float, pivot_y: float) -> float:
    """Clockwise angle in radians of ``(x, y)`` around the pivot, 0 pointing up.

    ``atan2`` measures from the positive x axis; the dial is drawn rotated by
    -90°, so a quarter turn is added. The upper-left quadrant would then come
    out negative and gets a further full turn.
    """
    raw = math.atan2(y - pivot_y, x - pivot_x)
    if -TAU / 2 < raw < -TAU / 4:
        return raw + TAU * 1.25
    return raw + TAU * 0.25


def pointer_angle_deg(event: PointerEvent) -> float:
    """Biased pointer angle in degrees, ready for quantization."""
    x, y = relative_coordinates(event)
    pivot_x, pivot_y = event.bounds.pivot
    angle = angle_from_pointer(x, y, pivot_x, pivot_y) * POINTER_ANGLE_BIAS
    return radians_to_degrees(angle)


__all__ = [
    "POINTER_ANGLE_BIAS",
    "TAU",
    "ContainerBounds",
    "PointerEvent",
    "PointerKind",
    "PointerSource",
    "angle_from_pointer",
    "pointer_angle_deg",
    "relative_coordinates",
]
