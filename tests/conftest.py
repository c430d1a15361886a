"""Shared fixtures and helpers for the radial_dial test-suite."""

from __future__ import annotations

import math
import os
from typing import Any, List, Sequence, Tuple

import pytest

# Qt widget tests render without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from radial_dial.engine import (  # noqa: E402
    ContainerBounds,
    PointerEvent,
    PointerKind,
    PointerSource,
)
from radial_dial.models import DialConfig  # noqa: E402

BOUNDS = ContainerBounds(left=10.0, top=20.0, width=200.0, height=200.0)
POINTER_RADIUS = 60.0


def client_point(angle_deg: float, bounds: ContainerBounds = BOUNDS) -> Tuple[float, float]:
    """Screen position at ``angle_deg`` clockwise from the top of the dial."""
    theta = math.radians(angle_deg)
    pivot_x, pivot_y = bounds.pivot
    x = bounds.left + pivot_x + POINTER_RADIUS * math.sin(theta)
    y = bounds.top + pivot_y - POINTER_RADIUS * math.cos(theta)
    return x, y


def pointer_at(
    kind: PointerKind,
    angle_deg: float,
    source: PointerSource = PointerSource.MOUSE,
    bounds: ContainerBounds = BOUNDS,
) -> PointerEvent:
    x, y = client_point(angle_deg, bounds)
    if source is PointerSource.TOUCH:
        return PointerEvent(kind=kind, bounds=bounds, source=source, touches=((x, y),))
    return PointerEvent(kind=kind, bounds=bounds, client_x=x, client_y=y)


class RecordingAdapter:
    """Render adapter that records every call it receives."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def clear(self) -> None:
        self.calls.clear()

    def render_background(self, radius: float, span_angle_deg: float) -> None:
        self.calls.append(("background", (radius, span_angle_deg)))

    def render_points(self, angles_deg: Sequence[float]) -> None:
        self.calls.append(("points", (list(angles_deg),)))

    def render_active_arc(self, radius: float, angle_deg: float) -> None:
        self.calls.append(("active_arc", (radius, angle_deg)))

    def render_handle(self, angle_deg: float, radius: float) -> None:
        self.calls.append(("handle", (angle_deg, radius)))

    def render_label(self, value: float) -> None:
        self.calls.append(("label", (value,)))

    def render_handle_emphasis(self, active: bool) -> None:
        self.calls.append(("emphasis", (active,)))


@pytest.fixture
def config() -> DialConfig:
    """The reference dial: 0..10 in steps of 0.5 over 36°..324°."""
    return DialConfig(min_value=0, max_value=10, step=0.5)


@pytest.fixture
def adapter() -> RecordingAdapter:
    return RecordingAdapter()
