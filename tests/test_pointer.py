"""Tests for pointer normalization and the pointer-to-angle transform."""

from __future__ import annotations

import math

from conftest import BOUNDS, client_point, pointer_at
from hypothesis import given
from hypothesis import strategies as st
import pytest

from radial_dial.engine import (
    POINTER_ANGLE_BIAS,
    PointerEvent,
    PointerKind,
    PointerSource,
    angle_from_pointer,
    pointer_angle_deg,
    relative_coordinates,
)


def test_relative_coordinates_mouse() -> None:
    event = PointerEvent(kind=PointerKind.MOVE, bounds=BOUNDS, client_x=110, client_y=120)
    assert relative_coordinates(event) == (100, 100)


def test_relative_coordinates_uses_first_touch_only() -> None:
    event = PointerEvent(
        kind=PointerKind.MOVE,
        bounds=BOUNDS,
        source=PointerSource.TOUCH,
        touches=((60.0, 70.0), (500.0, 500.0)),
    )
    assert event.is_touch
    assert relative_coordinates(event) == (50, 50)


def test_relative_coordinates_touch_without_points_falls_back() -> None:
    event = PointerEvent(
        kind=PointerKind.END,
        bounds=BOUNDS,
        client_x=30,
        client_y=40,
        source=PointerSource.TOUCH,
    )
    assert relative_coordinates(event) == (20, 20)


@pytest.mark.parametrize(
    ("x", "y", "expected"),
    (
        (100, 20, 0.0),  # top
        (180, 100, math.pi / 2),  # right
        (100, 180, math.pi),  # bottom
        (20, 100, 3 * math.pi / 2),  # left
        (150, 50, math.pi / 4),  # upper right
        (50, 50, 7 * math.pi / 4),  # upper left
    ),
)
def test_angle_from_pointer_clockwise_from_top(x: float, y: float, expected: float) -> None:
    assert angle_from_pointer(x, y, 100, 100) == pytest.approx(expected)


@given(theta=st.floats(min_value=0.001, max_value=2 * math.pi - 0.001))
def test_angle_from_pointer_is_continuous_away_from_seam(theta: float) -> None:
    x = 100 + 50 * math.sin(theta)
    y = 100 - 50 * math.cos(theta)
    assert angle_from_pointer(x, y, 100, 100) == pytest.approx(theta, abs=1e-9)


def test_pointer_angle_deg_applies_bias() -> None:
    event = pointer_at(PointerKind.MOVE, 180.0)
    assert pointer_angle_deg(event) == pytest.approx(180.0 * POINTER_ANGLE_BIAS)
    assert POINTER_ANGLE_BIAS == 0.999


def test_pivot_is_container_centre() -> None:
    assert BOUNDS.pivot == (100.0, 100.0)
    x, y = client_point(90.0)
    assert (x, y) == pytest.approx((BOUNDS.left + 160.0, BOUNDS.top + 100.0))
