"""Geometry/interaction engine: value mapping, pointer tracking and drag state."""

from .dial import (
    IGNORED,
    Dial,
    DialPhase,
    DialState,
    DialStateMachine,
    Redraw,
    Transition,
)
from .mapper import ValueAngleMapper, round_half_up
from .pointer import (
    POINTER_ANGLE_BIAS,
    ContainerBounds,
    PointerEvent,
    PointerKind,
    PointerSource,
    angle_from_pointer,
    pointer_angle_deg,
    relative_coordinates,
)
from .router import ReleaseRouter

__all__ = [
    "IGNORED",
    "Dial",
    "DialPhase",
    "DialState",
    "DialStateMachine",
    "Redraw",
    "Transition",
    "ValueAngleMapper",
    "round_half_up",
    "POINTER_ANGLE_BIAS",
    "ContainerBounds",
    "PointerEvent",
    "PointerKind",
    "PointerSource",
    "angle_from_pointer",
    "pointer_angle_deg",
    "relative_coordinates",
    "ReleaseRouter",
]
