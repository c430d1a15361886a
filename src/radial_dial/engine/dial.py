"""Drag state machine for a dial and the controller that binds it to a renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional

import logging

from ..models import DialConfig
from .mapper import ValueAngleMapper
from .pointer import PointerEvent, PointerKind, pointer_angle_deg

if TYPE_CHECKING:  # pragma: no cover - only for type checkers
    from ..render import RenderAdapter
    from .router import ReleaseRouter

logger = logging.getLogger(__name__)


class DialPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass
class DialState:
    """Mutable state owned by exactly one :class:`DialStateMachine`."""

    current_value: float
    dragging: bool = False
    touch_drag: bool = False


@dataclass(frozen=True)
class Redraw:
    """What a renderer needs after a value change: the value and its canonical angle."""

    value: float
    angle_deg: float


@dataclass(frozen=True)
class Transition:
    """Outcome of feeding one event to the state machine.

    ``accepted`` is False when the event did not apply in the current phase.
    ``consumed`` tells the event layer to suppress default scroll/selection
    handling. ``redraw`` is set only when ``current_value`` changed.
    """

    accepted: bool
    consumed: bool = False
    redraw: Optional[Redraw] = None


IGNORED = Transition(accepted=False)

RedrawListener = Callable[[Redraw], None]


class DialStateMachine:
    """Idle/dragging state machine turning pointer events into quantized values."""

    def __init__(self, config: DialConfig) -> None:
        self.config = config
        self.mapper = ValueAngleMapper(config)
        self._state = DialState(current_value=self.mapper.quantize(config.initial_value))
        self._listeners: List[RedrawListener] = []

    # ----------------------------- Queries ------------------------------------

    @property
    def phase(self) -> DialPhase:
        return DialPhase.DRAGGING if self._state.dragging else DialPhase.IDLE

    @property
    def dragging(self) -> bool:
        return self._state.dragging

    @property
    def touch_drag(self) -> bool:
        return self._state.touch_drag

    def get_value(self) -> float:
        return self._state.current_value

    def canonical_angle(self) -> float:
        return self.mapper.angle_from_value(self._state.current_value)

    def snapshot(self) -> Redraw:
        return Redraw(self._state.current_value, self.canonical_angle())

    # ----------------------------- Listeners ----------------------------------

    def subscribe(self, listener: RedrawListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: RedrawListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ----------------------------- Transitions --------------------------------

    def handle(self, event: PointerEvent) -> Transition:
        if event.kind is PointerKind.START:
            return self.drag_start(event)
        if event.kind is PointerKind.MOVE:
            return self.drag_move(event)
        return self.drag_end(event)

    def drag_start(self, event: PointerEvent) -> Transition:
        if self._state.dragging:
            logger.debug("drag_start ignored: already dragging")
            return IGNORED
        self._state.dragging = True
        self._state.touch_drag = event.is_touch
        logger.debug("drag started (%s)", event.source.value)
        return Transition(accepted=True, redraw=self._track(event))

    def drag_move(self, event: PointerEvent) -> Transition:
        if not self._state.dragging:
            return IGNORED
        return Transition(accepted=True, consumed=True, redraw=self._track(event))

    def drag_end(self, event: Optional[PointerEvent] = None) -> Transition:
        if not self._state.dragging:
            logger.debug("drag_end ignored: not dragging")
            return IGNORED
        self._state.dragging = False
        self._state.touch_drag = False
        logger.debug("drag ended at value %r", self._state.current_value)
        return Transition(accepted=True)

    def set_value(self, value: float) -> Optional[Redraw]:
        """Programmatically move the dial; ``value`` is clamped and quantized."""
        return self._apply(self.mapper.quantize(value))

    # ----------------------------- Internals ----------------------------------

    def _track(self, event: PointerEvent) -> Optional[Redraw]:
        angle = pointer_angle_deg(event)
        return self._apply(self.mapper.value_from_angle(angle))

    def _apply(self, new_value: float) -> Optional[Redraw]:
        if new_value == self._state.current_value:
            return None
        self._state.current_value = new_value
        redraw = self.snapshot()
        logger.debug("value -> %r (angle %.3f)", redraw.value, redraw.angle_deg)
        for listener in list(self._listeners):
            listener(redraw)
        return redraw


class Dial:
    """One dial: a state machine plus the adapter that draws it.

    The adapter only ever receives values computed here; it never derives
    angles or values itself.
    """

    def __init__(
        self,
        config: DialConfig,
        adapter: "RenderAdapter",
        router: Optional["ReleaseRouter"] = None,
    ) -> None:
        self.config = config
        self.adapter = adapter
        self.machine = DialStateMachine(config)
        self.machine.subscribe(self._on_redraw)
        self._router = router
        if router is not None:
            router.register(self)

    @property
    def dragging(self) -> bool:
        return self.machine.dragging

    def get_value(self) -> float:
        return self.machine.get_value()

    def set_value(self, value: float) -> Optional[Redraw]:
        return self.machine.set_value(value)

    def draw(self) -> None:
        """Render every element once from the current state."""
        cfg = self.config
        state = self.machine.snapshot()
        self.adapter.render_background(cfg.radius, cfg.max_angle_deg)
        self.adapter.render_points([float(a) for a in self.machine.mapper.tick_angles()])
        self.adapter.render_active_arc(cfg.radius, state.angle_deg)
        self.adapter.render_handle(state.angle_deg, cfg.radius)
        self.adapter.render_label(state.value)

    def handle_pointer(self, event: PointerEvent) -> Transition:
        was_touch = self.machine.touch_drag
        transition = self.machine.handle(event)
        if not transition.accepted:
            return transition
        if event.kind is PointerKind.START:
            if self._router is not None:
                self._router.claim(self)
            if event.is_touch:
                self.adapter.render_handle_emphasis(True)
        elif event.kind is PointerKind.END:
            self._finish(was_touch)
        return transition

    def release(self) -> Transition:
        """End the active drag, if any; safe to call at any time."""
        was_touch = self.machine.touch_drag
        transition = self.machine.drag_end()
        if transition.accepted:
            self._finish(was_touch)
        return transition

    def close(self) -> None:
        self.machine.unsubscribe(self._on_redraw)
        if self._router is not None:
            self._router.unregister(self)
            self._router = None

    def _finish(self, was_touch: bool) -> None:
        if self._router is not None:
            self._router.forget(self)
        if was_touch:
            self.adapter.render_handle_emphasis(False)

    def _on_redraw(self, redraw: Redraw) -> None:
        self.adapter.render_active_arc(self.config.radius, redraw.angle_deg)
        self.adapter.render_handle(redraw.angle_deg, self.config.radius)
        self.adapter.render_label(redraw.value)


__all__ = [
    "Dial",
    "DialPhase",
    "DialState",
    "DialStateMachine",
    "IGNORED",
    "Redraw",
    "Transition",
]
