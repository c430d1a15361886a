"""Drag state machine behaviour: transitions, redraw suppression, isolation."""

from __future__ import annotations

from typing import List

from conftest import RecordingAdapter, pointer_at
from hypothesis import given
from hypothesis import strategies as st
import pytest

from radial_dial.engine import (
    IGNORED,
    Dial,
    DialPhase,
    DialStateMachine,
    PointerKind,
    PointerSource,
    Redraw,
)
from radial_dial.models import DialConfig
from radial_dial.render import RenderAdapter


def _listen(machine: DialStateMachine) -> List[Redraw]:
    seen: List[Redraw] = []
    machine.subscribe(seen.append)
    return seen


@pytest.mark.parametrize(("angle", "value"), ((36.0, 0), (324.0, 10), (180.0, 5)))
def test_reference_examples(config: DialConfig, angle: float, value: float) -> None:
    machine = DialStateMachine(config)
    machine.set_value(2)  # so that every example is a change
    machine.drag_start(pointer_at(PointerKind.START, angle))
    assert machine.get_value() == value


def test_initial_value_is_clamped_and_quantized() -> None:
    assert DialStateMachine(DialConfig()).get_value() == 0
    assert DialStateMachine(DialConfig(initial_value=3.3)).get_value() == 3.5
    assert DialStateMachine(DialConfig(initial_value=42)).get_value() == 10
    assert DialStateMachine(DialConfig(initial_value=-1)).get_value() == 0


def test_drag_start_emits_canonical_redraw(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    seen = _listen(machine)

    transition = machine.drag_start(pointer_at(PointerKind.START, 180.0))

    assert transition.accepted
    assert not transition.consumed
    assert transition.redraw == Redraw(5.0, machine.mapper.angle_from_value(5.0))
    assert seen == [transition.redraw]
    assert machine.dragging
    assert machine.phase is DialPhase.DRAGGING


def test_redraw_uses_quantized_angle_not_pointer_angle(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    transition = machine.drag_start(pointer_at(PointerKind.START, 187.0))

    assert transition.redraw is not None
    assert transition.redraw.value == 5
    assert transition.redraw.angle_deg == pytest.approx(180.0)


def test_repeated_moves_at_same_angle_redraw_once(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    seen = _listen(machine)

    machine.drag_start(pointer_at(PointerKind.START, 180.0))
    for _ in range(5):
        transition = machine.drag_move(pointer_at(PointerKind.MOVE, 180.0))
        assert transition.accepted
        assert transition.consumed
        assert transition.redraw is None

    assert len(seen) == 1


def test_drag_start_on_current_value_emits_nothing(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    seen = _listen(machine)

    transition = machine.drag_start(pointer_at(PointerKind.START, 20.0))  # in the gap

    assert transition.accepted
    assert transition.redraw is None
    assert machine.dragging
    assert seen == []


def test_drag_start_while_dragging_is_ignored(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    machine.drag_start(pointer_at(PointerKind.START, 180.0))

    assert machine.drag_start(pointer_at(PointerKind.START, 300.0)) is IGNORED
    assert machine.get_value() == 5


def test_move_while_idle_is_ignored(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    seen = _listen(machine)

    transition = machine.drag_move(pointer_at(PointerKind.MOVE, 180.0))

    assert not transition.accepted
    assert not transition.consumed
    assert machine.get_value() == 0
    assert seen == []


def test_end_without_start_changes_nothing(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    machine.set_value(4)

    assert machine.drag_end() is IGNORED
    assert machine.get_value() == 4
    assert not machine.dragging


def test_drag_end_keeps_value_and_returns_to_idle(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    seen = _listen(machine)
    machine.drag_start(pointer_at(PointerKind.START, 180.0))
    machine.drag_move(pointer_at(PointerKind.MOVE, 250.0))

    transition = machine.drag_end(pointer_at(PointerKind.END, 10.0))

    assert transition.accepted
    assert transition.redraw is None
    assert machine.phase is DialPhase.IDLE
    assert machine.get_value() == seen[-1].value
    # A move after the drag ended no longer tracks.
    machine.drag_move(pointer_at(PointerKind.MOVE, 100.0))
    assert machine.get_value() == seen[-1].value


def test_handle_dispatches_on_kind(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    assert machine.handle(pointer_at(PointerKind.START, 90.0)).accepted
    assert machine.handle(pointer_at(PointerKind.MOVE, 120.0)).consumed
    assert machine.handle(pointer_at(PointerKind.END, 120.0)).accepted
    assert not machine.dragging


def test_touch_drag_flag(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    machine.drag_start(pointer_at(PointerKind.START, 90.0, PointerSource.TOUCH))
    assert machine.touch_drag
    machine.drag_end()
    assert not machine.touch_drag


def test_set_value_notifies_only_on_change(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    seen = _listen(machine)

    assert machine.set_value(7.3) == Redraw(7.5, machine.mapper.angle_from_value(7.5))
    assert machine.set_value(7.5) is None
    assert len(seen) == 1


def test_unsubscribe_stops_notifications(config: DialConfig) -> None:
    machine = DialStateMachine(config)
    seen = _listen(machine)
    machine.unsubscribe(seen.append)
    machine.set_value(3)
    assert seen == []


def test_instances_are_independent() -> None:
    a = DialStateMachine(DialConfig())
    b = DialStateMachine(DialConfig(min_value=-50, max_value=50, step=5))
    seen_b = _listen(b)

    a.drag_start(pointer_at(PointerKind.START, 180.0))
    a.drag_move(pointer_at(PointerKind.MOVE, 300.0))

    assert b.get_value() == 0
    assert not b.dragging
    assert seen_b == []


@given(angle=st.floats(min_value=0.5, max_value=359.5))
def test_any_pointer_lands_on_canonical_state(angle: float) -> None:
    machine = DialStateMachine(DialConfig(initial_value=0))
    machine.drag_start(pointer_at(PointerKind.START, angle))
    value = machine.get_value()
    assert 0 <= value <= 10
    assert (value * 2).is_integer()
    assert machine.canonical_angle() == machine.mapper.angle_from_value(value)


# ------------------------------- Dial controller ------------------------------


def test_recording_adapter_satisfies_protocol(adapter: RecordingAdapter) -> None:
    assert isinstance(adapter, RenderAdapter)


def test_draw_renders_every_element(config: DialConfig, adapter: RecordingAdapter) -> None:
    dial = Dial(config, adapter)
    dial.draw()

    assert adapter.names() == ["background", "points", "active_arc", "handle", "label"]
    assert adapter.calls[0] == ("background", (80.0, 324.0))
    assert len(adapter.calls[1][1][0]) == 11
    assert adapter.calls[2] == ("active_arc", (80.0, 36.0))
    assert adapter.calls[3] == ("handle", (36.0, 80.0))
    assert adapter.calls[4] == ("label", (0,))


def test_value_change_redraws_arc_handle_label(
    config: DialConfig, adapter: RecordingAdapter
) -> None:
    dial = Dial(config, adapter)
    transition = dial.handle_pointer(pointer_at(PointerKind.START, 180.0))

    assert transition.redraw is not None
    angle = transition.redraw.angle_deg
    assert adapter.calls == [
        ("active_arc", (80.0, angle)),
        ("handle", (angle, 80.0)),
        ("label", (5.0,)),
    ]


def test_touch_drag_emphasizes_handle(config: DialConfig, adapter: RecordingAdapter) -> None:
    dial = Dial(config, adapter)
    dial.handle_pointer(pointer_at(PointerKind.START, 36.0, PointerSource.TOUCH))
    assert adapter.calls == [("emphasis", (True,))]

    adapter.clear()
    dial.handle_pointer(pointer_at(PointerKind.END, 36.0, PointerSource.TOUCH))
    assert adapter.calls == [("emphasis", (False,))]


def test_mouse_drag_leaves_handle_size_alone(
    config: DialConfig, adapter: RecordingAdapter
) -> None:
    dial = Dial(config, adapter)
    dial.handle_pointer(pointer_at(PointerKind.START, 36.0))
    dial.handle_pointer(pointer_at(PointerKind.END, 36.0))
    assert "emphasis" not in adapter.names()


def test_release_is_idempotent(config: DialConfig, adapter: RecordingAdapter) -> None:
    dial = Dial(config, adapter)
    assert not dial.release().accepted

    dial.handle_pointer(pointer_at(PointerKind.START, 180.0, PointerSource.TOUCH))
    adapter.clear()
    assert dial.release().accepted
    assert not dial.release().accepted
    assert adapter.calls == [("emphasis", (False,))]
    assert dial.get_value() == 5
