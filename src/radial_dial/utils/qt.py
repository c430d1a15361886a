"""Qt helper utilities: turn Qt input events into engine pointer events."""

from PySide6 import QtCore, QtGui, QtWidgets

from ..engine.pointer import ContainerBounds, PointerEvent, PointerKind, PointerSource
from .geometry import ArcSegment

_TOUCH_KINDS = {
    QtCore.QEvent.Type.TouchBegin: PointerKind.START,
    QtCore.QEvent.Type.TouchUpdate: PointerKind.MOVE,
    QtCore.QEvent.Type.TouchEnd: PointerKind.END,
    QtCore.QEvent.Type.TouchCancel: PointerKind.END,
}


def container_bounds(widget: QtWidgets.QWidget) -> ContainerBounds:
    """Screen-space rectangle of ``widget``."""
    origin = widget.mapToGlobal(QtCore.QPoint(0, 0))
    return ContainerBounds(
        left=float(origin.x()),
        top=float(origin.y()),
        width=float(widget.width()),
        height=float(widget.height()),
    )


def pointer_event_from_mouse(
    kind: PointerKind, event: QtGui.QMouseEvent, bounds: ContainerBounds
) -> PointerEvent:
    pos = event.globalPosition()
    return PointerEvent(
        kind=kind,
        bounds=bounds,
        client_x=float(pos.x()),
        client_y=float(pos.y()),
        source=PointerSource.MOUSE,
    )


def touch_kind(event: QtCore.QEvent) -> "PointerKind | None":
    return _TOUCH_KINDS.get(event.type())


def pointer_event_from_touch(
    kind: PointerKind, event: QtGui.QTouchEvent, bounds: ContainerBounds
) -> PointerEvent:
    """Only the first touch point is tracked; extra fingers are ignored."""
    touches = tuple(
        (float(p.globalPosition().x()), float(p.globalPosition().y()))
        for p in event.points()
    )
    first = touches[0] if touches else (0.0, 0.0)
    return PointerEvent(
        kind=kind,
        bounds=bounds,
        client_x=first[0],
        client_y=first[1],
        source=PointerSource.TOUCH,
        touches=touches,
    )


def arc_path(segment: ArcSegment, center_x: float, center_y: float) -> QtGui.QPainterPath:
    """Build the painter path for ``segment`` in the dial's rotated frame.

    Qt measures arc angles counter-clockwise on screen, which is the negated
    dial angle, so the arc starts at ``-end_deg`` and sweeps back by
    ``sweep_deg``.
    """
    r = segment.radius
    rect = QtCore.QRectF(center_x - r, center_y - r, 2 * r, 2 * r)
    path = QtGui.QPainterPath()
    path.moveTo(QtCore.QPointF(*segment.start))
    path.arcTo(rect, -segment.end_deg, segment.sweep_deg)
    if segment.closed:
        path.closeSubpath()
    return path


__all__ = [
    "arc_path",
    "container_bounds",
    "pointer_event_from_mouse",
    "pointer_event_from_touch",
    "touch_kind",
]
