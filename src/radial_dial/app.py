"""Qt application entry point and widget adapter for radial dials."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import json
import logging
import sys

from PySide6 import QtCore, QtGui, QtWidgets

APP_VERSION: str

if __package__ in (None, ""):
    PACKAGE_ROOT = Path(__file__).resolve().parents[1]
    if str(PACKAGE_ROOT) not in sys.path:
        sys.path.insert(0, str(PACKAGE_ROOT))

    import radial_dial as _pkg

    from radial_dial.engine import Dial, PointerKind, PointerSource, ReleaseRouter
    from radial_dial.models import AppConfig, ConfigurationError, DialConfig, DialLayout
    from radial_dial.utils import arc_segment, polar_to_cartesian
    from radial_dial.utils.qt import (
        arc_path,
        container_bounds,
        pointer_event_from_mouse,
        pointer_event_from_touch,
        touch_kind,
    )

    APP_VERSION = getattr(_pkg, "__version__", "0.0.0")
else:
    from . import __version__ as APP_VERSION
    from .engine import Dial, PointerKind, PointerSource, ReleaseRouter
    from .models import AppConfig, ConfigurationError, DialConfig, DialLayout
    from .utils import arc_segment, polar_to_cartesian
    from .utils.qt import (
        arc_path,
        container_bounds,
        pointer_event_from_mouse,
        pointer_event_from_touch,
        touch_kind,
    )

logger = logging.getLogger(__name__)


# -------------------------------- Dial Widget ---------------------------------


class DialWidget(QtWidgets.QWidget):
    """A radial dial drawn with QPainter.

    The widget is the render adapter for its :class:`Dial`: it stores what the
    engine tells it to draw and repaints. Geometry is laid out in the
    ``layout.width`` x ``layout.height`` view box and scaled to the widget.
    """

    valueChanged = QtCore.Signal(float)

    def __init__(
        self,
        config: DialConfig,
        layout: Optional[DialLayout] = None,
        router: Optional[ReleaseRouter] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config
        self.dial_layout = layout or DialLayout()
        self.setAttribute(QtCore.Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setMinimumSize(
            int(self.dial_layout.width / 2), int(self.dial_layout.height / 2)
        )
        self.resize(int(self.dial_layout.width), int(self.dial_layout.height))

        self._background_end: Optional[float] = None
        self._points: List[float] = []
        self._active_angle: Optional[float] = None
        self._handle_angle: Optional[float] = None
        self._handle_radius: float = config.radius
        self._label = ""
        self._emphasis = False

        self.dial = Dial(config, self, router)
        self.dial.draw()

    # ----------------------------- Public API ---------------------------------

    def value(self) -> float:
        return self.dial.get_value()

    def setValue(self, value: float) -> None:
        self.dial.set_value(value)

    def sizeHint(self) -> QtCore.QSize:
        return QtCore.QSize(int(self.dial_layout.width), int(self.dial_layout.height))

    @property
    def label_text(self) -> str:
        return self._label

    @property
    def handle_emphasized(self) -> bool:
        return self._emphasis

    # ----------------------------- Render adapter -----------------------------

    def render_background(self, radius: float, span_angle_deg: float) -> None:
        self._background_end = span_angle_deg
        self.update()

    def render_points(self, angles_deg: Sequence[float]) -> None:
        self._points = list(angles_deg)
        self.update()

    def render_active_arc(self, radius: float, angle_deg: float) -> None:
        self._active_angle = angle_deg
        self.update()

    def render_handle(self, angle_deg: float, radius: float) -> None:
        self._handle_angle = angle_deg
        self._handle_radius = radius
        self.update()

    def render_label(self, value: float) -> None:
        self._label = self.config.format_value(value)
        self.update()
        self.valueChanged.emit(float(value))

    def render_handle_emphasis(self, active: bool) -> None:
        self._emphasis = bool(active)
        self.update()

    # ----------------------------- Interaction --------------------------------

    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.MouseButton.LeftButton:
            super().mousePressEvent(e)
            return
        self.dial.handle_pointer(
            pointer_event_from_mouse(PointerKind.START, e, container_bounds(self))
        )
        e.accept()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        transition = self.dial.handle_pointer(
            pointer_event_from_mouse(PointerKind.MOVE, e, container_bounds(self))
        )
        if transition.consumed:
            e.accept()
        else:
            super().mouseMoveEvent(e)

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(e)
            return
        self.dial.handle_pointer(
            pointer_event_from_mouse(PointerKind.END, e, container_bounds(self))
        )
        e.accept()

    def event(self, e: QtCore.QEvent) -> bool:
        kind = touch_kind(e)
        if kind is None:
            return super().event(e)
        self.dial.handle_pointer(
            pointer_event_from_touch(kind, e, container_bounds(self))  # type: ignore[arg-type]
        )
        e.accept()
        return True

    # ----------------------------- Painting -----------------------------------

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        cfg = self.config
        lay = self.dial_layout
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        painter.scale(self.width() / lay.width, self.height() / lay.height)

        painter.save()
        painter.translate(cfg.center_x, cfg.center_y)
        painter.rotate(-90)
        painter.translate(-cfg.center_x, -cfg.center_y)
        painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)

        if self._background_end is not None:
            pen = QtGui.QPen(QtGui.QColor(lay.background_color), lay.arc_thickness)
            painter.setPen(pen)
            painter.drawPath(self._arc(cfg.radius, self._background_end))

        if self._active_angle is not None:
            pen = QtGui.QPen(QtGui.QColor(cfg.color), lay.active_arc_thickness)
            painter.setPen(pen)
            painter.drawPath(self._arc(cfg.radius, self._active_angle))

        stroke = QtGui.QPen(
            QtGui.QColor(lay.background_color), lay.handle_stroke_thickness
        )
        if lay.show_points:
            painter.setPen(stroke)
            painter.setBrush(QtGui.QBrush(QtGui.QColor(lay.point_fill_color)))
            r = lay.arc_thickness - 2
            for angle in self._points:
                x, y = polar_to_cartesian(cfg.center_x, cfg.center_y, cfg.radius, angle)
                painter.drawEllipse(QtCore.QPointF(x, y), r, r)

        if self._handle_angle is not None:
            x, y = polar_to_cartesian(
                cfg.center_x, cfg.center_y, self._handle_radius, self._handle_angle
            )
            r = lay.arc_thickness * (lay.touch_handle_scale if self._emphasis else 1.0)
            painter.setPen(QtGui.QPen(QtGui.QColor(cfg.color), lay.handle_stroke_thickness))
            painter.setBrush(QtGui.QBrush(QtGui.QColor(cfg.handle_fill_color)))
            painter.drawEllipse(QtCore.QPointF(x, y), r, r)
        painter.restore()

        font = painter.font()
        font.setPointSizeF(max(8.0, lay.height / 12.0))
        painter.setFont(font)
        painter.setPen(QtGui.QPen(self.palette().color(QtGui.QPalette.ColorRole.WindowText)))
        label_rect = QtCore.QRectF(0, lay.label_y() - lay.height / 8.0, lay.width, lay.height / 4.0)
        painter.drawText(label_rect, QtCore.Qt.AlignmentFlag.AlignCenter, self._label)

        if cfg.display_name:
            size = lay.arc_thickness + 2
            y = lay.height - size - 4 if lay.label_position != "bottom" else 4
            painter.fillRect(QtCore.QRectF(4, y, size, size), QtGui.QColor(cfg.color))
            font.setPointSizeF(max(6.0, lay.height / 20.0))
            painter.setFont(font)
            painter.drawText(
                QtCore.QRectF(size + 8, y - 2, lay.width - size - 12, size + 4),
                QtCore.Qt.AlignmentFlag.AlignLeft | QtCore.Qt.AlignmentFlag.AlignVCenter,
                cfg.display_name,
            )

    def _arc(self, radius: float, end_angle: float) -> QtGui.QPainterPath:
        cfg = self.config
        segment = arc_segment(cfg.center_x, cfg.center_y, radius, cfg.min_angle_deg, end_angle)
        return arc_path(segment, cfg.center_x, cfg.center_y)

    def closeEvent(self, e: QtGui.QCloseEvent) -> None:
        self.dial.close()
        super().closeEvent(e)


# ------------------------------ Release Filter --------------------------------


class ReleaseFilter(QtCore.QObject):
    """Application-wide event filter ending drags released outside their dial.

    Only left-button mouse releases end the mouse drag. Touch releases are
    routed to the dial whose widget received them, so lifting one finger
    never ends a drag another finger holds on a different dial.
    """

    _TOUCH_RELEASE_TYPES = (
        QtCore.QEvent.Type.TouchEnd,
        QtCore.QEvent.Type.TouchCancel,
    )

    def __init__(self, router: ReleaseRouter, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent)
        self.router = router

    def eventFilter(self, watched: QtCore.QObject, event: QtCore.QEvent) -> bool:
        kind = event.type()
        if kind == QtCore.QEvent.Type.MouseButtonRelease:
            if event.button() == QtCore.Qt.MouseButton.LeftButton:  # type: ignore[attr-defined]
                self.router.release(PointerSource.MOUSE)
        elif kind in self._TOUCH_RELEASE_TYPES and isinstance(watched, DialWidget):
            self.router.release(PointerSource.TOUCH, watched.dial)
        return False


# -------------------------------- Main Window ---------------------------------


class DialWindow(QtWidgets.QWidget):
    """Row of dials with a status line listing their values."""

    def __init__(
        self,
        configs: Sequence[DialConfig],
        layout: DialLayout,
        router: ReleaseRouter,
        always_on_top: bool = False,
    ) -> None:
        super().__init__(None)
        self.setWindowTitle(f"radial_dial {APP_VERSION}")
        self.setWindowFlag(QtCore.Qt.WindowType.WindowStaysOnTopHint, always_on_top)

        self.dials: List[DialWidget] = []
        row = QtWidgets.QHBoxLayout()
        for cfg in configs:
            widget = DialWidget(cfg, layout, router, self)
            widget.setFixedSize(int(layout.width), int(layout.height))
            widget.valueChanged.connect(self._refresh_status)
            row.addWidget(widget)
            self.dials.append(widget)

        self.status_label = QtWidgets.QLabel(self)
        self.status_label.setWordWrap(True)

        v = QtWidgets.QVBoxLayout(self)
        v.addLayout(row)
        v.addWidget(self.status_label)
        self._refresh_status()

    def values(self) -> List[float]:
        return [d.value() for d in self.dials]

    def _refresh_status(self, *_args: object) -> None:
        parts = []
        for i, d in enumerate(self.dials, start=1):
            name = d.config.display_name or f"Dial {i}"
            parts.append(f"{name}: {d.label_text}")
        self.status_label.setText("  |  ".join(parts))


# ------------------------------ Main Controller -------------------------------


class MainController(QtCore.QObject):
    def __init__(self, app: QtWidgets.QApplication, config_path: Optional[Path] = None) -> None:
        super().__init__(None)
        self.app = app
        self._path = config_path or (Path.home() / ".radial_dial_config.json")
        self.cfg = self._load_config()
        self.router = ReleaseRouter()

        size = float(self.cfg.window.dial_size_px)
        try:
            layout = DialLayout(width=size, height=size, label_position=self.cfg.window.label_position)
        except ConfigurationError as exc:
            logger.warning("Invalid window preferences (%s); using default layout", exc)
            layout = DialLayout()

        self.release_filter = ReleaseFilter(self.router, self)
        app.installEventFilter(self.release_filter)

        self.window = DialWindow(
            self.cfg.dial_configs(), layout, self.router, self.cfg.window.always_on_top
        )
        self.window.show()

    # ---------------------------- Config I/O ----------------------------------

    def _load_config(self) -> AppConfig:
        p = self._path
        if p.exists():
            try:
                return AppConfig.from_json(p.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                # ConfigurationError and JSONDecodeError are both ValueErrors.
                logger.warning("Could not load %s (%s); using defaults", p, exc)
        return AppConfig()

    def save_config(self) -> None:
        for opts, value in zip(self.cfg.dials, self.window.values()):
            opts["initialValue"] = value
        try:
            self._path.write_text(self.cfg.to_json(), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save %s: %s", self._path, exc)


# ---------------------------------- Main --------------------------------------


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("radial_dial")
    app.setApplicationVersion(APP_VERSION)

    ctrl = MainController(app)
    ret = app.exec()
    ctrl.save_config()
    logger.info("Final values: %s", json.dumps(ctrl.window.values()))

    sys.exit(ret)


if __name__ == "__main__":
    main()
