"""Dataclasses describing dial configuration, layout and persisted preferences."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

import json
import logging
import math

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#FF5733"
DEFAULT_HANDLE_FILL_COLOR = "#fce7dc"

# Relative tolerance when checking that (max - min) / step is integral.
STEP_COUNT_TOLERANCE = 1e-9

# Construction options accepted by ``DialConfig.from_options`` and the
# attribute each one feeds.
OPTION_FIELDS: Dict[str, str] = {
    "min": "min_value",
    "max": "max_value",
    "step": "step",
    "initialValue": "initial_value",
    "minAngleDeg": "min_angle_deg",
    "maxAngleDeg": "max_angle_deg",
    "radius": "radius",
    "centerX": "center_x",
    "centerY": "center_y",
    "color": "color",
    "handleFillColor": "handle_fill_color",
    "displayName": "display_name",
}
_TEXT_FIELDS = ("color", "handle_fill_color", "display_name")


class ConfigurationError(ValueError):
    """Raised when a dial is configured with an invalid range, step or geometry."""


def _number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}.")
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value!r}.")
    return value


def _decimal_places(value: float) -> int:
    exponent = Decimal(repr(float(value))).normalize().as_tuple().exponent
    return max(0, -int(exponent))


@dataclass(frozen=True)
class DialConfig:
    """Immutable range, step and arc geometry of one dial.

    ``(max_value - min_value) / step`` must be a positive integer; the arc
    spans ``min_angle_deg`` to ``max_angle_deg`` measured clockwise from the
    top of the dial, leaving the gap around 0° as a pair of end-stops.
    """

    min_value: float = 0
    max_value: float = 10
    step: float = 0.5
    initial_value: float = 0
    min_angle_deg: float = 36.0
    max_angle_deg: float = 324.0
    radius: float = 80.0
    center_x: float = 100.0
    center_y: float = 100.0
    color: str = DEFAULT_COLOR
    handle_fill_color: str = DEFAULT_HANDLE_FILL_COLOR
    display_name: Optional[str] = None
    num_steps: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in (
            "min_value",
            "max_value",
            "step",
            "initial_value",
            "min_angle_deg",
            "max_angle_deg",
            "radius",
            "center_x",
            "center_y",
        ):
            _number(name, getattr(self, name))

        if self.step <= 0:
            raise ConfigurationError(f"step must be positive, got {self.step!r}.")
        if self.max_value <= self.min_value:
            raise ConfigurationError(
                f"max ({self.max_value!r}) must be greater than min ({self.min_value!r})."
            )
        ratio = (self.max_value - self.min_value) / self.step
        steps = int(round(ratio))
        if steps < 1 or abs(ratio - steps) > STEP_COUNT_TOLERANCE * max(1.0, ratio):
            raise ConfigurationError(
                f"(max - min) / step must be a positive integer, got {ratio!r}."
            )
        if not 0 < self.min_angle_deg < self.max_angle_deg < 360:
            raise ConfigurationError(
                "Angle span must satisfy 0 < minAngleDeg < maxAngleDeg < 360, "
                f"got {self.min_angle_deg!r}..{self.max_angle_deg!r}."
            )
        if self.radius <= 0 or self.center_x <= 0 or self.center_y <= 0:
            raise ConfigurationError("radius, centerX and centerY must be positive.")
        for name in _TEXT_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(f"{name} must be a string, got {value!r}.")

        object.__setattr__(self, "num_steps", steps)

    @property
    def span_angle(self) -> float:
        return self.max_angle_deg - self.min_angle_deg

    @property
    def per_step_angle(self) -> float:
        return self.span_angle / self.num_steps

    def format_value(self, value: float) -> str:
        """Render ``value`` with as many decimals as ``step`` or ``min_value`` carry.

        Trailing zeros are dropped, so with ``step=0.5`` the label reads
        ``5`` and ``5.5`` rather than ``5.0`` and ``5.5``.
        """
        decimals = max(_decimal_places(self.step), _decimal_places(self.min_value))
        if decimals == 0:
            return str(int(round(value)))
        text = f"{value:.{decimals}f}".rstrip("0").rstrip(".")
        return "0" if text in ("", "-0") else text

    def to_options(self) -> Dict[str, Any]:
        """Inverse of :meth:`from_options`; ``None`` values are left out."""
        out: Dict[str, Any] = {}
        for key, attr in OPTION_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out

    @staticmethod
    def from_options(options: Mapping[str, Any]) -> "DialConfig":
        """Build a config from the widget's camelCase construction options."""
        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            attr = OPTION_FIELDS.get(key)
            if attr is None:
                logger.warning("Ignoring unknown dial option %r", key)
                continue
            kwargs[attr] = value
        return DialConfig(**kwargs)


@dataclass(frozen=True)
class DialLayout:
    """Size constants and label placement used by the render adapters."""

    width: float = 200.0
    height: float = 200.0
    arc_thickness: float = 8.0
    active_arc_thickness: float = 4.0
    background_color: str = "#CCCCCC"
    handle_stroke_color: str = "#888888"
    handle_stroke_thickness: float = 1.0
    point_fill_color: str = "#fafafa"
    tick_inset: float = 4.0
    label_position: str = "top"  # "top" | "center" | "bottom"
    label_offset: float = 35.0
    show_points: bool = True
    touch_handle_scale: float = 1.5

    def __post_init__(self) -> None:
        if self.label_position not in ("top", "center", "bottom"):
            raise ConfigurationError(
                f"label_position must be top, center or bottom, got {self.label_position!r}."
            )
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError("Layout width and height must be positive.")

    def label_y(self) -> float:
        if self.label_position == "top":
            return self.label_offset
        if self.label_position == "bottom":
            return self.height - self.label_offset
        return self.height / 2.0


@dataclass
class WindowPrefs:
    """Preferences for the demo window."""

    always_on_top: bool = False
    dial_size_px: int = 200
    label_position: str = "top"


def _default_dials() -> List[Dict[str, Any]]:
    return [DialConfig().to_options()]


@dataclass
class AppConfig:
    """Persisted configuration for the application."""

    dials: List[Dict[str, Any]] = field(default_factory=_default_dials)
    window: WindowPrefs = field(default_factory=WindowPrefs)

    def dial_configs(self) -> List[DialConfig]:
        return [DialConfig.from_options(opts) for opts in self.dials]

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @staticmethod
    def from_json(text: str) -> "AppConfig":
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a JSON object.")
        raw_dials = data.get("dials")
        if raw_dials is None:
            dials = _default_dials()
        elif isinstance(raw_dials, list) and all(isinstance(d, dict) for d in raw_dials):
            dials = [dict(d) for d in raw_dials]
        else:
            raise ConfigurationError("'dials' must be a list of option objects.")
        w = data.get("window", {})
        if not isinstance(w, dict):
            raise ConfigurationError("'window' must be an object.")
        try:
            window = WindowPrefs(
                always_on_top=bool(w.get("always_on_top", False)),
                dial_size_px=int(w.get("dial_size_px", 200)),
                label_position=str(w.get("label_position", "top")),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid window preferences: {exc}") from exc
        cfg = AppConfig(dials=dials, window=window)
        # Validate eagerly so a broken file is rejected as a whole.
        cfg.dial_configs()
        return cfg


__all__ = [
    "ConfigurationError",
    "DialConfig",
    "DialLayout",
    "WindowPrefs",
    "AppConfig",
    "OPTION_FIELDS",
    "DEFAULT_COLOR",
]
