"""Render adapters: everything that turns engine output into pixels or markup."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from .svg import SvgRenderAdapter


@runtime_checkable
class RenderAdapter(Protocol):
    """Drawing surface driven by :class:`~radial_dial.engine.Dial`.

    Every argument is already computed by the engine. ``span_angle_deg`` is
    the angle where the background arc ends; arcs always begin at the
    configured minimum angle.
    """

    def render_background(self, radius: float, span_angle_deg: float) -> None: ...

    def render_points(self, angles_deg: Sequence[float]) -> None: ...

    def render_active_arc(self, radius: float, angle_deg: float) -> None: ...

    def render_handle(self, angle_deg: float, radius: float) -> None: ...

    def render_label(self, value: float) -> None: ...

    def render_handle_emphasis(self, active: bool) -> None: ...


__all__ = ["RenderAdapter", "SvgRenderAdapter"]
