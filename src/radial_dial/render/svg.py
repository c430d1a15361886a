"""SVG markup renderer for a dial."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import xml.etree.ElementTree as ET

from ..models import DialConfig, DialLayout
from ..utils import describe_arc, format_number, polar_to_cartesian

SVG_NS = "http://www.w3.org/2000/svg"

# Dash pattern of the tick ring drawn just inside the background arc.
TICK_DASHARRAY = "1 37.2"
TICK_DASHOFFSET = "19.6"


def _style(**props: object) -> str:
    return "; ".join(
        f"{name.replace('_', '-')}: {format_number(v) if isinstance(v, (int, float)) else v}"
        for name, v in props.items()
    )


class SvgRenderAdapter:
    """Keeps the latest render instructions and serializes them as an SVG document.

    The element classes (``sliderSinglePath``, ``sliderSinglePathActive``,
    ``sliderHandle``, ``sliderValue``) match the stylesheet hooks of the web
    widget, so existing CSS keeps applying to the generated markup.
    """

    def __init__(self, config: DialConfig, layout: Optional[DialLayout] = None) -> None:
        self.config = config
        self.layout = layout or DialLayout()
        self._background: Optional[Tuple[float, float]] = None
        self._points: List[float] = []
        self._active: Optional[Tuple[float, float]] = None
        self._handle: Optional[Tuple[float, float]] = None
        self._label: Optional[float] = None
        self._emphasis = False

    # ----------------------------- Adapter API --------------------------------

    def render_background(self, radius: float, span_angle_deg: float) -> None:
        self._background = (radius, span_angle_deg)

    def render_points(self, angles_deg: Sequence[float]) -> None:
        self._points = [float(a) for a in angles_deg]

    def render_active_arc(self, radius: float, angle_deg: float) -> None:
        self._active = (radius, angle_deg)

    def render_handle(self, angle_deg: float, radius: float) -> None:
        self._handle = (angle_deg, radius)

    def render_label(self, value: float) -> None:
        self._label = value

    def render_handle_emphasis(self, active: bool) -> None:
        self._emphasis = bool(active)

    # ----------------------------- Output -------------------------------------

    @property
    def handle_radius(self) -> float:
        r = self.layout.arc_thickness
        return r * self.layout.touch_handle_scale if self._emphasis else r

    @property
    def label_text(self) -> str:
        return "" if self._label is None else self.config.format_value(self._label)

    def to_element(self) -> ET.Element:
        cfg = self.config
        lay = self.layout
        svg = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "viewBox": f"0, 0, {format_number(lay.width)}, {format_number(lay.height)}",
                "class": "rate-slider",
            },
        )
        group = ET.SubElement(
            svg,
            "g",
            transform=f"rotate(-90,{format_number(cfg.center_x)},{format_number(cfg.center_y)})",
        )

        if self._background is not None:
            radius, end = self._background
            self._arc(group, "sliderSinglePath", radius, end, lay.background_color, lay.arc_thickness)
            ticks = self._arc(
                group,
                "sliderSinglePath",
                radius - lay.tick_inset,
                end,
                lay.background_color,
                lay.arc_thickness,
            )
            ticks.set(
                "style",
                ticks.get("style", "")
                + "; "
                + _style(stroke_dasharray=TICK_DASHARRAY, stroke_dashoffset=TICK_DASHOFFSET),
            )

        if self._active is not None:
            radius, end = self._active
            self._arc(
                group,
                "sliderSinglePathActive",
                radius,
                end,
                cfg.color,
                lay.active_arc_thickness,
            )

        if lay.show_points:
            for angle in self._points:
                self._circle(
                    group,
                    angle,
                    cfg.radius,
                    lay.arc_thickness - 2,
                    stroke=lay.background_color,
                    fill=lay.point_fill_color,
                )

        if self._handle is not None:
            angle, radius = self._handle
            handle = self._circle(
                group,
                angle,
                radius,
                self.handle_radius,
                stroke=cfg.color,
                fill=cfg.handle_fill_color,
            )
            handle.set("class", "sliderHandle")

        text = ET.SubElement(
            svg,
            "text",
            {
                "x": format_number(cfg.center_x),
                "y": format_number(lay.label_y()),
                "class": "sliderValue",
                "style": _style(text_anchor="middle", font_size="1.5em"),
            },
        )
        text.text = self.label_text

        if cfg.display_name:
            self._legend(svg)

        return svg

    def to_svg(self) -> str:
        return ET.tostring(self.to_element(), encoding="unicode")

    # ----------------------------- Helpers ------------------------------------

    def _arc(
        self,
        parent: ET.Element,
        css_class: str,
        radius: float,
        end_angle: float,
        color: str,
        thickness: float,
    ) -> ET.Element:
        cfg = self.config
        return ET.SubElement(
            parent,
            "path",
            {
                "class": css_class,
                "d": describe_arc(cfg.center_x, cfg.center_y, radius, cfg.min_angle_deg, end_angle),
                "style": _style(stroke=color, stroke_width=thickness, fill="none"),
            },
        )

    def _circle(
        self,
        parent: ET.Element,
        angle_deg: float,
        radius: float,
        r: float,
        stroke: str,
        fill: str,
    ) -> ET.Element:
        cfg = self.config
        x, y = polar_to_cartesian(cfg.center_x, cfg.center_y, radius, angle_deg)
        return ET.SubElement(
            parent,
            "circle",
            {
                "cx": format_number(x),
                "cy": format_number(y),
                "r": format_number(r),
                "style": _style(
                    stroke=stroke,
                    stroke_width=self.layout.handle_stroke_thickness,
                    fill=fill,
                ),
            },
        )

    def _legend(self, svg: ET.Element) -> None:
        cfg = self.config
        lay = self.layout
        size = lay.arc_thickness + 2
        y = lay.height - size - 4 if lay.label_position != "bottom" else 4
        legend = ET.SubElement(svg, "g", {"class": "sliderLegend"})
        ET.SubElement(
            legend,
            "rect",
            {
                "x": "4",
                "y": format_number(y),
                "width": format_number(size),
                "height": format_number(size),
                "style": _style(fill=cfg.color),
            },
        )
        name = ET.SubElement(
            legend,
            "text",
            {
                "x": format_number(size + 8),
                "y": format_number(y + size - 1),
                "class": "sliderLegendName",
            },
        )
        name.text = cfg.display_name


__all__ = ["SvgRenderAdapter", "SVG_NS"]
