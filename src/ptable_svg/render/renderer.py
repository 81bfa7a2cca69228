from __future__ import annotations

import html
import json
import logging
from collections.abc import Mapping
from typing import Any, Iterable, Sequence

from ptable_svg.data.models import Element, Layout, TableConfig, Theme, Typography, is_number

LOGGER = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
DEFAULT_FONT_FAMILY = "Arial, sans-serif"
DEFAULT_CORNER_RADIUS = 4


def format_number(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _attr(value: Any) -> str:
    if is_number(value):
        return format_number(value)
    return html.escape(str(value), quote=True)


def _tag(name: str, attrs: Iterable[tuple[str, Any]], content: str | None = None) -> str:
    rendered = " ".join(f'{key}="{_attr(value)}"' for key, value in attrs)
    if content is None:
        return f"<{name} {rendered}/>"
    return f"<{name} {rendered}>{content}</{name}>"


def mass_label(value: Any) -> str:
    if value is None:
        return ""
    if is_number(value) or isinstance(value, bool):
        return format_number(value)
    if isinstance(value, (list, dict)):
        return html.escape(json.dumps(value, ensure_ascii=False), quote=False)
    return html.escape(str(value), quote=False)


def canvas_size(elements: Sequence[Element], layout: Layout) -> tuple[float, float]:
    max_period = max((element.period for element in elements), default=0)
    max_group = max((element.group for element in elements), default=0)
    content_width = max_group * layout.box_width + max(max_group - 1, 0) * layout.gap
    content_height = max_period * layout.box_height + max(max_period - 1, 0) * layout.gap
    return content_width + layout.padding * 2, content_height + layout.padding * 2


def element_origin(element: Element, layout: Layout) -> tuple[float, float]:
    x = element.group * layout.box_width + (element.group - 1) * layout.gap + layout.padding
    y = element.period * layout.box_height + (element.period - 1) * layout.gap + layout.padding
    return x, y


def _svg_options(svg: Any) -> tuple[str, float]:
    font_family = DEFAULT_FONT_FAMILY
    corner_radius: float = DEFAULT_CORNER_RADIUS
    if isinstance(svg, Mapping):
        if isinstance(svg.get("fontFamily"), str) and svg["fontFamily"]:
            font_family = svg["fontFamily"]
        if is_number(svg.get("cornerRadius")) and svg["cornerRadius"] >= 0:
            corner_radius = svg["cornerRadius"]
    return font_family, corner_radius


def render_background(theme: Theme) -> str:
    return _tag("rect", [("width", "100%"), ("height", "100%"), ("fill", theme.background)])


def render_element(
    element: Element,
    layout: Layout,
    theme: Theme,
    typography: Typography,
    font_family: str = DEFAULT_FONT_FAMILY,
    corner_radius: float = DEFAULT_CORNER_RADIUS,
) -> str:
    x, y = element_origin(element, layout)
    gradient_id = f"elemGradient-{element.number}"
    center_x = x + layout.box_width / 2

    gradient = _tag(
        "linearGradient",
        [("id", gradient_id), ("x1", "0%"), ("y1", "0%"), ("x2", "100%"), ("y2", "100%")],
        _tag("stop", [("offset", "0%"), ("style", "stop-color:white;stop-opacity:0.8")])
        + _tag(
            "stop",
            [("offset", "100%"), ("style", f"stop-color:{theme.category_color(element.category)};stop-opacity:1")],
        ),
    )
    box = _tag(
        "rect",
        [
            ("class", "element-box"),
            ("x", x),
            ("y", y),
            ("width", layout.box_width),
            ("height", layout.box_height),
            ("rx", corner_radius),
            ("fill", f"url(#{gradient_id})"),
            ("stroke", theme.stroke),
            ("stroke-width", theme.stroke_width),
        ],
    )
    number_text = _tag(
        "text",
        [
            ("class", "element-number"),
            ("x", x + 4),
            ("y", y + typography.number_size + 2),
            ("font-size", typography.number_size),
            ("font-weight", "bold"),
            ("fill", theme.text),
            ("font-family", font_family),
        ],
        format_number(element.number),
    )
    # baseline-anchored text; a third of the font size lands the glyphs on the box center
    symbol_text = _tag(
        "text",
        [
            ("class", "element-symbol"),
            ("x", center_x),
            ("y", y + layout.box_height / 2 + typography.symbol_size / 3),
            ("font-size", typography.symbol_size),
            ("font-weight", "bold"),
            ("fill", theme.text),
            ("text-anchor", "middle"),
            ("font-family", font_family),
        ],
        html.escape(element.symbol, quote=False),
    )
    mass_text = _tag(
        "text",
        [
            ("class", "element-mass"),
            ("x", center_x),
            ("y", y + layout.box_height - 4),
            ("font-size", typography.number_size),
            ("fill", theme.text),
            ("text-anchor", "middle"),
            ("font-family", font_family),
        ],
        mass_label(element.atomic_mass),
    )
    return _tag(
        "g",
        [
            ("class", f"element element-{element.number}"),
            ("data-number", element.number),
            ("data-symbol", element.symbol),
            ("data-name", element.name),
            ("data-category", element.category),
        ],
        f"<defs>{gradient}</defs>{box}{number_text}{symbol_text}{mass_text}",
    )


def render_table(
    elements: Sequence[Element],
    config: TableConfig,
    theme: str = "light",
    layout: str = "normal",
) -> str:
    layout_config = config.layout(layout)
    theme_config = config.theme(theme)
    typography_config = config.typography_for(layout)
    font_family, corner_radius = _svg_options(config.svg)

    width, height = canvas_size(elements, layout_config)
    LOGGER.debug(
        "Rendering %d elements with theme=%s layout=%s on a %sx%s canvas",
        len(elements),
        theme,
        layout,
        format_number(width),
        format_number(height),
    )
    parts = [
        render_element(element, layout_config, theme_config, typography_config, font_family, corner_radius)
        for element in elements
    ]
    root_attrs = [
        ("viewBox", f"0 0 {format_number(width)} {format_number(height)}"),
        ("width", width),
        ("height", height),
        ("xmlns", SVG_NAMESPACE),
        ("class", "periodic-table"),
        ("data-theme", theme),
        ("data-layout", layout),
    ]
    return _tag("svg", root_attrs, render_background(theme_config) + "".join(parts))


class PeriodicTableRenderer:
    def __init__(self) -> None:
        self._svg = ""

    def generate(
        self,
        elements: Sequence[Element],
        config: TableConfig,
        theme: str = "light",
        layout: str = "normal",
    ) -> str:
        self._svg = render_table(elements, config, theme, layout)
        return self._svg

    def export(self) -> str:
        return self._svg
