from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from ptable_svg.errors import ValidationError

DEFAULT_CATEGORY_COLOR = "#CCCCCC"
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_STROKE_COLOR = "#333333"
DEFAULT_BACKGROUND = "#FFFFFF"
DEFAULT_STROKE_WIDTH = 1

ELEMENT_FIELDS = ("number", "symbol", "name", "period", "group", "category")
LAYOUT_FIELDS = {"boxWidth": "box_width", "boxHeight": "box_height", "gap": "gap", "padding": "padding"}
TYPOGRAPHY_FIELDS = {"symbolSize": "symbol_size", "numberSize": "number_size", "nameSize": "name_size"}
CONFIG_SECTIONS = ("layouts", "themes", "typography", "svg")

_MISSING = object()


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Element:
    number: int
    symbol: str
    name: str
    period: int
    group: int
    category: str
    atomic_mass: Any = None

    @property
    def position(self) -> tuple[int, int]:
        return self.period, self.group

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Element:
        return cls(
            number=record["number"],
            symbol=record["symbol"],
            name=record["name"],
            period=record["period"],
            group=record["group"],
            category=record["category"],
            atomic_mass=record.get("atomic_mass"),
        )

    def to_record(self) -> dict[str, Any]:
        record = {name: getattr(self, name) for name in ELEMENT_FIELDS}
        if self.atomic_mass is not None:
            record["atomic_mass"] = self.atomic_mass
        return record


@dataclass(frozen=True)
class Layout:
    box_width: float
    box_height: float
    gap: float
    padding: float

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Layout:
        return cls(**{attr: record[key] for key, attr in LAYOUT_FIELDS.items()})


@dataclass(frozen=True)
class Typography:
    symbol_size: float
    number_size: float
    name_size: float

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Typography:
        return cls(**{attr: record[key] for key, attr in TYPOGRAPHY_FIELDS.items()})


@dataclass(frozen=True)
class Theme:
    background: str = DEFAULT_BACKGROUND
    text: str = DEFAULT_TEXT_COLOR
    stroke: str = DEFAULT_STROKE_COLOR
    stroke_width: float = DEFAULT_STROKE_WIDTH
    categories: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Theme:
        stroke_width = record.get("strokeWidth")
        categories = record.get("categories")
        return cls(
            background=record.get("background") or DEFAULT_BACKGROUND,
            text=record.get("text") or DEFAULT_TEXT_COLOR,
            stroke=record.get("stroke") or DEFAULT_STROKE_COLOR,
            stroke_width=stroke_width if is_number(stroke_width) else DEFAULT_STROKE_WIDTH,
            categories=dict(categories) if isinstance(categories, Mapping) else {},
        )

    def category_color(self, category: str) -> str:
        return self.categories.get(category) or DEFAULT_CATEGORY_COLOR


@dataclass(frozen=True)
class TableConfig:
    layouts: dict[str, Layout]
    themes: dict[str, Theme]
    typography: dict[str, Typography]
    svg: Any = None

    def layout(self, name: str) -> Layout:
        return _lookup(self.layouts, "layouts", name)

    def theme(self, name: str) -> Theme:
        return _lookup(self.themes, "themes", name)

    def typography_for(self, layout_name: str) -> Typography:
        return _lookup(self.typography, "typography", layout_name)

    def with_theme(self, name: str, theme: Theme) -> TableConfig:
        themes = dict(self.themes)
        themes[name] = theme
        return replace(self, themes=themes)


def _lookup(section: Mapping[str, Any], section_name: str, key: str) -> Any:
    value = section.get(key, _MISSING)
    if value is _MISSING:
        raise ValidationError(
            f'Configuration section {section_name} has no entry "{key}"',
            section=section_name,
            key=key,
        )
    return value
