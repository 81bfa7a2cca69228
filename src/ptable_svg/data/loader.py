from __future__ import annotations

import json
import logging
import math
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any, Mapping, Sequence

from ptable_svg.data import read_default_document
from ptable_svg.data.models import (
    CONFIG_SECTIONS,
    ELEMENT_FIELDS,
    LAYOUT_FIELDS,
    TYPOGRAPHY_FIELDS,
    Element,
    Layout,
    TableConfig,
    Theme,
    Typography,
    is_number,
)
from ptable_svg.errors import FormatError, ResourceError, ValidationError

LOGGER = logging.getLogger(__name__)

ELEMENTS_FILENAME = "elements.json"
CONFIG_FILENAME = "config.json"
_URL_SCHEMES = ("http://", "https://", "file://")


def _is_url(locator: str | Path) -> bool:
    return isinstance(locator, str) and locator.lower().startswith(_URL_SCHEMES)


def _decode(payload: bytes, name: str) -> str:
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FormatError(f"{name} is not valid UTF-8: {exc.reason} at byte {exc.start}") from exc


def read_text(locator: str | Path | None, default_name: str) -> str:
    if locator is None:
        LOGGER.debug("Reading bundled %s", default_name)
        return read_default_document(default_name)
    if _is_url(locator):
        LOGGER.debug("Fetching %s", locator)
        try:
            with urllib.request.urlopen(str(locator)) as response:
                payload = response.read()
        except urllib.error.HTTPError as exc:
            raise ResourceError(
                f"Failed to load {locator}: {exc.code} {exc.reason}", locator=str(locator)
            ) from exc
        except urllib.error.URLError as exc:
            raise ResourceError(f"Failed to load {locator}: {exc.reason}", locator=str(locator)) from exc
        return _decode(payload, str(locator))
    path = Path(locator)
    LOGGER.debug("Reading %s", path)
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise ResourceError(f"Failed to load {path}: {exc.strerror or exc}", locator=str(path)) from exc
    return _decode(payload, str(path))


def load_json(locator: str | Path | None, default_name: str) -> Any:
    text = read_text(locator, default_name)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        name = default_name if locator is None else str(locator)
        raise FormatError(f"{name} is not valid JSON: {exc.msg} (line {exc.lineno})") from exc


def _describe(value: Any) -> str:
    return json.dumps(value) if isinstance(value, str) else repr(value)


def _check_count(value: Any, low: int, high: int | None = None) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return value >= low and (high is None or value <= high)


def _check_text(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


_ELEMENT_CHECKS = {
    "number": ("atomic number", lambda v: _check_count(v, 1)),
    "symbol": ("symbol", _check_text),
    "name": ("name", _check_text),
    "period": ("period", lambda v: _check_count(v, 1, 7)),
    "group": ("group", lambda v: _check_count(v, 1, 18)),
    "category": ("category", _check_text),
}


def validate_elements(records: Sequence[Any]) -> tuple[Element, ...]:
    elements: list[Element] = []
    seen: set[int] = set()
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ValidationError(f"Element at index {index} is not an object", index=index)
        for field in ELEMENT_FIELDS:
            if field not in record:
                raise ValidationError(
                    f"Element at index {index} missing required field: {field}",
                    index=index,
                    field=field,
                )
        for field in ELEMENT_FIELDS:
            label, check = _ELEMENT_CHECKS[field]
            if not check(record[field]):
                raise ValidationError(
                    f"Element at index {index} has invalid {label}: {_describe(record[field])}",
                    index=index,
                    field=field,
                )
        if record["number"] in seen:
            raise ValidationError(
                f"Element at index {index} repeats atomic number: {record['number']}",
                index=index,
                field="number",
            )
        seen.add(record["number"])
        elements.append(Element.from_record(record))
    return tuple(elements)


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data[name]
    if not isinstance(section, Mapping):
        raise ValidationError(f"config.json section {name} must be an object", section=name)
    return section


def _validate_metrics(
    section: Mapping[str, Any],
    section_name: str,
    label: str,
    fields: Mapping[str, str],
    strict: bool,
) -> None:
    for name, entry in section.items():
        if not isinstance(entry, Mapping):
            raise ValidationError(f'{label} "{name}" must be an object', section=section_name, key=name)
        for field in fields:
            value = entry.get(field)
            valid = is_number(value) and math.isfinite(value) and (value > 0 if strict else value >= 0)
            if not valid:
                raise ValidationError(
                    f'{label} "{name}" has invalid {field}: {_describe(value)}',
                    section=section_name,
                    key=name,
                    field=field,
                )


def validate_config(data: Any) -> TableConfig:
    if not isinstance(data, Mapping):
        raise FormatError('Invalid config.json format: expected { "layouts": ..., "themes": ..., ... }')
    for section in CONFIG_SECTIONS:
        if section not in data:
            raise ValidationError(f"config.json missing section: {section}", section=section)

    layouts = _section(data, "layouts")
    _validate_metrics(layouts, "layouts", "Layout", LAYOUT_FIELDS, strict=False)

    themes = _section(data, "themes")
    for name, theme in themes.items():
        if not isinstance(theme, Mapping):
            raise ValidationError(f'Theme "{name}" must be an object', section="themes", key=name)

    typography = _section(data, "typography")
    _validate_metrics(typography, "typography", "Typography", TYPOGRAPHY_FIELDS, strict=True)

    return TableConfig(
        layouts={name: Layout.from_record(entry) for name, entry in layouts.items()},
        themes={name: Theme.from_record(entry) for name, entry in themes.items()},
        typography={name: Typography.from_record(entry) for name, entry in typography.items()},
        svg=data["svg"],
    )


class DataLoader:
    def __init__(
        self,
        elements_source: str | Path | None = None,
        config_source: str | Path | None = None,
    ) -> None:
        self.elements_source = elements_source
        self.config_source = config_source
        self._elements: tuple[Element, ...] | None = None
        self._config: TableConfig | None = None

    @property
    def elements(self) -> tuple[Element, ...] | None:
        return self._elements

    @property
    def config(self) -> TableConfig | None:
        return self._config

    def load_elements(self) -> tuple[Element, ...]:
        if self._elements is not None:
            LOGGER.debug("Using cached element dataset (%d elements)", len(self._elements))
            return self._elements
        data = load_json(self.elements_source, ELEMENTS_FILENAME)
        if not isinstance(data, Mapping) or not isinstance(data.get("elements"), list):
            raise FormatError('Invalid elements.json format: expected { "elements": [...] }')
        elements = validate_elements(data["elements"])
        self._elements = elements
        LOGGER.info("Loaded %d elements", len(elements))
        return elements

    def load_config(self) -> TableConfig:
        if self._config is not None:
            LOGGER.debug("Using cached configuration")
            return self._config
        config = validate_config(load_json(self.config_source, CONFIG_FILENAME))
        self._config = config
        LOGGER.info(
            "Loaded configuration with %d layouts and %d themes",
            len(config.layouts),
            len(config.themes),
        )
        return config

    def get_element(self, atomic_number: int) -> Element | None:
        if self._elements is None:
            return None
        for element in self._elements:
            if element.number == atomic_number:
                return element
        return None

    def get_elements_by_category(self, category: str) -> list[Element]:
        if self._elements is None:
            return []
        return [element for element in self._elements if element.category == category]

    def get_categories(self) -> list[str]:
        if self._elements is None:
            return []
        return list(dict.fromkeys(element.category for element in self._elements))


_loader: DataLoader | None = None


def get_loader() -> DataLoader:
    global _loader
    if _loader is None:
        _loader = DataLoader()
    return _loader
