from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

LOGGER = logging.getLogger(__name__)


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if value not in (None, ""):
            return value
    return None


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _atomic_number(record: Mapping[str, Any]) -> int | None:
    return _as_int(_first(record, "atomicNumber", "atomic_number", "number"))


def convert_records(records: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Map periodic_table_cli records onto the dataset's record shape.

    Elements without a main-grid group (the f-block rows) are skipped, and when
    two records share a cell the lower atomic number keeps it, so the result
    only holds cells that fit the 7 x 18 table.
    """
    converted: list[dict[str, Any]] = []
    occupied: set[tuple[int, int]] = set()
    skipped = 0
    for record in sorted(records, key=lambda item: _atomic_number(item) or 0):
        number = _atomic_number(record)
        period = _as_int(_first(record, "period"))
        group = _as_int(_first(record, "group"))
        if not number or period is None or group is None or not 1 <= group <= 18 or not 1 <= period <= 7:
            skipped += 1
            continue
        if (period, group) in occupied:
            skipped += 1
            continue
        occupied.add((period, group))
        category = str(_first(record, "family", "category", "groupBlock") or "unknown").strip().lower()
        converted.append(
            {
                "number": number,
                "symbol": str(_first(record, "symbol") or "").strip(),
                "name": str(_first(record, "name") or "").strip(),
                "period": period,
                "group": group,
                "category": category,
                "atomic_mass": _first(record, "atomicMass", "atomic_mass"),
            }
        )
    LOGGER.debug("Converted %d records, skipped %d outside the main grid", len(converted), skipped)
    return converted


def load_periodic_table_cli() -> list[dict[str, Any]]:
    from periodic_table_cli.cli import load_data

    data = load_data()
    return convert_records(data.get("elements", []))
