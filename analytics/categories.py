"""Category breakdowns of inventory cost and request volume."""

from __future__ import annotations

import logging
import math
import zlib
from typing import Any, Final, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from core.formatting import round_half_up, truncate_label
from core.models import CategoryCostEntry, CategoryCountEntry, CategoryResult

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_CATEGORY",
    "category_of",
    "coerce_price",
    "coerce_quantity",
    "aggregate_cost_by_category",
    "count_by_category",
]

DEFAULT_CATEGORY: Final[str] = "Other"

CATEGORY_FIELDS: Tuple[str, ...] = ("category", "item_category")
PRICE_FIELDS: Tuple[str, ...] = ("purchase_price", "purchasePrice")
QUANTITY_FIELDS: Tuple[str, ...] = ("quantity", "item_quantity")

_SAMPLE_COST_CATEGORIES: Tuple[str, ...] = (
    "Electronics",
    "Furniture",
    "Office Supplies",
    "Tools",
    "Equipment",
    "Books",
    "Stationery",
)
_SAMPLE_COUNT_CATEGORIES: Tuple[str, ...] = _SAMPLE_COST_CATEGORIES[:5]


def _first_present(record: Mapping[str, Any], fields: Sequence[str]) -> Any:
    for name in fields:
        value = record.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        return value
    return None


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def category_of(record: Mapping[str, Any]) -> str:
    value = _first_present(record, CATEGORY_FIELDS)
    return DEFAULT_CATEGORY if value is None else str(value)


def coerce_price(record: Mapping[str, Any]) -> float:
    number = _to_number(_first_present(record, PRICE_FIELDS))
    return 0.0 if number is None else number


def coerce_quantity(record: Mapping[str, Any]) -> int:
    """Quantity of an item record; zero counts as unset, like a missing field."""

    for name in QUANTITY_FIELDS:
        value = record.get(name)
        if value is None or value == 0 or (isinstance(value, str) and not value.strip()):
            continue
        number = _to_number(value)
        return 1 if number is None else int(number)
    return 1


def _records(records: Any) -> list[Mapping[str, Any]]:
    if not isinstance(records, (list, tuple)):
        return []
    return [record for record in records if isinstance(record, Mapping)]


def _placeholder_rng(name: str) -> np.random.Generator:
    return np.random.default_rng(zlib.crc32(name.encode("utf-8")))


def _ranked(frame: pd.DataFrame, value_column: str, limit: int) -> pd.Series:
    totals = frame.groupby("category", sort=False)[value_column].sum()
    return totals.sort_values(ascending=False, kind="stable").head(limit)


def aggregate_cost_by_category(
    records: Any,
    *,
    limit: int = 6,
    max_name_length: int = 12,
    placeholder_fallback: bool = True,
    rng: Optional[np.random.Generator] = None,
) -> CategoryResult:
    """Total ``price * quantity`` per category, largest first.

    Missing prices count as 0 and missing quantities as 1; values that are
    not numeric are coerced the same way.
    """

    rows = [
        {"category": category_of(record), "cost": coerce_price(record) * coerce_quantity(record)}
        for record in _records(records)
    ]

    is_placeholder = False
    if rows:
        totals = _ranked(pd.DataFrame(rows), "cost", limit)
    elif placeholder_fallback:
        generator = rng if rng is not None else _placeholder_rng("category-costs")
        costs = generator.integers(10000, 60000, size=len(_SAMPLE_COST_CATEGORIES))
        sample = pd.DataFrame({"category": _SAMPLE_COST_CATEGORIES, "cost": costs.astype(float)})
        totals = _ranked(sample, "cost", limit)
        is_placeholder = True
        logger.info("No inventory records; using placeholder category costs")
    else:
        return CategoryResult([], False)

    entries: list[CategoryCostEntry] = [
        {"name": truncate_label(str(name), max_name_length), "cost": round_half_up(float(cost))}
        for name, cost in totals.items()
    ]
    return CategoryResult(entries, is_placeholder)


def count_by_category(
    records: Any,
    *,
    limit: int = 8,
    max_name_length: int = 10,
    placeholder_fallback: bool = True,
    rng: Optional[np.random.Generator] = None,
) -> CategoryResult:
    """Number of records per category, largest first, with bar percentages."""

    rows = [{"category": category_of(record), "count": 1} for record in _records(records)]

    is_placeholder = False
    if rows:
        totals = _ranked(pd.DataFrame(rows), "count", limit)
    elif placeholder_fallback:
        generator = rng if rng is not None else _placeholder_rng("category-counts")
        counts = generator.integers(3, 18, size=len(_SAMPLE_COUNT_CATEGORIES))
        sample = pd.DataFrame({"category": _SAMPLE_COUNT_CATEGORIES, "count": counts})
        totals = _ranked(sample, "count", limit)
        is_placeholder = True
        logger.info("No request records; using placeholder category counts")
    else:
        return CategoryResult([], False)

    max_value = max(int(totals.max()), 1)
    entries: list[CategoryCountEntry] = [
        {
            "label": truncate_label(str(name), max_name_length),
            "value": int(count),
            "percentage": int(count) / max_value * 100,
        }
        for name, count in totals.items()
    ]
    return CategoryResult(entries, is_placeholder)
