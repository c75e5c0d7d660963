"""Time-bucket aggregation of backend records for the dashboard trend charts."""

from __future__ import annotations

import logging
import zlib
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from analytics.periods import TimestampLike, as_naive_timestamp, bucket_indices, resolve_period
from core.models import PeriodSpec, PeriodWindow, Record, TrendResult, TrendRow

logger = logging.getLogger(__name__)

__all__ = [
    "ITEM_DATE_FIELDS",
    "REQUEST_DATE_FIELDS",
    "REPORT_DATE_FIELDS",
    "SeriesInput",
    "extract_timestamp",
    "aggregate",
    "build_inventory_trend",
    "build_system_activity",
]

ITEM_DATE_FIELDS: Tuple[str, ...] = ("created_at", "createdAt", "purchase_date", "purchaseDate")
REQUEST_DATE_FIELDS: Tuple[str, ...] = ("created_at",)
REPORT_DATE_FIELDS: Tuple[str, ...] = ("created_at",)

# Upper bounds (exclusive) of the placeholder counts, by series position.
_PLACEHOLDER_HIGHS: Tuple[int, ...] = (6, 4)
_PLACEHOLDER_DEFAULT_HIGH = 4

SeriesInput = Tuple[Optional[Iterable[Record]], Sequence[str]]

# Words pandas resolves against the wall clock.
_RELATIVE_DATE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})


def _present(value: Any) -> bool:
    return value is not None and not (isinstance(value, str) and not value.strip())


def extract_timestamp(record: Any, fields: Sequence[str]) -> Optional[pd.Timestamp]:
    """Return the first present date field of ``record`` as a naive timestamp.

    Only the first present field is parsed; ``None`` is returned when it does
    not hold a valid date.
    """

    if not isinstance(record, Mapping):
        return None

    value = next((record.get(name) for name in fields if _present(record.get(name))), None)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, date, datetime)):
        return None
    if isinstance(value, str) and value.strip().lower() in _RELATIVE_DATE_WORDS:
        return None

    try:
        timestamp = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if timestamp is None or pd.isna(timestamp):
        return None
    return as_naive_timestamp(timestamp)


def _iter_records(records: Any) -> list[Any]:
    if isinstance(records, (list, tuple)):
        return list(records)
    if records is not None:
        logger.debug("Ignoring non-list record collection of type %s", type(records).__name__)
    return []


def _window_timestamps(records: Any, fields: Sequence[str], window: PeriodWindow) -> pd.Series:
    timestamps: list[pd.Timestamp] = []
    skipped = 0
    for record in _iter_records(records):
        timestamp = extract_timestamp(record, fields)
        if timestamp is None or timestamp < window.start or timestamp > window.end:
            skipped += 1
            continue
        timestamps.append(timestamp)

    if skipped:
        logger.debug("Skipped %d records outside %s..%s", skipped, window.start, window.end)
    return pd.Series(timestamps, dtype="datetime64[ns]")


def _default_rng(period: PeriodSpec, window: PeriodWindow, now: pd.Timestamp) -> np.random.Generator:
    key = f"{period.period.value}|{window.start.isoformat()}|{window.end.isoformat()}|{now.isoformat()}"
    return np.random.default_rng(zlib.crc32(key.encode("utf-8")))


def aggregate(
    series: Mapping[str, SeriesInput],
    period: PeriodSpec,
    now: TimestampLike,
    *,
    placeholder_fallback: bool = True,
    rng: Optional[np.random.Generator] = None,
) -> TrendResult:
    """Count records per time bucket for each named series.

    Parameters
    ----------
    series:
        Mapping of series name to ``(records, date_fields)``. Every series is
        counted independently over the same bucket index space.
    period:
        Selected chart window.
    now:
        Reference clock; records later than ``now`` are never counted.
    placeholder_fallback:
        When every counter ends up zero, fill each bucket with random positive
        values so a chart renders something. The result is then flagged with
        ``is_placeholder``.
    rng:
        Random generator for placeholder values. Defaults to one seeded from
        the window and ``now`` so identical calls return identical results.

    Returns
    -------
    TrendResult
        One row per bucket, ascending in time.
    """

    now = as_naive_timestamp(now)
    window = resolve_period(period, now)

    counters: dict[str, np.ndarray] = {}
    for name, (records, fields) in series.items():
        timestamps = _window_timestamps(records, fields, window)
        indices = bucket_indices(timestamps, window)
        counters[name] = np.bincount(indices, minlength=window.data_points)

    is_placeholder = False
    if placeholder_fallback and counters and not any(values.any() for values in counters.values()):
        generator = rng if rng is not None else _default_rng(period, window, now)
        for position, name in enumerate(counters):
            high = (
                _PLACEHOLDER_HIGHS[position]
                if position < len(_PLACEHOLDER_HIGHS)
                else _PLACEHOLDER_DEFAULT_HIGH
            )
            counters[name] = generator.integers(1, high, size=window.data_points)
        is_placeholder = True
        logger.info("No records in the %s window; using placeholder chart data", period.period.value)

    rows: list[TrendRow] = []
    for index, label in enumerate(window.labels):
        row: dict[str, Any] = {"label": label}
        for name, values in counters.items():
            row[name] = int(values[index])
        rows.append(row)  # type: ignore[arg-type]

    return TrendResult(window, tuple(counters), rows, is_placeholder)


def build_inventory_trend(
    inventory: Any,
    requests: Any,
    period: PeriodSpec,
    now: TimestampLike,
    *,
    placeholder_fallback: bool = True,
    rng: Optional[np.random.Generator] = None,
) -> TrendResult:
    """Items added to the system and requests created, per bucket."""

    return aggregate(
        {
            "items_added": (inventory, ITEM_DATE_FIELDS),
            "requests": (requests, REQUEST_DATE_FIELDS),
        },
        period,
        now,
        placeholder_fallback=placeholder_fallback,
        rng=rng,
    )


def build_system_activity(
    requests: Any,
    reports: Any,
    period: PeriodSpec,
    now: TimestampLike,
) -> TrendResult:
    """Requests and overall activity (requests plus issue reports), per bucket."""

    counted = aggregate(
        {
            "requests": (requests, REQUEST_DATE_FIELDS),
            "reports": (reports, REPORT_DATE_FIELDS),
        },
        period,
        now,
        placeholder_fallback=False,
    )

    rows: list[TrendRow] = [
        {
            "label": row["label"],
            "requests": row["requests"],
            "activity": row["requests"] + row["reports"],  # type: ignore[typeddict-item]
        }
        for row in counted.rows
    ]
    return TrendResult(counted.window, ("requests", "activity"), rows, False)
