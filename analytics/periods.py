"""Resolve dashboard period selections into concrete bucket windows."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Final, Union

import numpy as np
import pandas as pd

from core.formatting import day_month_label, hour_label, weekday_day_month_label, weekday_label
from core.models import Period, PeriodSpec, PeriodWindow

__all__ = [
    "MAX_CUSTOM_DAYS",
    "as_naive_timestamp",
    "resolve_period",
    "bucket_index",
    "bucket_indices",
]

MAX_CUSTOM_DAYS: Final[int] = 90

_TODAY_BUCKETS: Final[int] = 12
_WEEK_BUCKETS: Final[int] = 7
_MONTH_BUCKETS: Final[int] = 30

_HOURLY: Final[str] = "2h"
_DAILY: Final[str] = "1D"
_STEPS = {
    _HOURLY: pd.Timedelta(hours=2),
    _DAILY: pd.Timedelta(days=1),
}

TimestampLike = Union[datetime, pd.Timestamp, str]


def as_naive_timestamp(value: TimestampLike) -> pd.Timestamp:
    """Return ``value`` as a timezone-naive timestamp.

    Aware values are converted to UTC first so records from the backend and
    the reference clock share one timeline.
    """

    timestamp = pd.Timestamp(value)
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert("UTC").tz_localize(None)
    return timestamp


def _daily_labels(
    start: pd.Timestamp, count: int, formatter: Callable[[pd.Timestamp], str]
) -> tuple[str, ...]:
    return tuple(formatter(start + pd.Timedelta(days=offset)) for offset in range(count))


def _trailing_days(now: pd.Timestamp, count: int) -> pd.Timestamp:
    return now.normalize() - pd.Timedelta(days=count - 1)


def resolve_period(spec: PeriodSpec, now: TimestampLike) -> PeriodWindow:
    """Return the bucket window for ``spec`` relative to ``now``."""

    now = as_naive_timestamp(now)
    period = spec.period

    if period is Period.TODAY:
        labels = tuple(hour_label(index * 2) for index in range(_TODAY_BUCKETS))
        return PeriodWindow(now.normalize(), now, _TODAY_BUCKETS, labels, _HOURLY)

    if period is Period.WEEK:
        start = _trailing_days(now, _WEEK_BUCKETS)
        labels = _daily_labels(start, _WEEK_BUCKETS, weekday_label)
        return PeriodWindow(start, now, _WEEK_BUCKETS, labels, _DAILY)

    if period is Period.DAY_TO_DAY:
        start = _trailing_days(now, _WEEK_BUCKETS)
        labels = _daily_labels(start, _WEEK_BUCKETS, weekday_day_month_label)
        return PeriodWindow(start, now, _WEEK_BUCKETS, labels, _DAILY)

    if period is Period.CUSTOM:
        if not spec.has_custom_range:
            start = _trailing_days(now, _WEEK_BUCKETS)
            labels = tuple(f"Day {index + 1}" for index in range(_WEEK_BUCKETS))
            return PeriodWindow(start, now, _WEEK_BUCKETS, labels, _DAILY)

        start = pd.Timestamp(spec.custom_start)
        last_day = pd.Timestamp(spec.custom_end)
        end_of_range = last_day + pd.Timedelta(days=1) - pd.Timedelta(milliseconds=1)
        days_between = (last_day - start).days
        data_points = min(max(days_between + 1, 1), MAX_CUSTOM_DAYS)
        labels = _daily_labels(start, data_points, day_month_label)
        return PeriodWindow(start, min(end_of_range, now), data_points, labels, _DAILY)

    start = _trailing_days(now, _MONTH_BUCKETS)
    labels = _daily_labels(start, _MONTH_BUCKETS, day_month_label)
    return PeriodWindow(start, now, _MONTH_BUCKETS, labels, _DAILY)


def bucket_indices(timestamps: pd.Series, window: PeriodWindow) -> np.ndarray:
    """Map timestamps onto bucket indices clamped to ``[0, data_points - 1]``."""

    if timestamps.empty:
        return np.zeros(0, dtype=int)

    offsets = (timestamps - window.start) / _STEPS[window.resolution]
    indices = np.floor(offsets.to_numpy(dtype=float))
    return np.clip(indices, 0, window.data_points - 1).astype(int)


def bucket_index(timestamp: TimestampLike, window: PeriodWindow) -> int:
    series = pd.Series([as_naive_timestamp(timestamp)])
    return int(bucket_indices(series, window)[0])
