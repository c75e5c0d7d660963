"""Formatting helpers for Stockroom labels and KPI values."""

from __future__ import annotations

import math
from typing import Any

import pandas as pd

__all__ = [
    "hour_label",
    "weekday_label",
    "day_month_label",
    "weekday_day_month_label",
    "format_count",
    "format_currency",
    "truncate_label",
    "round_half_up",
]

_WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def hour_label(hour: int) -> str:
    return f"{hour:02d}:00"


def weekday_label(day: pd.Timestamp) -> str:
    return _WEEKDAY_NAMES[day.weekday()]


def day_month_label(day: pd.Timestamp) -> str:
    # Day first without zero padding, e.g. "5/1" for 5 January.
    return f"{day.day}/{day.month}"


def weekday_day_month_label(day: pd.Timestamp) -> str:
    return f"{weekday_label(day)} {day_month_label(day)}"


def truncate_label(name: str, max_length: int, marker: str = "...") -> str:
    if len(name) > max_length:
        return name[:max_length] + marker
    return name


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""

    return int(math.floor(value + 0.5))


def format_count(value: Any) -> str:
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0
    return f"{number:,}"


def format_currency(value: Any, symbol: str = "₱") -> str:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        amount = 0.0
    if math.isnan(amount):
        amount = 0.0
    return f"{symbol}{amount:,.0f}"
