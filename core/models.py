"""Shared data model definitions for the Stockroom dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional, TypedDict, Union

import pandas as pd

Record = Mapping[str, Any]
DateLike = Union[str, date, pd.Timestamp]


class Period(str, Enum):
    TODAY = "today"
    WEEK = "week"
    DAY_TO_DAY = "dayToDay"
    MONTH = "month"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return _PERIOD_LABELS[self]


_PERIOD_LABELS = {
    Period.TODAY: "Today",
    Period.WEEK: "This Week",
    Period.DAY_TO_DAY: "Day to Day",
    Period.MONTH: "This Month",
    Period.CUSTOM: "Custom",
}


@dataclass(frozen=True)
class PeriodSpec:
    """User-selected chart window.

    ``custom_start`` and ``custom_end`` are only read for ``Period.CUSTOM``.
    """

    period: Period = Period.WEEK
    custom_start: Optional[date] = None
    custom_end: Optional[date] = None

    @classmethod
    def parse(
        cls,
        value: str | Period,
        custom_start: DateLike | None = None,
        custom_end: DateLike | None = None,
    ) -> "PeriodSpec":
        period = Period(value)
        return cls(period, _coerce_date(custom_start), _coerce_date(custom_end))

    @property
    def has_custom_range(self) -> bool:
        return self.custom_start is not None and self.custom_end is not None


def _coerce_date(value: DateLike | None) -> Optional[date]:
    if value is None or value == "":
        return None
    timestamp = pd.to_datetime(value, errors="coerce")
    if pd.isna(timestamp):
        return None
    return timestamp.date()


@dataclass(frozen=True)
class PeriodWindow:
    start: pd.Timestamp
    end: pd.Timestamp
    data_points: int
    labels: tuple[str, ...]
    resolution: str

    def __post_init__(self) -> None:
        if self.data_points < 1:
            raise ValueError("A period window needs at least one bucket.")
        if len(self.labels) != self.data_points:
            raise ValueError("Each bucket needs exactly one label.")


class TrendRow(TypedDict, total=False):
    label: str
    items_added: int
    requests: int
    activity: int


class CategoryCostEntry(TypedDict):
    name: str
    cost: int


class CategoryCountEntry(TypedDict):
    label: str
    value: int
    percentage: float


class DashboardKpis(TypedDict):
    total_items: int
    available_items: int
    pending_requests: int
    pending_inspection: int
    total_users: int


class ActivityEntry(TypedDict):
    type: str
    icon: str
    color: str
    text: str
    time: str


@dataclass(frozen=True)
class TrendResult:
    window: PeriodWindow
    series: tuple[str, ...]
    rows: list[TrendRow]
    is_placeholder: bool = False

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=["label", *self.series])


@dataclass(frozen=True)
class CategoryResult:
    entries: list[Any]
    is_placeholder: bool = False

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.entries)


@dataclass
class DashboardSource:
    """Raw collections fetched from the inventory backend."""

    inventory: list[Record] = field(default_factory=list)
    requests: list[Record] = field(default_factory=list)
    reports: list[Record] = field(default_factory=list)
    users: list[Record] = field(default_factory=list)
    kpis: Optional[DashboardKpis] = None
    recent_activity: list[ActivityEntry] = field(default_factory=list)


class DashboardData(TypedDict):
    kpis: DashboardKpis
    period: PeriodSpec
    inventory_trend: TrendResult
    category_costs: CategoryResult
    system_activity: TrendResult
    request_categories: CategoryResult
    recent_activity: list[ActivityEntry]
    generated_at: pd.Timestamp


__all__ = [
    "Record",
    "DateLike",
    "Period",
    "PeriodSpec",
    "PeriodWindow",
    "TrendRow",
    "CategoryCostEntry",
    "CategoryCountEntry",
    "DashboardKpis",
    "ActivityEntry",
    "TrendResult",
    "CategoryResult",
    "DashboardSource",
    "DashboardData",
]
