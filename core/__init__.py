"""Core domain package for the Stockroom dashboard."""

from .models import (
    ActivityEntry,
    CategoryCostEntry,
    CategoryCountEntry,
    CategoryResult,
    DashboardData,
    DashboardKpis,
    DashboardSource,
    Period,
    PeriodSpec,
    PeriodWindow,
    TrendResult,
    TrendRow,
)

__all__ = [
    "ActivityEntry",
    "CategoryCostEntry",
    "CategoryCountEntry",
    "CategoryResult",
    "DashboardData",
    "DashboardKpis",
    "DashboardSource",
    "Period",
    "PeriodSpec",
    "PeriodWindow",
    "TrendResult",
    "TrendRow",
]
