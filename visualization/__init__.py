"""Visualization utilities for Stockroom dashboards."""

from .charts import (
    build_activity_chart,
    build_category_cost_chart,
    build_category_count_chart,
    build_trend_chart,
)
from .theme import Theme, theme_tokens

__all__ = [
    "build_activity_chart",
    "build_category_cost_chart",
    "build_category_count_chart",
    "build_trend_chart",
    "Theme",
    "theme_tokens",
]
