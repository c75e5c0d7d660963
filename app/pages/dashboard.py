"""Administrator dashboard page layout."""

from __future__ import annotations

import streamlit as st

from config import get_settings
from core import DashboardData
from ui.components import card, render_activity_feed, render_kpi_row
from visualization import (
    build_activity_chart,
    build_category_cost_chart,
    build_category_count_chart,
    build_trend_chart,
)

_KPI_CARDS = (
    ("total_items", "Total Items", "📦"),
    ("available_items", "Available Items", "✅"),
    ("pending_requests", "Pending Requests", "⏳"),
    ("pending_inspection", "Pending Inspection", "🔍"),
    ("total_users", "Total Users", "👥"),
)


def _render_kpis(data: DashboardData, data_ready: bool) -> None:
    kpis = data["kpis"]
    render_kpi_row(
        [(key, label, kpis[key], icon) for key, label, icon in _KPI_CARDS],
        data_ready=data_ready,
        duration_ms=get_settings().kpi_duration_ms,
    )


def _sample_chip(is_placeholder: bool) -> str | None:
    return "Sample data" if is_placeholder else None


def render_page(data: DashboardData, *, data_ready: bool = True) -> None:
    """Render the administrator dashboard page."""

    theme = get_settings().theme
    period = data["period"]

    st.title("Dashboard")
    st.caption(f"{period.period.label} · refreshed {data['generated_at']:%d %b %Y %H:%M}")

    _render_kpis(data, data_ready)

    trend = data["inventory_trend"]
    with card("Activity Trends", suffix=_sample_chip(trend.is_placeholder)):
        st.plotly_chart(build_trend_chart(trend, theme), use_container_width=True, key="activity-trend")

    left, right = st.columns([3, 2], gap="medium")
    with left:
        costs = data["category_costs"]
        with card("Cost by Category", suffix=_sample_chip(costs.is_placeholder)):
            st.plotly_chart(build_category_cost_chart(costs, theme), use_container_width=True, key="category-costs")
    with right:
        counts = data["request_categories"]
        with card("Requests by Category", suffix=_sample_chip(counts.is_placeholder)):
            st.plotly_chart(build_category_count_chart(counts, theme), use_container_width=True, key="category-counts")

    with card("System Activity"):
        st.plotly_chart(
            build_activity_chart(data["system_activity"], theme),
            use_container_width=True,
            key="system-activity",
        )

    with card("Recent Activity"):
        render_activity_feed(data["recent_activity"])


__all__ = ["render_page"]
