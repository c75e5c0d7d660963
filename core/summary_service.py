"""Core logic for assembling Stockroom dashboard data."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Union

import pandas as pd

from analytics.activity import build_recent_activity, normalise_activity
from analytics.buckets import build_inventory_trend, build_system_activity
from analytics.categories import aggregate_cost_by_category, count_by_category
from analytics.kpis import compute_kpis, normalise_kpis
from analytics.periods import as_naive_timestamp
from config import get_settings
from core.api_client import DashboardAPIError, InventoryAPIClient
from core.models import DashboardData, DashboardSource, PeriodSpec

logger = logging.getLogger(__name__)

__all__ = ["load_dashboard_source", "prepare_dashboard_data", "source_from_summary"]


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def source_from_summary(payload: Mapping[str, Any]) -> DashboardSource:
    """Build a source from the ``/api/dashboard/admin`` full-data payload."""

    return DashboardSource(
        inventory=_as_list(payload.get("inventoryData")),
        requests=_as_list(payload.get("requestsData")),
        reports=_as_list(payload.get("reportsData")),
        kpis=normalise_kpis(payload),
        recent_activity=normalise_activity(payload.get("recentActivity")),
    )


def load_dashboard_source(client: InventoryAPIClient) -> DashboardSource:
    """Fetch dashboard collections, falling back to the per-collection endpoints.

    Errors from the fallback requests propagate to the caller.
    """

    try:
        return source_from_summary(client.fetch_dashboard_summary())
    except DashboardAPIError as exc:
        if exc.is_auth_error:
            logger.error("Dashboard summary rejected credentials: %s", exc)
        logger.warning("Dashboard summary unavailable (%s); fetching collections individually", exc)

    inventory = client.fetch_collection("inventory")
    requests = client.fetch_collection("requests")
    users = client.fetch_collection("users")
    reports = client.fetch_collection("reports")
    return DashboardSource(
        inventory=inventory,
        requests=requests,
        reports=reports,
        users=users,
        kpis=compute_kpis(inventory, requests, users),
        recent_activity=build_recent_activity(requests, reports),
    )


def prepare_dashboard_data(
    source: DashboardSource,
    period: PeriodSpec,
    now: Optional[Union[datetime, pd.Timestamp]] = None,
    *,
    placeholder_fallback: Optional[bool] = None,
) -> DashboardData:
    if placeholder_fallback is None:
        placeholder_fallback = get_settings().placeholder_fallback
    generated_at = as_naive_timestamp(now if now is not None else pd.Timestamp.now())

    kpis = source.kpis
    if kpis is None:
        kpis = compute_kpis(source.inventory, source.requests, source.users)
    recent_activity = source.recent_activity or build_recent_activity(source.requests, source.reports)

    return {
        "kpis": kpis,
        "period": period,
        "inventory_trend": build_inventory_trend(
            source.inventory,
            source.requests,
            period,
            generated_at,
            placeholder_fallback=placeholder_fallback,
        ),
        "category_costs": aggregate_cost_by_category(
            source.inventory, placeholder_fallback=placeholder_fallback
        ),
        "system_activity": build_system_activity(source.requests, source.reports, period, generated_at),
        "request_categories": count_by_category(
            source.requests, placeholder_fallback=placeholder_fallback
        ),
        "recent_activity": recent_activity,
        "generated_at": generated_at,
    }
