"""Dashboard KPI figures for the administrator overview."""

from __future__ import annotations

from typing import Any, Mapping

from core.models import DashboardKpis

__all__ = [
    "PENDING_REQUEST_STATUSES",
    "compute_kpis",
    "normalise_kpis",
]

PENDING_REQUEST_STATUSES = frozenset({"pending", "under_review"})

_PAYLOAD_KEYS = {
    "total_items": "totalItems",
    "available_items": "availableItems",
    "pending_requests": "pendingRequests",
    "pending_inspection": "pendingInspection",
    "total_users": "totalUsers",
}


def _coerce_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def _mappings(records: Any) -> list[Mapping[str, Any]]:
    if not isinstance(records, (list, tuple)):
        return []
    return [record for record in records if isinstance(record, Mapping)]


def compute_kpis(inventory: Any, requests: Any, users: Any) -> DashboardKpis:
    """Derive the dashboard KPIs from raw collections.

    Used when the backend summary endpoint is unavailable and the collections
    were fetched one by one.
    """

    items = _mappings(inventory)
    request_rows = _mappings(requests)

    pending_inspection = sum(
        1
        for row in request_rows
        if row.get("status") == "returned_pending_inspection" and row.get("inspection_status") == "pending"
    )

    return {
        "total_items": len(inventory) if isinstance(inventory, (list, tuple)) else 0,
        "available_items": sum(max(_coerce_int(item.get("available")), 0) for item in items),
        "pending_requests": sum(1 for row in request_rows if row.get("status") in PENDING_REQUEST_STATUSES),
        "pending_inspection": pending_inspection,
        "total_users": len(users) if isinstance(users, (list, tuple)) else 0,
    }


def normalise_kpis(payload: Mapping[str, Any]) -> DashboardKpis:
    """Read KPI fields from a dashboard summary payload, defaulting to zero."""

    kpis = {key: max(_coerce_int(payload.get(source)), 0) for key, source in _PAYLOAD_KEYS.items()}
    return kpis  # type: ignore[return-value]
