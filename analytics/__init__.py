"""Analytics helpers shared across Stockroom services."""

from analytics.activity import build_recent_activity, normalise_activity
from analytics.buckets import (
    ITEM_DATE_FIELDS,
    REPORT_DATE_FIELDS,
    REQUEST_DATE_FIELDS,
    aggregate,
    build_inventory_trend,
    build_system_activity,
    extract_timestamp,
)
from analytics.categories import aggregate_cost_by_category, count_by_category
from analytics.kpis import compute_kpis, normalise_kpis
from analytics.periods import bucket_index, bucket_indices, resolve_period

__all__ = [
    "build_recent_activity",
    "normalise_activity",
    "ITEM_DATE_FIELDS",
    "REPORT_DATE_FIELDS",
    "REQUEST_DATE_FIELDS",
    "aggregate",
    "build_inventory_trend",
    "build_system_activity",
    "extract_timestamp",
    "aggregate_cost_by_category",
    "count_by_category",
    "compute_kpis",
    "normalise_kpis",
    "bucket_index",
    "bucket_indices",
    "resolve_period",
]
