"""Tests for category breakdowns and KPI derivation."""

from __future__ import annotations

import numpy as np
import pytest

from analytics.categories import aggregate_cost_by_category, coerce_quantity, count_by_category
from analytics.kpis import compute_kpis, normalise_kpis


def test_cost_sums_price_times_quantity_per_category():
    records = [
        {"category": "A", "purchase_price": 10, "quantity": 2},
        {"category": "A", "purchase_price": 5, "quantity": 1},
    ]

    result = aggregate_cost_by_category(records)

    assert result.entries == [{"name": "A", "cost": 25}]
    assert not result.is_placeholder


def test_cost_applies_field_fallbacks_and_safe_defaults():
    records = [
        {"item_category": "Tools", "purchasePrice": "12.5", "item_quantity": "2"},
        {"purchase_price": 100},
        {"category": "Tools", "purchase_price": "abc", "quantity": 3},
        {"category": "Tools", "purchase_price": 10, "quantity": "many"},
        None,
        "bogus",
    ]

    result = aggregate_cost_by_category(records)

    assert result.entries == [
        {"name": "Other", "cost": 100},
        {"name": "Tools", "cost": 35},
    ]


@pytest.mark.parametrize(
    ("record", "expected"),
    [
        ({"quantity": 0}, 1),
        ({"quantity": 0, "item_quantity": 3}, 3),
        ({"quantity": 2.9}, 2),
        ({"quantity": "many"}, 1),
        ({}, 1),
    ],
)
def test_zero_quantity_falls_back_like_a_missing_one(record, expected):
    assert coerce_quantity(record) == expected


def test_cost_keeps_top_six_and_truncates_long_names():
    records = [
        {"category": f"Category number {index}", "purchase_price": index * 10, "quantity": 1}
        for index in range(1, 9)
    ]

    result = aggregate_cost_by_category(records)

    assert len(result.entries) == 6
    assert [entry["cost"] for entry in result.entries] == [80, 70, 60, 50, 40, 30]
    assert result.entries[0]["name"] == "Category num..."


def test_cost_rounds_half_up():
    records = [{"category": "Paper", "purchase_price": 1.25, "quantity": 2}]

    assert aggregate_cost_by_category(records).entries == [{"name": "Paper", "cost": 3}]


def test_cost_ties_keep_first_seen_order():
    records = [
        {"category": "Books", "purchase_price": 10},
        {"category": "Art", "purchase_price": 10},
    ]

    names = [entry["name"] for entry in aggregate_cost_by_category(records).entries]

    assert names == ["Books", "Art"]


def test_cost_placeholder_when_no_categories():
    result = aggregate_cost_by_category([], rng=np.random.default_rng(3))

    assert result.is_placeholder
    assert len(result.entries) == 6
    assert all(10000 <= entry["cost"] < 60000 for entry in result.entries)
    costs = [entry["cost"] for entry in result.entries]
    assert costs == sorted(costs, reverse=True)


def test_cost_placeholder_can_be_disabled():
    result = aggregate_cost_by_category(None, placeholder_fallback=False)

    assert result.entries == []
    assert not result.is_placeholder
    assert result.to_frame().empty


def test_count_by_category_reports_percentage_of_largest():
    requests = [
        {"category": "Electronics"},
        {"item_category": "Electronics"},
        {"category": "Sports"},
    ]

    result = count_by_category(requests)

    assert result.entries == [
        {"label": "Electronic...", "value": 2, "percentage": 100.0},
        {"label": "Sports", "value": 1, "percentage": 50.0},
    ]


def test_count_by_category_placeholder():
    result = count_by_category([])

    assert result.is_placeholder
    assert len(result.entries) == 5
    assert all(3 <= entry["value"] < 18 for entry in result.entries)
    assert result.entries[0]["percentage"] == pytest.approx(100.0)


def test_compute_kpis_from_collections():
    inventory = [{"available": 3}, {"available": "2"}, {"available": None}, {}]
    requests = [
        {"status": "pending"},
        {"status": "under_review"},
        {"status": "approved"},
        {"status": "returned_pending_inspection", "inspection_status": "pending"},
        {"status": "returned_pending_inspection", "inspection_status": "passed"},
    ]
    users = [{"id": 1}, {"id": 2}]

    kpis = compute_kpis(inventory, requests, users)

    assert kpis == {
        "total_items": 4,
        "available_items": 5,
        "pending_requests": 2,
        "pending_inspection": 1,
        "total_users": 2,
    }


def test_normalise_kpis_defaults_missing_values():
    kpis = normalise_kpis({"totalItems": 12, "availableItems": "7", "pendingRequests": None, "totalUsers": "n/a"})

    assert kpis == {
        "total_items": 12,
        "available_items": 7,
        "pending_requests": 0,
        "pending_inspection": 0,
        "total_users": 0,
    }
