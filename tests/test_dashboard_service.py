"""Tests for the REST client, snapshot loader and dashboard assembly."""

from __future__ import annotations

import json

import httpx
import pandas as pd
import pytest
import streamlit as st

from config import Settings, get_settings
from core.api_client import DashboardAPIError, InventoryAPIClient
from core.data_loader import load_records, load_snapshot
from core.models import DashboardSource, Period, PeriodSpec
from core.summary_service import load_dashboard_source, prepare_dashboard_data, source_from_summary

NOW = pd.Timestamp("2024-01-07 12:00")

INVENTORY = [
    {"id": 1, "category": "Electronics", "purchase_price": 1500, "quantity": 2, "available": 2,
     "created_at": "2024-01-02T09:00:00"},
    {"id": 2, "category": "Furniture", "purchase_price": 300, "quantity": 10, "available": 8,
     "created_at": "2024-01-06T14:00:00"},
]
REQUESTS = [
    {"id": 1, "category": "Electronics", "status": "pending", "teacher_name": "Ana Santos",
     "created_at": "2024-01-06T10:00:00"},
    {"id": 2, "category": "Electronics", "status": "approved", "teacher_name": "Ben Cruz",
     "created_at": "2024-01-07T08:00:00"},
]
REPORTS = [{"id": 1, "notes": "DAMAGED", "created_at": "2024-01-07T09:00:00"}]
USERS = [{"id": 1}, {"id": 2}, {"id": 3}]
SUMMARY_ACTIVITY = {
    "type": "request",
    "icon": "bi-file-earmark-text",
    "color": "#3182ce",
    "text": "New item request from Ana Santos",
    "time": "2024-01-06 10:00:00",
}


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _client(handler) -> InventoryAPIClient:
    http_client = httpx.Client(base_url="http://backend.test", transport=httpx.MockTransport(handler))
    return InventoryAPIClient(Settings(api_token="secret"), http_client=http_client)


def _collections_handler(summary_status: int = 200):
    payloads = {
        "/api/inventory": INVENTORY,
        "/api/requests": REQUESTS,
        "/api/users": USERS,
        "/api/reports": REPORTS,
    }

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/dashboard/admin":
            if summary_status != 200:
                return httpx.Response(summary_status, json={"message": "unavailable"})
            assert request.url.params["include_full_data"] == "true"
            return httpx.Response(
                200,
                json={
                    "totalItems": 2,
                    "availableItems": 10,
                    "pendingRequests": 1,
                    "totalUsers": 3,
                    "inventoryData": INVENTORY,
                    "requestsData": REQUESTS,
                    "reportsData": REPORTS,
                    "recentActivity": [SUMMARY_ACTIVITY, {"text": ""}, "junk"],
                },
            )
        return httpx.Response(200, json=payloads[request.url.path])

    return handler


def test_settings_build_bearer_headers():
    headers = Settings(api_token="abc").api_headers

    assert headers["Authorization"] == "Bearer abc"
    assert "Authorization" not in Settings().api_headers


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("STOCKROOM_API_BASE_URL", "http://school.example")
    monkeypatch.setenv("STOCKROOM_PLACEHOLDER_FALLBACK", "false")

    settings = get_settings()

    assert settings.api_base_url == "http://school.example"
    assert settings.placeholder_fallback is False


def test_fetch_dashboard_summary():
    with _client(_collections_handler()) as client:
        payload = client.fetch_dashboard_summary()

    assert payload["totalItems"] == 2


@pytest.mark.parametrize(("status", "auth"), [(500, False), (401, True), (403, True)])
def test_http_errors_raise_dashboard_error(status, auth):
    client = _client(lambda request: httpx.Response(status))

    with pytest.raises(DashboardAPIError) as excinfo:
        client.fetch_collection("inventory")

    assert excinfo.value.status_code == status
    assert excinfo.value.is_auth_error is auth


def test_transport_errors_raise_dashboard_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DashboardAPIError):
        _client(handler).fetch_dashboard_summary()


def test_non_list_collection_becomes_empty():
    client = _client(lambda request: httpx.Response(200, json={"data": []}))

    assert client.fetch_collection("reports") == []
    with pytest.raises(ValueError):
        client.fetch_collection("suppliers")


def test_load_source_prefers_summary_endpoint():
    source = load_dashboard_source(_client(_collections_handler()))

    assert source.kpis == {
        "total_items": 2,
        "available_items": 10,
        "pending_requests": 1,
        "pending_inspection": 0,
        "total_users": 3,
    }
    assert source.reports == REPORTS
    assert source.recent_activity == [SUMMARY_ACTIVITY]


def test_load_source_falls_back_to_collections():
    source = load_dashboard_source(_client(_collections_handler(summary_status=500)))

    assert source.users == USERS
    assert source.kpis == {
        "total_items": 2,
        "available_items": 10,
        "pending_requests": 1,
        "pending_inspection": 0,
        "total_users": 3,
    }
    assert [entry["text"] for entry in source.recent_activity] == [
        "New report: Damaged item",
        "New item request from Ben Cruz",
        "New item request from Ana Santos",
    ]
    assert source.recent_activity[0]["time"] == "2024-01-07 09:00:00"


def test_prepare_dashboard_data_builds_every_section():
    source = source_from_summary({"inventoryData": INVENTORY, "requestsData": REQUESTS, "reportsData": REPORTS})

    data = prepare_dashboard_data(source, PeriodSpec(Period.WEEK), NOW, placeholder_fallback=False)

    trend = data["inventory_trend"]
    assert [row["items_added"] for row in trend.rows] == [0, 1, 0, 0, 0, 1, 0]
    assert [row["requests"] for row in trend.rows] == [0, 0, 0, 0, 0, 1, 1]
    assert data["category_costs"].entries == [
        {"name": "Electronics", "cost": 3000},
        {"name": "Furniture", "cost": 3000},
    ]
    assert [row["activity"] for row in data["system_activity"].rows] == [0, 0, 0, 0, 0, 1, 2]
    assert data["request_categories"].entries[0]["value"] == 2
    assert len(data["recent_activity"]) == 3
    assert data["generated_at"] == NOW


def test_prepare_dashboard_data_uses_configured_placeholder_policy(monkeypatch):
    monkeypatch.setenv("STOCKROOM_PLACEHOLDER_FALLBACK", "false")

    data = prepare_dashboard_data(DashboardSource(), PeriodSpec(Period.MONTH), NOW)

    assert not data["inventory_trend"].is_placeholder
    assert data["category_costs"].entries == []
    assert data["kpis"]["total_items"] == 0


def test_load_snapshot_reads_exported_collections(tmp_path):
    (tmp_path / "inventory.json").write_text(json.dumps(INVENTORY), encoding="utf-8")
    (tmp_path / "requests.json").write_text(json.dumps(REQUESTS), encoding="utf-8")

    source = load_snapshot(tmp_path)

    assert source.inventory == INVENTORY
    assert source.requests == REQUESTS
    assert source.reports == []
    assert source.kpis is None


def test_load_records_validates_input(tmp_path):
    not_a_list = tmp_path / "summary.json"
    not_a_list.write_text(json.dumps({"totalItems": 1}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_records(not_a_list)
    with pytest.raises(FileNotFoundError):
        load_records(tmp_path / "missing.json")
    with pytest.raises(FileNotFoundError):
        load_snapshot(tmp_path / "nowhere")
