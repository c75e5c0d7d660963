"""Stockroom administrator dashboard."""

from __future__ import annotations

import logging
import time

import streamlit as st

from animation import DataReadyGate
from app.pages import render_dashboard_page
from config import get_settings
from core.api_client import DashboardAPIError, InventoryAPIClient
from core.data_loader import load_snapshot
from core.models import DashboardSource
from core.summary_service import load_dashboard_source, prepare_dashboard_data
from ui.components import inject_css, period_selector

logger = logging.getLogger(__name__)

_SOURCE_TTL_SECONDS = 60


@st.cache_data(ttl=_SOURCE_TTL_SECONDS, show_spinner=False)
def _load_source() -> DashboardSource:
    """Fetch and cache backend collections for a minute."""

    settings = get_settings()
    if settings.snapshot_dir:
        return load_snapshot(settings.snapshot_dir)

    with InventoryAPIClient(settings) as client:
        return load_dashboard_source(client)


def _now_ms() -> float:
    return time.monotonic() * 1000.0


def main() -> None:
    """Application entrypoint for the Stockroom dashboard."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(
        page_title="Stockroom | Dashboard",
        page_icon="📦",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    inject_css()

    period = period_selector()
    gate = st.session_state.setdefault("data_ready_gate", DataReadyGate(get_settings().ready_delay_ms))

    gate.update(loading=True, now=_now_ms())
    with st.spinner("Loading dashboard data…"):
        try:
            source = _load_source()
        except DashboardAPIError as exc:
            logger.error("Dashboard data unavailable: %s", exc)
            if exc.is_auth_error:
                st.error("Authentication failed. Check the API token and sign in again.")
            else:
                st.error(f"Dashboard data unavailable: {exc}")
            return
    gate.update(loading=False, now=_now_ms())

    remaining = gate.remaining_ms(_now_ms())
    if remaining:
        time.sleep(remaining / 1000.0)

    data = prepare_dashboard_data(source, period)
    render_dashboard_page(data, data_ready=gate.is_ready(_now_ms()))


if __name__ == "__main__":
    main()
