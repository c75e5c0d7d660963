"""Centralised configuration handling for Stockroom."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping

import streamlit as st
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "http://127.0.0.1:8000"
SECRETS_SECTION = "stockroom"


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: str | None = None
    request_timeout: float = 10.0
    kpi_duration_ms: float = 1200.0
    ready_delay_ms: float = 100.0
    placeholder_fallback: bool = True
    theme: str = "light"
    snapshot_dir: str | None = None

    model_config = SettingsConfigDict(env_prefix="STOCKROOM_", extra="ignore")

    @property
    def api_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section(SECRETS_SECTION)
    if secrets_section:
        overrides = {
            "api_base_url": secrets_section.get("api_base_url") or secrets_section.get("api_base"),
            "api_token": secrets_section.get("api_token"),
            "placeholder_fallback": secrets_section.get("placeholder_fallback"),
            "theme": secrets_section.get("theme"),
            "snapshot_dir": secrets_section.get("snapshot_dir"),
        }

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
