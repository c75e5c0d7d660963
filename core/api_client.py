"""HTTP client for the school inventory REST backend."""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping, Optional

import httpx

from config import Settings, get_settings

logger = logging.getLogger(__name__)

__all__ = [
    "COLLECTION_PATHS",
    "DASHBOARD_SUMMARY_PATH",
    "DashboardAPIError",
    "InventoryAPIClient",
]

DASHBOARD_SUMMARY_PATH: Final[str] = "/api/dashboard/admin"
COLLECTION_PATHS: Final[Mapping[str, str]] = {
    "inventory": "/api/inventory",
    "requests": "/api/requests",
    "users": "/api/users",
    "reports": "/api/reports",
}


class DashboardAPIError(RuntimeError):
    """Raised when the inventory backend cannot serve dashboard data."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)


class InventoryAPIClient:
    """Thin synchronous wrapper around the backend's JSON endpoints."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            base_url=self._settings.api_base_url,
            headers=self._settings.api_headers,
            timeout=self._settings.request_timeout,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "InventoryAPIClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_json(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise DashboardAPIError(f"Request to {path} failed: {exc}") from exc

        if response.is_error:
            raise DashboardAPIError(
                f"{path} responded with HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise DashboardAPIError(f"{path} returned invalid JSON") from exc

    def fetch_dashboard_summary(self) -> Mapping[str, Any]:
        payload = self._get_json(DASHBOARD_SUMMARY_PATH, params={"include_full_data": "true"})
        if not isinstance(payload, Mapping):
            raise DashboardAPIError(f"{DASHBOARD_SUMMARY_PATH} returned a non-object payload")
        return payload

    def fetch_collection(self, name: str) -> list[Any]:
        try:
            path = COLLECTION_PATHS[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name!r}") from None

        payload = self._get_json(path)
        if not isinstance(payload, list):
            logger.warning("%s returned %s instead of a list", path, type(payload).__name__)
            return []
        return payload
