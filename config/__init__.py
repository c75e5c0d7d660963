"""Application configuration utilities."""

from .settings import DEFAULT_API_BASE_URL, Settings, get_settings

__all__ = [
    "DEFAULT_API_BASE_URL",
    "Settings",
    "get_settings",
]
