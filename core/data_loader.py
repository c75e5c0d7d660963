"""Data loading utilities for offline Stockroom snapshots."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Final

from core.models import DashboardSource

__all__ = ["load_records", "load_snapshot"]


_CACHE_SIZE: Final[int] = 8
_SNAPSHOT_FILES: Final[dict[str, str]] = {
    "inventory": "inventory.json",
    "requests": "requests.json",
    "reports": "reports.json",
    "users": "users.json",
}


@lru_cache(maxsize=_CACHE_SIZE)
def _read_records(path: Path) -> tuple[Any, ...]:
    with path.open(encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array in {path}")
    return tuple(payload)


def load_records(json_path: str | Path) -> list[Any]:
    """Return the records stored as a JSON array at ``json_path``.

    Parsed files are cached so re-rendering the dashboard does not hit the
    disk again for the same snapshot.
    """

    path = Path(json_path)
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")
    return list(_read_records(path))


def load_snapshot(directory: str | Path) -> DashboardSource:
    """Load a directory of exported backend collections.

    Missing files are treated as empty collections.
    """

    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Snapshot directory not found: {directory}")

    collections: dict[str, list[Any]] = {}
    for name, filename in _SNAPSHOT_FILES.items():
        path = directory / filename
        collections[name] = load_records(path) if path.exists() else []
    return DashboardSource(**collections)
