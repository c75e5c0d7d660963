"""Synthetic school inventory snapshot generator for the Stockroom dashboard.

Produces backend-shaped JSON collections (inventory, requests, reports,
users) for local development and demos. Point ``STOCKROOM_SNAPSHOT_DIR`` at
the output directory to run the dashboard without a backend.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, TypeVar

import numpy as np
import pandas as pd

from core.models import DashboardSource

T = TypeVar("T")


@dataclass(frozen=True)
class ItemProfile:
    """Template for a catalogue item bought by the school."""

    name: str
    category: str
    price_range: Tuple[float, float]
    quantity_range: Tuple[int, int]


ITEM_PROFILES: Sequence[ItemProfile] = (
    ItemProfile("Laptop", "Electronics", (28000.0, 45000.0), (1, 5)),
    ItemProfile("Projector", "Electronics", (15000.0, 32000.0), (1, 3)),
    ItemProfile("Student Chair", "Furniture", (900.0, 1800.0), (10, 40)),
    ItemProfile("Teacher Desk", "Furniture", (4500.0, 9000.0), (1, 6)),
    ItemProfile("Bond Paper Ream", "Office Supplies", (220.0, 320.0), (5, 30)),
    ItemProfile("Whiteboard Markers", "Office Supplies", (45.0, 90.0), (10, 60)),
    ItemProfile("Cordless Drill", "Tools", (2500.0, 6000.0), (1, 3)),
    ItemProfile("Microscope", "Laboratory Equipment", (8000.0, 22000.0), (1, 8)),
    ItemProfile("Basketball", "Sports", (800.0, 1600.0), (2, 12)),
    ItemProfile("Science Textbook", "Books", (350.0, 650.0), (10, 45)),
)

REQUEST_STATUSES: Tuple[str, ...] = (
    "pending",
    "under_review",
    "approved",
    "assigned",
    "returned",
    "returned_pending_inspection",
    "rejected",
)
REPORT_NOTES: Tuple[str, ...] = ("MISSING", "DAMAGED", "OTHER")
TEACHERS: Tuple[str, ...] = (
    "Ana Santos",
    "Ben Cruz",
    "Carla Reyes",
    "Dan Garcia",
    "Ella Mendoza",
)


def generate_snapshot(
    *,
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
    days: int = 45,
    items: int = 60,
    requests: int = 80,
    reports: int = 15,
) -> DashboardSource:
    """Return a synthetic snapshot spread over the ``days`` before ``now``."""

    if days < 1:
        raise ValueError("days must be at least 1")

    rng = np.random.default_rng(seed)
    now = pd.Timestamp(now or datetime.now()).floor("s")
    users = [
        {"id": index + 1, "name": name, "role": "teacher"} for index, name in enumerate(TEACHERS)
    ] + [{"id": len(TEACHERS) + 1, "name": "Admin", "role": "admin"}]

    inventory: List[dict] = []
    for index in range(items):
        profile = _rng_choice(ITEM_PROFILES, rng)
        quantity = int(rng.integers(profile.quantity_range[0], profile.quantity_range[1] + 1))
        created_at = _random_moment(now, days, rng)
        inventory.append(
            {
                "id": index + 1,
                "name": profile.name,
                "category": profile.category,
                "purchase_price": round(float(rng.uniform(*profile.price_range)), 2),
                "quantity": quantity,
                "available": int(rng.integers(0, quantity + 1)),
                "created_at": created_at.isoformat(),
                "purchase_date": (created_at - timedelta(days=int(rng.integers(0, 10)))).date().isoformat(),
            }
        )

    request_rows: List[dict] = []
    for index in range(requests):
        item = _rng_choice(inventory, rng) if inventory else None
        status = _rng_choice(REQUEST_STATUSES, rng)
        teacher = _rng_choice(users[: len(TEACHERS)], rng)
        request_rows.append(
            {
                "id": index + 1,
                "request_type": "item",
                "item_id": item["id"] if item else None,
                "category": item["category"] if item else "Other",
                "teacher_name": teacher["name"],
                "status": status,
                "inspection_status": "pending" if status == "returned_pending_inspection" else None,
                "created_at": _random_moment(now, days, rng).isoformat(),
            }
        )

    report_rows = [
        {
            "id": index + 1,
            "notes": f"{_rng_choice(REPORT_NOTES, rng)}: reported by staff",
            "created_at": _random_moment(now, days, rng).isoformat(),
        }
        for index in range(reports)
    ]

    return DashboardSource(
        inventory=sorted(inventory, key=lambda row: row["created_at"]),
        requests=sorted(request_rows, key=lambda row: row["created_at"]),
        reports=sorted(report_rows, key=lambda row: row["created_at"]),
        users=users,
    )


def write_snapshot(directory: str | Path, *, seed: Optional[int] = None, **kwargs) -> DashboardSource:
    """Generate a snapshot and persist one JSON file per collection.

    Additional keyword arguments are forwarded to :func:`generate_snapshot`.
    """

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    snapshot = generate_snapshot(seed=seed, **kwargs)
    for name in ("inventory", "requests", "reports", "users"):
        path = directory / f"{name}.json"
        path.write_text(json.dumps(getattr(snapshot, name), indent=2), encoding="utf-8")
    return snapshot


def _random_moment(now: pd.Timestamp, days: int, rng: np.random.Generator) -> pd.Timestamp:
    # School hours only, so the Today chart has a realistic shape.
    day_offset = int(rng.integers(0, days))
    day = now.normalize() - pd.Timedelta(days=day_offset)
    moment = day + pd.Timedelta(hours=int(rng.integers(7, 18)), minutes=int(rng.integers(0, 60)))
    return min(moment, now)


def _rng_choice(options: Sequence[T], rng: np.random.Generator) -> T:
    if not options:
        raise ValueError("Cannot choose from an empty sequence")
    idx = int(rng.integers(0, len(options)))
    return options[idx]


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Write a synthetic Stockroom snapshot.")
    parser.add_argument("directory", type=Path)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--days", type=int, default=45)
    args = parser.parse_args(argv)
    write_snapshot(args.directory, seed=args.seed, days=args.days)


if __name__ == "__main__":
    main()
