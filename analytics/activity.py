"""Recent activity feed for the administrator dashboard."""

from __future__ import annotations

from typing import Any, Mapping

import pandas as pd

from analytics.buckets import REPORT_DATE_FIELDS, REQUEST_DATE_FIELDS, extract_timestamp
from core.models import ActivityEntry

__all__ = [
    "ACTIVITY_LIMIT",
    "build_recent_activity",
    "normalise_activity",
    "report_kind",
]

ACTIVITY_LIMIT = 10
RECENT_REQUESTS = 5
RECENT_REPORTS = 3

_REQUEST_STYLE = ("request", "bi-file-earmark-text", "#3182ce")
_REPORT_STYLE = ("report", "bi-exclamation-triangle", "#e53e3e")
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def report_kind(notes: Any) -> str:
    """Classify a report by its notes: ``Missing``, ``Damaged`` or ``Other``."""

    text = str(notes or "").upper()
    if "MISSING" in text:
        return "Missing"
    if "DAMAGED" in text:
        return "Damaged"
    return "Other"


def _latest(records: Any, fields: tuple[str, ...], limit: int) -> list[tuple[pd.Timestamp, Mapping[str, Any]]]:
    if not isinstance(records, (list, tuple)):
        return []
    dated = []
    for record in records:
        timestamp = extract_timestamp(record, fields)
        if timestamp is not None:
            dated.append((timestamp, record))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return dated[:limit]


def _entry(style: tuple[str, str, str], text: str, timestamp: pd.Timestamp) -> ActivityEntry:
    kind, icon, color = style
    return {"type": kind, "icon": icon, "color": color, "text": text, "time": timestamp.strftime(_TIME_FORMAT)}


def build_recent_activity(requests: Any, reports: Any, *, limit: int = ACTIVITY_LIMIT) -> list[ActivityEntry]:
    """The latest requests and issue reports, newest first.

    Takes the five most recent requests and three most recent reports, the
    same selection the backend summary endpoint makes. Records without a
    parseable ``created_at`` are left out.
    """

    entries: list[tuple[pd.Timestamp, ActivityEntry]] = []
    for timestamp, request in _latest(requests, REQUEST_DATE_FIELDS, RECENT_REQUESTS):
        request_type = request.get("request_type") or "item"
        text = f"New {request_type} request from {request.get('teacher_name') or 'Unknown'}"
        entries.append((timestamp, _entry(_REQUEST_STYLE, text, timestamp)))
    for timestamp, report in _latest(reports, REPORT_DATE_FIELDS, RECENT_REPORTS):
        text = f"New report: {report_kind(report.get('notes'))} item"
        entries.append((timestamp, _entry(_REPORT_STYLE, text, timestamp)))

    entries.sort(key=lambda pair: pair[0], reverse=True)
    return [entry for _, entry in entries[:limit]]


def normalise_activity(payload: Any, *, limit: int = ACTIVITY_LIMIT) -> list[ActivityEntry]:
    """Coerce a summary payload's ``recentActivity`` list; entries without text are dropped."""

    if not isinstance(payload, list):
        return []
    entries: list[ActivityEntry] = []
    for item in payload:
        if not isinstance(item, Mapping) or not item.get("text"):
            continue
        kind, icon, color = _REPORT_STYLE if item.get("type") == "report" else _REQUEST_STYLE
        entries.append(
            {
                "type": str(item.get("type") or kind),
                "icon": str(item.get("icon") or icon),
                "color": str(item.get("color") or color),
                "text": str(item["text"]),
                "time": str(item.get("time") or ""),
            }
        )
    return entries[:limit]
