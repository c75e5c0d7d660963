"""Tests for the Streamlit KPI row using an in-memory stand-in for ``st``."""

from __future__ import annotations

from contextlib import nullcontext

import pytest

import ui.components as components
from animation import SleepFrameScheduler


class _Slot:
    def __init__(self) -> None:
        self.bodies: list[str] = []

    def markdown(self, body: str, **_: object) -> None:
        self.bodies.append(body)


class _FakeStreamlit:
    def __init__(self) -> None:
        self.session_state: dict[str, float] = {}
        self.slots: list[_Slot] = []
        self.markdowns: list[str] = []
        self.captions: list[str] = []

    def columns(self, count: int):
        return [nullcontext() for _ in range(count)]

    def container(self):
        return nullcontext()

    def markdown(self, body: str, **_: object) -> None:
        self.markdowns.append(body)

    def caption(self, body: str) -> None:
        self.captions.append(body)

    def empty(self) -> _Slot:
        slot = _Slot()
        self.slots.append(slot)
        return slot


class _FakeClock:
    def __init__(self) -> None:
        self.seconds = 0.0

    def __call__(self) -> float:
        return self.seconds

    def sleep(self, seconds: float) -> None:
        self.seconds += seconds


@pytest.fixture()
def fake_st(monkeypatch):
    fake = _FakeStreamlit()
    monkeypatch.setattr(components, "st", fake)
    return fake


@pytest.fixture()
def scheduler() -> SleepFrameScheduler:
    clock = _FakeClock()
    return SleepFrameScheduler(fps=50, sleep=clock.sleep, clock=clock)


CARDS = [
    ("total_items", "Total Items", 100, ""),
    ("total_users", "Total Users", 250, ""),
    ("pending_requests", "Pending Requests", 40, ""),
]


def test_kpi_row_counts_every_card_up_together(fake_st, scheduler):
    frames = components.render_kpi_row(CARDS, duration_ms=1000, scheduler=scheduler)

    # One shared 1000 ms loop at 50 fps, not one loop per card.
    assert 50 <= frames <= 51
    assert fake_st.session_state == {
        "kpi::total_items": 100,
        "kpi::total_users": 250,
        "kpi::pending_requests": 40,
    }
    for slot, (_, _, value, _) in zip(fake_st.slots, CARDS):
        assert len(slot.bodies) > 2
        assert f">{value}<" in slot.bodies[-1]
    assert scheduler.pending_count == 0


def test_kpi_row_waits_for_data(fake_st, scheduler):
    frames = components.render_kpi_row(CARDS, data_ready=False, scheduler=scheduler)

    assert frames == 0
    assert fake_st.session_state == {}
    for slot, (_, label, _, icon) in zip(fake_st.slots, CARDS):
        assert slot.bodies == [components._kpi_markup(label, 0, icon)]


def test_kpi_row_counts_on_from_previous_values(fake_st, scheduler):
    fake_st.session_state["kpi::total_items"] = 60

    components.render_kpi_row(CARDS[:1], duration_ms=1000, scheduler=scheduler)

    bodies = fake_st.slots[0].bodies
    assert bodies[0] == components._kpi_markup("Total Items", 60, "")
    assert fake_st.session_state["kpi::total_items"] == 100


def test_activity_feed_renders_escaped_entries(fake_st):
    entries = [
        {
            "type": "report",
            "icon": "bi-exclamation-triangle",
            "color": "#e53e3e",
            "text": "New report: <Damaged> item",
            "time": "2024-01-07 09:00:00",
        }
    ]

    components.render_activity_feed(entries)

    (markup,) = fake_st.markdowns
    assert "New report: &lt;Damaged&gt; item" in markup
    assert "07 Jan 2024 09:00" in markup
    assert "#e53e3e" in markup


def test_empty_activity_feed_shows_caption(fake_st):
    components.render_activity_feed([])

    assert fake_st.captions == ["No recent activity"]
    assert fake_st.markdowns == []
