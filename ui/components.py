from __future__ import annotations

import html
from contextlib import ExitStack, contextmanager
from datetime import date, timedelta
from typing import Optional, Sequence, Tuple

import pandas as pd
import streamlit as st

from animation import KPI_DURATION_MS, CountUpAnimator, SleepFrameScheduler
from core.formatting import format_count
from core.models import ActivityEntry, Period, PeriodSpec

_KPI_STATE_PREFIX = "kpi::"

# (session key, label, value, icon)
KpiCard = Tuple[str, str, int, str]


def inject_css() -> None:
    """Inject global card styling for the Stockroom dashboard."""

    st.markdown(
        """
        <style>
          :root {
            --gap: 16px;
            --radius: 12px;
            --card-bg: #FFFFFF;
            --border: #E2E8F0;
            --shadow: 0 1px 2px rgba(16, 24, 40, 0.05), 0 1px 3px rgba(16, 24, 40, 0.06);
          }

          .block-container {
            max-width: 1200px;
            padding-top: 2rem;
            padding-bottom: 4rem;
          }

          .sr-card-anchor {
            display: none;
          }

          [data-testid="stVerticalBlock"]:has(> .sr-card-anchor) {
            background: var(--card-bg);
            border: 1px solid var(--border);
            border-radius: var(--radius);
            box-shadow: var(--shadow);
            padding: 16px;
            margin-bottom: var(--gap);
          }

          .sr-card__head {
            display: flex;
            align-items: center;
            justify-content: space-between;
            font-weight: 600;
            color: #0F172A;
          }

          .sr-chip {
            font-size: 12px;
            padding: 2px 8px;
            border-radius: 999px;
            border: 1px solid #FDE68A;
            background: #FFFBEB;
            color: #B45309;
            white-space: nowrap;
          }

          .sr-kpi {
            display: flex;
            align-items: center;
            justify-content: space-between;
          }

          .sr-kpi__label {
            margin: 0;
            font-size: 0.85rem;
            font-weight: 600;
            color: #64748B;
          }

          .sr-kpi__value {
            font-size: 1.9rem;
            font-weight: 700;
            color: #0F172A;
            font-variant-numeric: tabular-nums;
          }

          .sr-kpi__icon {
            font-size: 1.6rem;
          }

          .sr-activity {
            display: flex;
            gap: 12px;
            align-items: flex-start;
            padding: 8px 12px;
            margin-top: 8px;
            border-left: 3px solid #3182CE;
            border-radius: 6px;
            background: #F8FAFC;
          }

          .sr-activity__text {
            font-size: 0.9rem;
            color: #0F172A;
          }

          .sr-activity__time {
            font-size: 0.75rem;
            color: #64748B;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a reusable Stockroom card."""

    chip_html = f'<span class="sr-chip">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="sr-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="sr-card__head"><span>{title}</span>{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def _kpi_markup(label: str, value: float, icon: str) -> str:
    return (
        f'<div class="sr-kpi"><div><p class="sr-kpi__label">{label}</p>'
        f'<span class="sr-kpi__value">{format_count(value)}</span></div>'
        f'<span class="sr-kpi__icon">{icon}</span></div>'
    )


def _start_kpi_animation(
    key: str,
    label: str,
    value: int,
    *,
    icon: str,
    data_ready: bool,
    duration_ms: float,
    scheduler: SleepFrameScheduler,
) -> Optional[CountUpAnimator]:
    slot = st.empty()
    if not data_ready:
        slot.markdown(_kpi_markup(label, 0, icon), unsafe_allow_html=True)
        return None

    previous = st.session_state.get(f"{_KPI_STATE_PREFIX}{key}", 0)
    slot.markdown(_kpi_markup(label, previous, icon), unsafe_allow_html=True)
    animator = CountUpAnimator(
        scheduler,
        duration_ms=duration_ms,
        initial_value=previous,
        on_change=lambda current: slot.markdown(_kpi_markup(label, current, icon), unsafe_allow_html=True),
    )
    animator.update(value, enabled=data_ready)
    return animator


def render_kpi_row(
    cards: Sequence[KpiCard],
    *,
    data_ready: bool = True,
    duration_ms: float = KPI_DURATION_MS,
    scheduler: Optional[SleepFrameScheduler] = None,
) -> int:
    """Render KPI cards side by side, counting up together on one frame clock.

    The last displayed values are kept in session state so a rerun with new
    values counts on from them instead of restarting at zero. Returns the
    number of frames drawn.
    """

    scheduler = scheduler or SleepFrameScheduler()
    columns = st.columns(len(cards))
    with ExitStack() as stack:
        animators: dict[str, CountUpAnimator] = {}
        for column, (key, label, value, icon) in zip(columns, cards):
            with column, card(label):
                animator = _start_kpi_animation(
                    key,
                    label,
                    value,
                    icon=icon,
                    data_ready=data_ready,
                    duration_ms=duration_ms,
                    scheduler=scheduler,
                )
            if animator is not None:
                animators[key] = stack.enter_context(animator)

        frames = scheduler.run_until_idle()
        for key, animator in animators.items():
            st.session_state[f"{_KPI_STATE_PREFIX}{key}"] = animator.value
    return frames


_ACTIVITY_ICONS = {"request": "📄", "report": "⚠️"}


def _activity_time(value: str) -> str:
    timestamp = pd.to_datetime(value, errors="coerce")
    if pd.isna(timestamp):
        return value
    return f"{timestamp:%d %b %Y %H:%M}"


def _activity_markup(entry: ActivityEntry) -> str:
    icon = _ACTIVITY_ICONS.get(entry["type"], "•")
    return (
        f'<div class="sr-activity" style="border-left-color: {html.escape(entry["color"])}">'
        f'<span class="sr-activity__icon">{icon}</span><div>'
        f'<div class="sr-activity__text">{html.escape(entry["text"])}</div>'
        f'<div class="sr-activity__time">{html.escape(_activity_time(entry["time"]))}</div>'
        "</div></div>"
    )


def render_activity_feed(entries: Sequence[ActivityEntry]) -> None:
    """Render the recent activity list, newest first."""

    if not entries:
        st.caption("No recent activity")
        return
    st.markdown("".join(_activity_markup(entry) for entry in entries), unsafe_allow_html=True)


def period_selector(default: Period = Period.WEEK, *, today: Optional[date] = None) -> PeriodSpec:
    """Render the period filter and return the selected window."""

    options = list(Period)
    period = st.radio(
        "Period",
        options,
        index=options.index(default),
        format_func=lambda option: option.label,
        horizontal=True,
        label_visibility="collapsed",
        key="period_selector",
    )
    if period is not Period.CUSTOM:
        return PeriodSpec(period)

    today = today or date.today()
    start_col, end_col = st.columns(2)
    start = start_col.date_input("From", value=today - timedelta(days=6), key="period_custom_start")
    end = end_col.date_input("To", value=today, key="period_custom_end")
    return PeriodSpec.parse(period, start, end)
