"""Unit tests for period resolution and bucket indexing."""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from analytics.periods import MAX_CUSTOM_DAYS, bucket_index, resolve_period
from core.models import Period, PeriodSpec

# Sunday, so the trailing week starts on Monday 1 January.
NOW = pd.Timestamp("2024-01-07 12:00")


@pytest.mark.parametrize(
    ("spec", "expected_points"),
    [
        (PeriodSpec(Period.TODAY), 12),
        (PeriodSpec(Period.WEEK), 7),
        (PeriodSpec(Period.DAY_TO_DAY), 7),
        (PeriodSpec(Period.MONTH), 30),
        (PeriodSpec(Period.CUSTOM), 7),
        (PeriodSpec.parse("custom", "2023-12-20", "2024-01-03"), 15),
    ],
)
def test_window_has_one_label_per_bucket(spec, expected_points):
    window = resolve_period(spec, NOW)

    assert window.data_points == expected_points
    assert len(window.labels) == expected_points


def test_custom_range_labels_each_day():
    spec = PeriodSpec.parse("custom", "2024-01-01", "2024-01-05")

    window = resolve_period(spec, pd.Timestamp("2024-02-01"))

    assert window.data_points == 5
    assert window.labels == ("1/1", "2/1", "3/1", "4/1", "5/1")
    assert window.start == pd.Timestamp("2024-01-01")
    assert window.end == pd.Timestamp("2024-01-05 23:59:59.999")


def test_custom_range_is_capped_and_never_empty():
    long_range = resolve_period(PeriodSpec.parse("custom", "2023-01-01", "2023-12-31"), NOW)
    reversed_range = resolve_period(PeriodSpec.parse("custom", "2024-01-05", "2024-01-01"), NOW)

    assert long_range.data_points == MAX_CUSTOM_DAYS
    assert reversed_range.data_points == 1
    assert reversed_range.labels == ("5/1",)


def test_custom_range_without_dates_uses_generic_day_labels():
    window = resolve_period(PeriodSpec(Period.CUSTOM, custom_start=None), NOW)

    assert window.labels[0] == "Day 1"
    assert window.labels[-1] == "Day 7"
    assert window.start == pd.Timestamp("2024-01-01")


def test_week_and_day_to_day_labels():
    week = resolve_period(PeriodSpec(Period.WEEK), NOW)
    day_to_day = resolve_period(PeriodSpec(Period.DAY_TO_DAY), NOW)

    assert week.labels == ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
    assert day_to_day.labels[0] == "Mon 1/1"
    assert day_to_day.labels[-1] == "Sun 7/1"


def test_today_window_uses_two_hour_buckets():
    window = resolve_period(PeriodSpec(Period.TODAY), NOW)

    assert window.start == pd.Timestamp("2024-01-07")
    assert window.end == NOW
    assert window.labels[0] == "00:00"
    assert window.labels[-1] == "22:00"
    assert bucket_index(pd.Timestamp("2024-01-07 13:59"), window) == 6
    assert bucket_index(pd.Timestamp("2024-01-08 10:00"), window) == 11


def test_month_window_spans_thirty_days():
    window = resolve_period(PeriodSpec(Period.MONTH), NOW)

    assert window.start == pd.Timestamp("2023-12-09")
    assert window.labels[0] == "9/12"
    assert window.labels[-1] == "7/1"


def test_bucket_index_clamps_into_range():
    window = resolve_period(PeriodSpec(Period.WEEK), NOW)

    assert bucket_index(pd.Timestamp("2023-12-25"), window) == 0
    assert bucket_index(pd.Timestamp("2024-01-03 23:00"), window) == 2
    assert bucket_index(pd.Timestamp("2024-02-01"), window) == 6


def test_period_spec_parse_rejects_unknown_period():
    with pytest.raises(ValueError):
        PeriodSpec.parse("fortnight")


def test_period_spec_parse_ignores_invalid_dates():
    spec = PeriodSpec.parse("custom", "not-a-date", "2024-01-05")

    assert spec.custom_start is None
    assert not spec.has_custom_range
