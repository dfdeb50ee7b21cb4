"""Tests for day window construction."""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from fitness_rings.core.exceptions import ValidationError
from fitness_rings.features.activity.windows import build_day_window, local_midnight


def _hours(window) -> float:
    return (window.end.astimezone(timezone.utc) - window.start.astimezone(timezone.utc)).total_seconds() / 3600


def test_today_window_ends_now(tz, fixed_now, today):
    window = build_day_window(today, now=fixed_now, tz=tz)

    assert window.start == datetime(2024, 6, 12, tzinfo=tz)
    assert window.end == fixed_now


def test_past_day_runs_to_following_midnight(tz, fixed_now):
    window = build_day_window(date(2024, 6, 10), now=fixed_now, tz=tz)

    assert window.start == datetime(2024, 6, 10, tzinfo=tz)
    assert window.end == datetime(2024, 6, 11, tzinfo=tz)
    assert _hours(window) == 24


def test_spring_forward_day_is_23_hours(tz, fixed_now):
    window = build_day_window(date(2024, 3, 10), now=fixed_now, tz=tz)

    assert _hours(window) == 23
    assert window.end.astimezone(tz).time() == time(0, 0)


def test_fall_back_day_is_25_hours(tz, fixed_now):
    window = build_day_window(date(2024, 11, 3), now=datetime(2024, 11, 20, 9, tzinfo=tz), tz=tz)

    assert _hours(window) == 25


def test_now_in_another_zone_is_converted(tz):
    # 02:00 UTC on the 13th is still the evening of the 12th in New York.
    now = datetime(2024, 6, 13, 2, 0, tzinfo=timezone.utc)

    window = build_day_window(date(2024, 6, 12), now=now, tz=tz)

    assert window.start == datetime(2024, 6, 12, tzinfo=tz)
    assert window.end == now


def test_future_day_rejected(tz, fixed_now, today):
    with pytest.raises(ValidationError) as excinfo:
        build_day_window(today + timedelta(days=1), now=fixed_now, tz=tz)

    assert excinfo.value.field == "day"


def test_naive_now_rejected(tz, fixed_now, today):
    with pytest.raises(ValidationError):
        build_day_window(today, now=fixed_now.replace(tzinfo=None), tz=tz)


def test_system_local_time_when_no_zone_given():
    now = datetime.now().astimezone()
    day = now.date() - timedelta(days=1)

    window = build_day_window(day, now=now)

    assert window.start.tzinfo is not None
    assert window.start.replace(tzinfo=None) == datetime.combine(day, time.min)
    assert window.end == local_midnight(now.date())
