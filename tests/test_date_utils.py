from datetime import datetime, timezone

import pytest

from sheetapi.utils.date_utils import last_completed_week, trailing_days


def test_midweek_uses_previous_monday_to_monday(fixed_now):
    window = last_completed_week(fixed_now)

    assert window.period_key == "2026-10-12"
    # 월요일 00:00 KST == 전날 15:00 UTC
    assert window.start == datetime(2026, 10, 11, 15, 0, tzinfo=timezone.utc)
    assert window.end == datetime(2026, 10, 18, 15, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "now,expected_key",
    [
        # 일요일 10:00 KST
        (datetime(2026, 10, 25, 1, 0, tzinfo=timezone.utc), "2026-10-12"),
        # 월요일 00:30 KST
        (datetime(2026, 10, 18, 15, 30, tzinfo=timezone.utc), "2026-10-12"),
        # 일요일 23:30 KST
        (datetime(2026, 10, 18, 14, 30, tzinfo=timezone.utc), "2026-10-05"),
    ],
)
def test_week_boundaries_follow_server_timezone(now, expected_key):
    assert last_completed_week(now).period_key == expected_key


def test_explicit_timezone():
    now = datetime(2026, 10, 19, 2, 0, tzinfo=timezone.utc)

    assert last_completed_week(now, tz_name="UTC").period_key == "2026-10-12"
    # 뉴욕은 아직 일요일
    assert last_completed_week(now, tz_name="America/New_York").period_key == "2026-10-05"


def test_naive_now_is_treated_as_utc():
    aware = last_completed_week(datetime(2026, 10, 21, 3, 0, tzinfo=timezone.utc))
    naive = last_completed_week(datetime(2026, 10, 21, 3, 0))

    assert aware == naive


def test_trailing_days_window(fixed_now):
    window = trailing_days(7, now=fixed_now)

    assert window.start == datetime(2026, 10, 14, 3, 0, tzinfo=timezone.utc)
    assert window.end > fixed_now
