"""
주간 경계 계산 유틸리티

경계(월요일 00:00)는 서버 타임존(settings.TIMEZONE) 기준으로 잡고,
DB 비교용으로는 UTC 로 변환해서 사용한다.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import NamedTuple, Optional

import pytz

from sheetapi.config import settings


class WeekWindow(NamedTuple):
    period_key: str
    start: datetime  # UTC, 포함
    end: datetime  # UTC, 미포함


def get_local_tz(tz_name: Optional[str] = None):
    return pytz.timezone(tz_name or settings.TIMEZONE)


def to_local(dt: datetime, tz_name: Optional[str] = None) -> datetime:
    """datetime 을 서버 타임존으로 변환 (naive 는 UTC 로 간주)"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(get_local_tz(tz_name))


def local_midnight_utc(day: date, tz_name: Optional[str] = None) -> datetime:
    """서버 타임존 기준 day 00:00 을 UTC datetime 으로"""
    local = get_local_tz(tz_name).localize(datetime.combine(day, time.min))
    return local.astimezone(timezone.utc)


def last_completed_week(
    now: Optional[datetime] = None, tz_name: Optional[str] = None
) -> WeekWindow:
    """가장 최근에 끝난 월요일~월요일 주간

    this_monday = today - weekday(today)
    start = this_monday - 7일, end = this_monday
    """
    now = now or datetime.now(timezone.utc)
    today = to_local(now, tz_name).date()
    this_monday = today - timedelta(days=today.weekday())
    week_start = this_monday - timedelta(days=7)

    return WeekWindow(
        period_key=week_start.isoformat(),
        start=local_midnight_utc(week_start, tz_name),
        end=local_midnight_utc(this_monday, tz_name),
    )


def trailing_days(days: int = 7, now: Optional[datetime] = None) -> WeekWindow:
    """지금으로부터 최근 N일 구간 (리더보드용)"""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    start = now - timedelta(days=days)

    return WeekWindow(
        period_key=to_local(start).date().isoformat(),
        start=start,
        end=now + timedelta(microseconds=1),
    )
