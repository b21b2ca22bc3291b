from __future__ import annotations

"""
Open / closing-soon / appointment-only checks for a reference instant.

An instant is checked against the record for its own calendar day. For an
overnight record (22:00-02:00) both the late evening and the early hours before
close count as open on that day's record.
Missing or malformed data reads as "not open"; nothing here raises.
"""

from datetime import datetime
from typing import Dict, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from antiques_trail.hours.config import DEFAULT_TIMEZONE, get_hours_config
from antiques_trail.hours.models import DayHours
from antiques_trail.hours.utils.days import storageDayOf
from antiques_trail.hours.utils.time_format import toMinutes


def _shop_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(DEFAULT_TIMEZONE)


def _resolve_now(now: Optional[datetime]) -> datetime:
    # Naive instants are already shop time; no zone lookup needed.
    if now is not None and now.tzinfo is None:
        return now
    tz = _shop_zone(get_hours_config().HOURS_TIMEZONE)
    if now is None:
        return datetime.now(tz)
    return now.astimezone(tz)


def _today(hours: Sequence[DayHours], now: datetime) -> Optional[DayHours]:
    day = int(storageDayOf(now))
    for h in hours or []:
        if h.day_of_week == day:
            return h
    return None


def isOpenNow(hours: Sequence[DayHours], now: Optional[datetime] = None) -> bool:
    """
    True if the place is open at `now`.

    Open boundary is inclusive, close boundary exclusive. When close < open the
    span runs overnight: open if now >= open or now < close. Appointment-only
    days are never "open".
    """
    if not hours:
        return False
    now = _resolve_now(now)
    today = _today(hours, now)
    if today is None or today.is_closed or today.is_by_appointment:
        return False

    open_minutes = toMinutes(today.open_time)
    close_minutes = toMinutes(today.close_time)
    if open_minutes is None or close_minutes is None:
        return False

    now_minutes = now.hour * 60 + now.minute
    if close_minutes < open_minutes:
        return now_minutes >= open_minutes or now_minutes < close_minutes
    return open_minutes <= now_minutes < close_minutes


def closesWithin(hours: Sequence[DayHours], now: Optional[datetime] = None, threshold_minutes: int = 60) -> bool:
    """
    True if the place is open now and today's close time is 0 < minutes <= threshold away.

    Minutes are measured to today's close time on the same calendar date as `now`;
    an overnight close is not pushed to the next day.
    """
    now = _resolve_now(now)
    if not isOpenNow(hours, now):
        return False
    today = _today(hours, now)
    if today is None or not today.close_time:
        return False
    close_minutes = toMinutes(today.close_time)
    if close_minutes is None:
        return False

    close_at = now.replace(hour=close_minutes // 60, minute=close_minutes % 60, second=0, microsecond=0)
    minutes_until_close = (close_at - now).total_seconds() / 60
    return 0 < minutes_until_close <= threshold_minutes


def isAppointmentOnlyNow(hours: Sequence[DayHours], now: Optional[datetime] = None) -> bool:
    """True if today's record is appointment-only. The flag covers the whole day."""
    if not hours:
        return False
    today = _today(hours, _resolve_now(now))
    return bool(today and today.is_by_appointment)


def getOpenStatus(
    hours: Sequence[DayHours],
    now: Optional[datetime] = None,
    threshold_minutes: Optional[int] = None,
) -> Dict[str, bool]:
    """
    Combined status for API payloads.

    Returns:
        {"isOpen": bool, "closingSoon": bool, "byAppointment": bool}
    """
    now = _resolve_now(now)
    if threshold_minutes is None:
        threshold_minutes = get_hours_config().CLOSING_SOON_MINUTES
    return {
        "isOpen": isOpenNow(hours, now),
        "closingSoon": closesWithin(hours, now, threshold_minutes),
        "byAppointment": isAppointmentOnlyNow(hours, now),
    }
