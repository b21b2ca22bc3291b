from __future__ import annotations

"""
Time formatting utilities for opening hours.

- formatTimeFor12Hour: "HH:MM" (24h) -> "9AM" / "2:30PM".
- stripLeadingZero: cosmetic cleanup of hand-entered hours text.
- convertTo24HourFormat: "9am" / "5:30pm" / "14:00" -> "HH:MM".
- toMinutes: "HH:MM" -> minutes since midnight.
"""

import re
from typing import Optional


APPOINTMENT_TEXT = "By appointment only"
CLOSED_TEXT = "Closed"

# A zero in the hour position: not preceded by another digit or by the minutes colon
_HOUR_LEADING_ZERO = re.compile(r"(?<![\d:])0(\d)")
_CLOCK = re.compile(r"^\s*(\d{1,2})(?::(\d{1,2}))?\s*(am|pm)?\s*$", re.IGNORECASE)


def _split_hhmm(value: str) -> Optional[tuple]:
    if not value or ":" not in value:
        return None
    hh_str, mm_str = value.strip().split(":", 1)
    try:
        hh = int(hh_str)
        mm = int(mm_str)
    except ValueError:
        return None
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        return None
    return hh, mm


def formatTimeFor12Hour(time24: Optional[str]) -> str:
    """
    Convert "HH:MM" (00-23) to a compact 12-hour label.
    Minutes are omitted when zero: "09:00" -> "9AM", "14:30" -> "2:30PM",
    "00:15" -> "12:15AM", "12:30" -> "12:30PM".

    Args:
        time24: String in "HH:MM".

    Returns:
        12-hour label. Malformed input is returned unchanged ("" for None).
    """
    if not time24:
        return ""
    parsed = _split_hhmm(time24)
    if parsed is None:
        return time24
    hh, mm = parsed
    suffix = "AM" if hh < 12 else "PM"
    h12 = hh % 12
    if h12 == 0:
        h12 = 12
    if mm == 0:
        return f"{h12}{suffix}"
    return f"{h12}:{mm:02d}{suffix}"


def stripLeadingZero(text: Optional[str]) -> str:
    """
    Remove a spurious leading zero from the hour of time-like text:
    "09:00 - 05:00" -> "9:00 - 5:00". Minutes keep their zeros.

    Known phrases are returned verbatim regardless of numeric noise around them,
    so "0By appointment" becomes "By appointment only".
    """
    if not text:
        return ""
    lower = text.lower()
    if "appointment" in lower:
        return APPOINTMENT_TEXT
    if "closed" in lower:
        return CLOSED_TEXT
    return _HOUR_LEADING_ZERO.sub(r"\1", text)


def convertTo24HourFormat(value: Optional[str]) -> Optional[str]:
    """
    Convert a loose clock reading to "HH:MM".

    "9am" -> "09:00", "5:30pm" -> "17:30", "12am" -> "00:00", "14:00" -> "14:00".
    Without an am/pm suffix the hour is taken literally ("4" -> "04:00").

    Returns:
        "HH:MM", or None when the value cannot be read or is out of range.
    """
    if not value:
        return None
    m = _CLOCK.match(value)
    if not m:
        return None
    hours = int(m.group(1))
    minutes = int(m.group(2)) if m.group(2) is not None else 0
    period = (m.group(3) or "").lower()
    if period == "pm" and hours < 12:
        hours += 12
    if period == "am" and hours == 12:
        hours = 0
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return f"{hours:02d}:{minutes:02d}"


def toMinutes(value: Optional[str]) -> Optional[int]:
    """Minutes since midnight for "HH:MM", or None if malformed."""
    parsed = _split_hhmm(value or "")
    if parsed is None:
        return None
    hh, mm = parsed
    return hh * 60 + mm
