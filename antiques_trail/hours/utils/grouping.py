from __future__ import annotations

"""
Opening-hours grouping for display.

- groupForDisplay: merge consecutive days (Monday first) that share the same hours
  into groups labelled "Monday", "Saturday & Sunday" or "Monday to Friday".
- formatOpeningHoursToString: flat text for the legacy places.opening_hours field,
  one "<days>: <hours>" line per group.
"""

import re
from typing import Dict, List, Optional, Sequence

from antiques_trail.hours.models import DayHours, DisplayGroup
from antiques_trail.hours.utils.days import (
    STORAGE_DAY_NAMES,
    displayDayName,
    toDisplayDay,
)
from antiques_trail.hours.utils.time_format import (
    APPOINTMENT_TEXT,
    CLOSED_TEXT,
    formatTimeFor12Hour,
    stripLeadingZero,
)

HOURS_NOT_SPECIFIED = "Hours not specified"
HOURS_NOT_AVAILABLE = "Hours not available"
EVERY_DAY = "Every day"


def dayHoursText(day: DayHours) -> str:
    """
    Hours text for one day, by precedence: closed, appointment, times, unspecified.
    Times keep 24h form with the hour's leading zero removed: "9:00 - 17:30".
    """
    if day.is_closed:
        return CLOSED_TEXT
    if day.is_by_appointment:
        return APPOINTMENT_TEXT
    if day.open_time and day.close_time:
        return f"{stripLeadingZero(day.open_time)} - {stripLeadingZero(day.close_time)}"
    return HOURS_NOT_SPECIFIED


def _day_label(start: int, end: int) -> str:
    if start == end:
        return displayDayName(start)
    if end == (start + 1) % 7:
        return f"{displayDayName(start)} & {displayDayName(end)}"
    return f"{displayDayName(start)} to {displayDayName(end)}"


def groupForDisplay(hours: Sequence[DayHours]) -> List[DisplayGroup]:
    """
    Group days with identical hours into display rows, Monday first.

    A day joins the current group only if its hours text matches and it is the
    next day after the group's last day (Sunday wraps to Monday). Input may be
    unsorted or partial; missing days are simply absent from the output.

    Args:
        hours: DayHours records using the storage day convention.

    Returns:
        List of DisplayGroup. Empty input gives an empty list.
    """
    if not hours:
        return []

    ordered = sorted(hours, key=lambda h: toDisplayDay(h.day_of_week))

    groups: List[Dict[str, object]] = []
    current: Optional[Dict[str, object]] = None
    for day in ordered:
        idx = int(toDisplayDay(day.day_of_week))
        text = dayHoursText(day)
        if current and text == current["hours"] and idx == (current["end"] + 1) % 7:
            current["end"] = idx
            continue
        if current:
            groups.append(current)
        current = {"start": idx, "end": idx, "hours": text}
    if current:
        groups.append(current)

    return [DisplayGroup(day_text=_day_label(g["start"], g["end"]), hours_text=g["hours"]) for g in groups]


def cleanOpeningHoursText(text: Optional[str]) -> str:
    """
    Final cosmetic pass over one hours text.

    "...By appointment..." -> "By appointment only", "...Closed..." -> "Closed",
    "09:30AM-05PM" -> "9:30AM-5PM". Anything else is returned as is.
    """
    if not text:
        return ""
    if "By appointment" in text:
        return APPOINTMENT_TEXT
    if "Closed" in text:
        return CLOSED_TEXT
    if "-" not in text:
        return text

    cleaned = []
    for part in text.split("-"):
        period = "AM" if "AM" in part else "PM" if "PM" in part else ""
        digits = re.sub(r"[^0-9:]", "", part)
        if not digits:
            cleaned.append(part.strip())
            continue
        if ":" in digits:
            hh_str, mm_str = digits.split(":", 1)
            try:
                cleaned.append(f"{int(hh_str)}:{int(mm_str):02d}{period}")
            except ValueError:
                cleaned.append(part.strip())
        else:
            cleaned.append(f"{int(digits)}{period}")
    return "-".join(cleaned)


def _legacy_hours_text(day: DayHours) -> str:
    if day.is_closed:
        text = CLOSED_TEXT
    elif day.is_by_appointment:
        text = APPOINTMENT_TEXT
    elif day.open_time and day.close_time:
        text = f"{formatTimeFor12Hour(day.open_time)}-{formatTimeFor12Hour(day.close_time)}"
    else:
        text = HOURS_NOT_SPECIFIED
    return cleanOpeningHoursText(text)


def _legacy_line(group: List[DayHours]) -> str:
    first = group[0]
    if len(group) == 1:
        day_text = STORAGE_DAY_NAMES[first.day_of_week]
    elif len(group) == 7:
        day_text = EVERY_DAY
    else:
        day_text = f"{STORAGE_DAY_NAMES[first.day_of_week]}-{STORAGE_DAY_NAMES[group[-1].day_of_week]}"
    return f"{day_text}: {_legacy_hours_text(first)}\n"


def formatOpeningHoursToString(hours: Sequence[DayHours]) -> str:
    """
    Render structured hours as the flat text kept in places.opening_hours.

    Days are walked Sunday first (storage order); consecutive days with the same
    flags and times share a line: "Monday-Friday: 9AM-5PM".

    Returns:
        Lines joined without the trailing newline, or "Hours not available".
    """
    if not hours:
        return HOURS_NOT_AVAILABLE

    ordered = sorted(hours, key=lambda h: h.day_of_week)
    out = ""
    group: List[DayHours] = []
    for day in ordered:
        if group and day.same_hours(group[-1]) and day.day_of_week == (group[-1].day_of_week + 1) % 7:
            group.append(day)
            continue
        if group:
            out += _legacy_line(group)
        group = [day]
    if group:
        out += _legacy_line(group)
    # Cleanup runs per line only. A pass over the joined text would reduce
    # any week with a closed day to "Closed".
    return out.strip()
