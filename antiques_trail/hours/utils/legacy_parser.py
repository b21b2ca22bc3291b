from __future__ import annotations

"""
Legacy opening-hours parser.

Turns the free-text places.opening_hours field, e.g.
  "Mon-Fri: 9am-5pm, Sat: 10-4, Sun: Closed"
into seven DayHours records (0=Sunday .. 6=Saturday).

Parsing is best effort: unreadable segments are skipped and the day keeps its
previous value (closed by default). Nothing here raises on bad text.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

from antiques_trail.hours.models import DayHours
from antiques_trail.hours.utils.days import DAY_ALIASES, StorageDay
from antiques_trail.hours.utils.time_format import APPOINTMENT_TEXT, CLOSED_TEXT, convertTo24HourFormat

logger = logging.getLogger(__name__)

_SEGMENT_SPLIT = re.compile(r"[,;]")
_SEGMENT = re.compile(r"^([a-zA-Z][a-zA-Z\s\-]*?)\s*:(.*)$")
_DAY_RANGE = re.compile(r"^([a-zA-Z]+)\s*-\s*([a-zA-Z]+)$")
_TIME_RANGE = re.compile(
    r"(\d+(?::\d+)?\s*(?:am|pm)?)\s*-\s*(\d+(?::\d+)?\s*(?:am|pm)?)",
    re.IGNORECASE,
)

REASON_NO_DAY_PREFIX = "no day prefix"
REASON_UNKNOWN_DAY = "unknown day"
REASON_NO_TIME_RANGE = "no time range"
REASON_TIME_OUT_OF_RANGE = "time out of range"


@dataclass(frozen=True)
class SkippedSegment:
    segment: str
    reason: str


@dataclass
class ParseResult:
    hours: List[DayHours]
    skipped: List[SkippedSegment] = field(default_factory=list)


def _expand_days(day_spec: str) -> List[int]:
    """
    Resolve "mon", "Tuesday" or a range like "Mon-Fri" / "Fri-Sun" to storage days.
    Ranges are inclusive and wrap past Saturday back to Sunday.
    """
    spec = day_spec.strip().lower()
    rng = _DAY_RANGE.match(spec)
    if rng:
        start = DAY_ALIASES.get(rng.group(1))
        end = DAY_ALIASES.get(rng.group(2))
        if start is None or end is None:
            return []
        days = []
        d = int(start)
        while True:
            days.append(d)
            if d == int(end):
                break
            d = (d + 1) % 7
        return days
    single = DAY_ALIASES.get(spec)
    return [int(single)] if single is not None else []


def _default_week(place_id: Any) -> List[DayHours]:
    return [DayHours.closed(place_id, int(day)) for day in StorageDay]


def parseLegacyHoursWithDiagnostics(text: Optional[str], place_id: Any) -> ParseResult:
    """
    Parse free-text hours and report the segments that could not be used.

    Args:
        text: Legacy hours text; segments separated by commas or semicolons.
        place_id: Stamped on every returned record.

    Returns:
        ParseResult with exactly 7 records ordered Sunday..Saturday and the
        list of skipped segments.
    """
    result = ParseResult(hours=_default_week(place_id))
    if not text or not text.strip():
        return result

    by_day = {h.day_of_week: h for h in result.hours}
    segments = [s.strip() for s in _SEGMENT_SPLIT.split(text)]

    for segment in segments:
        if not segment:
            continue
        m = _SEGMENT.match(segment)
        if not m:
            result.skipped.append(SkippedSegment(segment, REASON_NO_DAY_PREFIX))
            continue

        days = _expand_days(m.group(1))
        if not days:
            result.skipped.append(SkippedSegment(segment, REASON_UNKNOWN_DAY))
            continue

        time_spec = m.group(2).strip()
        lower = time_spec.lower()

        if "closed" in lower:
            for d in days:
                rec = by_day[d]
                rec.is_closed = True
                rec.is_by_appointment = False
                rec.open_time = None
                rec.close_time = None
                rec.notes = CLOSED_TEXT
            continue

        if "appointment" in lower:
            for d in days:
                rec = by_day[d]
                rec.is_closed = False
                rec.is_by_appointment = True
                rec.open_time = None
                rec.close_time = None
                rec.notes = APPOINTMENT_TEXT
            continue

        tm = _TIME_RANGE.search(time_spec)
        if not tm:
            result.skipped.append(SkippedSegment(segment, REASON_NO_TIME_RANGE))
            continue

        open_time = convertTo24HourFormat(tm.group(1))
        close_time = convertTo24HourFormat(tm.group(2))
        if not open_time or not close_time:
            result.skipped.append(SkippedSegment(segment, REASON_TIME_OUT_OF_RANGE))
            continue

        for d in days:
            rec = by_day[d]
            rec.open_time = open_time
            rec.close_time = close_time
            rec.is_closed = False
            rec.is_by_appointment = False
            rec.notes = None

    for skipped in result.skipped:
        logger.debug(f"Skipped legacy hours segment for place {place_id}: '{skipped.segment}' ({skipped.reason})")

    return result


def parseLegacyHours(text: Optional[str], place_id: Any) -> List[DayHours]:
    """
    Parse free-text hours into 7 DayHours records, one per storage day.
    Days not mentioned, or mentioned with unreadable hours, stay closed.
    """
    return parseLegacyHoursWithDiagnostics(text, place_id).hours
