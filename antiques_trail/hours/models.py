from __future__ import annotations

"""
Opening-hours records.

DayHours mirrors one row of the opening_hours table. DisplayGroup is derived
for rendering and never persisted.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _to_flag(value: Any) -> bool:
    # Rows may carry 0/1 integers or "0"/"1" strings from older imports
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "t"}
    return bool(value)


@dataclass
class DayHours:
    """
    Opening hours for one place on one day.

    Attributes:
        place_id: Owning place id.
        day_of_week: Storage convention, 0=Sunday .. 6=Saturday.
        open_time: "HH:MM" (24h) or None.
        close_time: "HH:MM" (24h) or None. May be earlier than open_time for overnight spans.
        is_closed: Place does not open this day.
        is_by_appointment: Access by appointment only this day.
        notes: Free-text annotation, e.g. "Early closing".
    """
    place_id: Any
    day_of_week: int
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    is_closed: bool = False
    is_by_appointment: bool = False
    notes: Optional[str] = None
    id: Optional[int] = field(default=None, compare=False)

    @classmethod
    def closed(cls, place_id: Any, day_of_week: int) -> "DayHours":
        return cls(place_id=place_id, day_of_week=day_of_week, is_closed=True)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "DayHours":
        """Build from a storage row or JSON payload dict."""
        place_id = row.get("place_id", row.get("placeId"))
        return cls(
            place_id=place_id,
            day_of_week=int(row.get("day_of_week", 0)),
            open_time=row.get("open_time") or None,
            close_time=row.get("close_time") or None,
            is_closed=_to_flag(row.get("is_closed", False)),
            is_by_appointment=_to_flag(row.get("is_by_appointment", False)),
            notes=row.get("notes") or None,
            id=row.get("id"),
        )

    def to_row(self) -> Dict[str, Any]:
        """Row for insertion; id is left to the database."""
        return {
            "place_id": self.place_id,
            "day_of_week": self.day_of_week,
            "open_time": self.open_time,
            "close_time": self.close_time,
            "is_closed": self.is_closed,
            "is_by_appointment": self.is_by_appointment,
            "notes": self.notes,
        }

    def same_hours(self, other: "DayHours") -> bool:
        return (
            self.is_closed == other.is_closed
            and self.is_by_appointment == other.is_by_appointment
            and self.open_time == other.open_time
            and self.close_time == other.close_time
        )


@dataclass(frozen=True)
class DisplayGroup:
    day_text: str
    hours_text: str

    def to_dict(self) -> Dict[str, str]:
        return {"dayText": self.day_text, "hours": self.hours_text}


def rows_to_day_hours(rows: List[Dict[str, Any]]) -> List[DayHours]:
    return [DayHours.from_row(r) for r in rows or []]
