from __future__ import annotations

"""
Day-of-week conventions.

Stored hours use StorageDay (0=Sunday .. 6=Saturday, same as SQL strftime('%w')).
Grouping and display use DisplayDay (0=Monday .. 6=Sunday).
Convert only through toDisplayDay / toStorageDay.
"""

from datetime import datetime
from enum import IntEnum
from typing import Dict, List


class StorageDay(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class DisplayDay(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


STORAGE_DAY_NAMES: List[str] = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MONDAY_FIRST_DAYS: List[str] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# Accepted spellings in free-text hours, mapped to storage days
DAY_ALIASES: Dict[str, StorageDay] = {
    "sun": StorageDay.SUNDAY, "sunday": StorageDay.SUNDAY,
    "mon": StorageDay.MONDAY, "monday": StorageDay.MONDAY,
    "tue": StorageDay.TUESDAY, "tues": StorageDay.TUESDAY, "tuesday": StorageDay.TUESDAY,
    "wed": StorageDay.WEDNESDAY, "weds": StorageDay.WEDNESDAY, "wednesday": StorageDay.WEDNESDAY,
    "thu": StorageDay.THURSDAY, "thur": StorageDay.THURSDAY, "thurs": StorageDay.THURSDAY,
    "thursday": StorageDay.THURSDAY,
    "fri": StorageDay.FRIDAY, "friday": StorageDay.FRIDAY,
    "sat": StorageDay.SATURDAY, "saturday": StorageDay.SATURDAY,
}


def toDisplayDay(day: int) -> DisplayDay:
    """Convert a storage day (0=Sunday) to the Monday-first display index."""
    return DisplayDay((int(day) - 1) % 7)


def toStorageDay(day: int) -> StorageDay:
    """Convert a Monday-first display index back to a storage day (0=Sunday)."""
    return StorageDay((int(day) + 1) % 7)


def storageDayOf(moment: datetime) -> StorageDay:
    """Storage day of a datetime. datetime.weekday() is Monday-first, so it is a DisplayDay."""
    return toStorageDay(moment.weekday())


def displayDayName(day: DisplayDay) -> str:
    return MONDAY_FIRST_DAYS[int(day)]


def storageDayName(day: StorageDay) -> str:
    return STORAGE_DAY_NAMES[int(day)]
