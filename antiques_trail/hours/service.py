from __future__ import annotations

"""
Opening-hours service.

Joins the storage collaborator, the optional HoursCache and the pure hours
utilities:
- get_day_hours: structured rows, or the legacy text parsed when none exist.
- get_hours_summary: raw rows, grouped display rows and open status.
- save_hours / delete_hours: write rows, then keep places.opening_hours,
  is_open and closing_soon in sync.
- migrate_legacy: convert a place's legacy text into structured rows.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from antiques_trail.helpers.hours_cache import HoursCache
from antiques_trail.helpers.storage import StorageError
from antiques_trail.hours.config import HoursConfig, get_hours_config
from antiques_trail.hours.models import DayHours
from antiques_trail.hours.utils.grouping import formatOpeningHoursToString, groupForDisplay
from antiques_trail.hours.utils.legacy_parser import ParseResult, parseLegacyHoursWithDiagnostics
from antiques_trail.hours.utils.open_now import getOpenStatus

logger = logging.getLogger(__name__)

SOURCE_STRUCTURED = "structured"
SOURCE_LEGACY = "legacy"
SOURCE_NONE = "none"


class HoursService:
    def __init__(self, storage, cache: Optional[HoursCache] = None, config: Optional[HoursConfig] = None):
        self.storage = storage
        self.config = config or get_hours_config()
        self.cache = cache

    @classmethod
    def from_config(cls, storage, config: Optional[HoursConfig] = None) -> "HoursService":
        """Service with a cache sized from HOURS_CACHE_TTL_S / HOURS_CACHE_MAX_ENTRIES."""
        config = config or get_hours_config()
        cache = None
        if config.HOURS_CACHE_TTL_S > 0:
            cache = HoursCache(config.HOURS_CACHE_TTL_S, max_entries=config.HOURS_CACHE_MAX_ENTRIES)
        return cls(storage, cache=cache, config=config)

    # --------------- Reads -----------------

    def get_day_hours(self, place_id: Any) -> List[DayHours]:
        """
        Structured hours for place_id. Falls back to parsing places.opening_hours
        when the place has no opening_hours rows.
        """
        return self._load(place_id)[0]

    def _load(self, place_id: Any) -> Tuple[List[DayHours], str]:
        if self.cache is not None:
            cached = self.cache.get_entry(place_id)
            if cached is not None:
                return cached

        hours = self.storage.load_day_hours(place_id)
        source = SOURCE_STRUCTURED
        if not hours:
            text = self.storage.load_legacy_hours_text(place_id)
            if text:
                parsed = parseLegacyHoursWithDiagnostics(text, place_id)
                if parsed.skipped:
                    logger.info(f"Place {place_id}: {len(parsed.skipped)} legacy hours segment(s) could not be parsed")
                hours = parsed.hours
                source = SOURCE_LEGACY
            else:
                source = SOURCE_NONE

        if self.cache is not None:
            self.cache.put(place_id, hours, source)
        return hours, source

    def get_hours_summary(self, place_id: Any, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Payload for the opening-hours endpoint.

        Returns:
            {"raw": [...rows], "formatted": [{"dayText", "hours"}], "status": {...}, "source": str}
        """
        hours, source = self._load(place_id)
        return {
            "raw": [dict(h.to_row(), id=h.id) for h in hours],
            "formatted": [g.to_dict() for g in groupForDisplay(hours)],
            "status": getOpenStatus(hours, now, self.config.CLOSING_SOON_MINUTES),
            "source": source,
        }

    # --------------- Writes -----------------

    def save_hours(self, place_id: Any, hours: List[DayHours], now: Optional[datetime] = None) -> None:
        """Replace the place's rows and refresh the legacy text and status flags."""
        self.storage.replace_day_hours(place_id, hours)
        self._after_write(place_id, hours, now)

    def delete_hours(self, place_id: Any, now: Optional[datetime] = None) -> None:
        self.storage.delete_day_hours(place_id)
        self._after_write(place_id, [], now)

    def migrate_legacy(self, place_id: Any, dry_run: bool = False) -> Optional[ParseResult]:
        """
        Parse places.opening_hours into opening_hours rows for a place that has none.

        Returns:
            ParseResult, or None when the place already has rows, has no legacy
            text, or its rows could not be read.
        """
        try:
            has_rows = self.storage.has_day_hours(place_id)
        except StorageError as e:
            logger.warning(f"Place {place_id}: could not read structured hours, not migrating: {e}")
            return None
        if has_rows:
            logger.debug(f"Place {place_id} already has structured hours; skipping")
            return None
        text = self.storage.load_legacy_hours_text(place_id)
        if not text:
            return None
        parsed = parseLegacyHoursWithDiagnostics(text, place_id)
        if not dry_run:
            self.storage.replace_day_hours(place_id, parsed.hours)
            self._after_write(place_id, parsed.hours, None)
        return parsed

    def _after_write(self, place_id: Any, hours: List[DayHours], now: Optional[datetime]) -> None:
        if self.cache is not None:
            self.cache.invalidate(place_id)

        self.storage.save_legacy_hours_text(place_id, formatOpeningHoursToString(hours) if hours else "")
        status = getOpenStatus(hours, now, self.config.CLOSING_SOON_MINUTES)
        self.storage.update_place_status(place_id, status["isOpen"], status["closingSoon"])
        logger.info(
            f"Place {place_id} hours updated. Status: {'Open' if status['isOpen'] else 'Closed'}"
            f"{', Closing Soon' if status['closingSoon'] else ''}"
        )
