import threading
import time
from collections import OrderedDict
from typing import Any, Callable, List, Optional, Tuple

from antiques_trail.hours.models import DayHours


class HoursCache:
    """
    Per-place cache of DayHours lists with a fixed time-to-live.

    Each entry also keeps a short source label ("structured", "legacy", ...)
    for the service. The clock is injected so expiry can be tested without
    sleeping. Entries are evicted oldest-first once max_entries is reached.
    A ttl of 0 disables caching. Safe to share between Flask worker threads.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic, max_entries: int = 512):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.max_entries = max(1, max_entries)
        self._entries: "OrderedDict[Any, tuple]" = OrderedDict()
        self._lock = threading.Lock()

    def get_entry(self, place_id: Any) -> Optional[Tuple[List[DayHours], Optional[str]]]:
        """(hours, source) for place_id, or None if missing or expired."""
        # Read the clock outside the lock; it is caller-supplied code.
        now = self.clock()
        with self._lock:
            entry = self._entries.get(place_id)
            if entry is None:
                return None
            expires_at, hours, source = entry
            if now >= expires_at:
                self._entries.pop(place_id, None)
                return None
            return list(hours), source

    def get(self, place_id: Any) -> Optional[List[DayHours]]:
        entry = self.get_entry(place_id)
        return None if entry is None else entry[0]

    def put(self, place_id: Any, hours: List[DayHours], source: Optional[str] = None) -> None:
        if self.ttl_seconds <= 0:
            return
        expires_at = self.clock() + self.ttl_seconds
        with self._lock:
            self._entries.pop(place_id, None)
            while len(self._entries) >= self.max_entries:
                self._entries.popitem(last=False)
            self._entries[place_id] = (expires_at, list(hours), source)

    def invalidate(self, place_id: Any) -> None:
        with self._lock:
            self._entries.pop(place_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
