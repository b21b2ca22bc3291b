from __future__ import annotations

"""
Configuration for opening-hours evaluation and caching.

Provides a dataclass HoursConfig and a helper to read environment variables.
"""

from dataclasses import dataclass
import logging
import os
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE = "Europe/London"


@dataclass(frozen=True)
class HoursConfig:
    """
    Configuration values used by the opening-hours modules.

    Attributes:
        HOURS_TIMEZONE: IANA zone used for the wall clock when no instant is given.
        CLOSING_SOON_MINUTES: Threshold for the "closing soon" flag.
        HOURS_CACHE_TTL_S: Seconds a place's hours stay cached. 0 disables caching.
        HOURS_CACHE_MAX_ENTRIES: Upper bound on cached places.
        SUPABASE_URL: Supabase project URL.
        SUPABASE_SERVICE_KEY: Supabase service key.
    """
    HOURS_TIMEZONE: str
    CLOSING_SOON_MINUTES: int
    HOURS_CACHE_TTL_S: float
    HOURS_CACHE_MAX_ENTRIES: int
    SUPABASE_URL: Optional[str]
    SUPABASE_SERVICE_KEY: Optional[str]


def get_hours_config() -> HoursConfig:
    """
    Read configuration from environment variables.

    Supported environment variables:
        - HOURS_TIMEZONE (default "Europe/London"; unknown zones fall back to it)
        - CLOSING_SOON_MINUTES (default "60")
        - HOURS_CACHE_TTL_S (default "300")
        - HOURS_CACHE_MAX_ENTRIES (default "512")
        - SUPABASE_URL
        - SUPABASE_SERVICE_KEY

    Returns:
        HoursConfig: Parsed configuration.
    """
    timezone = os.getenv("HOURS_TIMEZONE", DEFAULT_TIMEZONE) or DEFAULT_TIMEZONE
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logging.warning(f"Unknown HOURS_TIMEZONE {timezone!r}; using {DEFAULT_TIMEZONE}")
        timezone = DEFAULT_TIMEZONE
    try:
        closing_soon = int(os.getenv("CLOSING_SOON_MINUTES", "60"))
    except ValueError:
        closing_soon = 60
    try:
        cache_ttl = float(os.getenv("HOURS_CACHE_TTL_S", "300"))
    except ValueError:
        cache_ttl = 300.0
    try:
        cache_max = int(os.getenv("HOURS_CACHE_MAX_ENTRIES", "512"))
    except ValueError:
        cache_max = 512

    if closing_soon < 0:
        closing_soon = 60
    if cache_ttl < 0:
        cache_ttl = 0.0
    if cache_max < 1:
        cache_max = 1

    return HoursConfig(
        HOURS_TIMEZONE=timezone,
        CLOSING_SOON_MINUTES=closing_soon,
        HOURS_CACHE_TTL_S=cache_ttl,
        HOURS_CACHE_MAX_ENTRIES=cache_max,
        SUPABASE_URL=os.getenv("SUPABASE_URL"),
        SUPABASE_SERVICE_KEY=os.getenv("SUPABASE_SERVICE_KEY"),
    )
