from antiques_trail.hours.config import get_hours_config


def test_defaults(monkeypatch):
    for name in ("HOURS_TIMEZONE", "CLOSING_SOON_MINUTES", "HOURS_CACHE_TTL_S", "HOURS_CACHE_MAX_ENTRIES"):
        monkeypatch.delenv(name, raising=False)
    cfg = get_hours_config()
    assert cfg.HOURS_TIMEZONE == "Europe/London"
    assert cfg.CLOSING_SOON_MINUTES == 60
    assert cfg.HOURS_CACHE_TTL_S == 300.0
    assert cfg.HOURS_CACHE_MAX_ENTRIES == 512


def test_env_overrides_and_bad_values(monkeypatch):
    monkeypatch.setenv("CLOSING_SOON_MINUTES", "30")
    monkeypatch.setenv("HOURS_CACHE_TTL_S", "not-a-number")
    monkeypatch.setenv("HOURS_CACHE_MAX_ENTRIES", "0")
    cfg = get_hours_config()
    assert cfg.CLOSING_SOON_MINUTES == 30
    assert cfg.HOURS_CACHE_TTL_S == 300.0
    assert cfg.HOURS_CACHE_MAX_ENTRIES == 1


def test_unknown_timezone_falls_back_to_london(monkeypatch):
    monkeypatch.setenv("HOURS_TIMEZONE", "Europe/Londn")
    assert get_hours_config().HOURS_TIMEZONE == "Europe/London"

    monkeypatch.setenv("HOURS_TIMEZONE", "America/New_York")
    assert get_hours_config().HOURS_TIMEZONE == "America/New_York"
