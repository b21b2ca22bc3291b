import pytest

from antiques_trail.hours.utils.time_format import (
    convertTo24HourFormat,
    formatTimeFor12Hour,
    stripLeadingZero,
    toMinutes,
)


def test_format_time_for_12_hour_basic_and_edge_cases():
    assert formatTimeFor12Hour("09:00") == "9AM"
    assert formatTimeFor12Hour("00:00") == "12AM"   # midnight
    assert formatTimeFor12Hour("12:30") == "12:30PM"  # noon hour
    assert formatTimeFor12Hour("14:30") == "2:30PM"
    assert formatTimeFor12Hour("00:15") == "12:15AM"
    assert formatTimeFor12Hour("23:05") == "11:05PM"
    assert formatTimeFor12Hour("17:00") == "5PM"


@pytest.mark.parametrize("bad", ["bad", "0900", "ab:cd", "25:00", "10:75"])
def test_format_time_for_12_hour_returns_malformed_input_unchanged(bad):
    assert formatTimeFor12Hour(bad) == bad


def test_format_time_for_12_hour_empty():
    assert formatTimeFor12Hour(None) == ""
    assert formatTimeFor12Hour("") == ""


def test_strip_leading_zero_only_touches_hours():
    assert stripLeadingZero("09:00 - 05:00") == "9:00 - 5:00"
    assert stripLeadingZero("09:00") == "9:00"
    assert stripLeadingZero("10:05") == "10:05"
    assert stripLeadingZero("17:30") == "17:30"


def test_strip_leading_zero_known_phrases():
    assert stripLeadingZero("0By appointment") == "By appointment only"
    assert stripLeadingZero("by APPOINTMENT only") == "By appointment only"
    assert stripLeadingZero("01Closed") == "Closed"
    assert stripLeadingZero("") == ""


def test_convert_to_24_hour_format():
    assert convertTo24HourFormat("9am") == "09:00"
    assert convertTo24HourFormat("5pm") == "17:00"
    assert convertTo24HourFormat("5:30pm") == "17:30"
    assert convertTo24HourFormat("12pm") == "12:00"
    assert convertTo24HourFormat("12am") == "00:00"
    assert convertTo24HourFormat("14:00") == "14:00"
    assert convertTo24HourFormat("9 AM") == "09:00"
    # No am/pm: taken literally
    assert convertTo24HourFormat("4") == "04:00"


def test_convert_to_24_hour_format_rejects_out_of_range():
    assert convertTo24HourFormat("24") is None
    assert convertTo24HourFormat("99") is None
    assert convertTo24HourFormat("10:60") is None
    assert convertTo24HourFormat("noon") is None
    assert convertTo24HourFormat(None) is None


def test_to_minutes():
    assert toMinutes("00:00") == 0
    assert toMinutes("22:30") == 1350
    assert toMinutes("bad") is None
    assert toMinutes(None) is None
