import pytest
from datetime import date, datetime
from app.core.exceptions import InvalidInputError, RangeTooLongError
from app.services.calendar import expand_range, month_window, parse_day, year_window

def test_parse_day_accepts_iso_string_and_date():
    assert parse_day("2025-03-01") == date(2025, 3, 1)
    assert parse_day(" 2025-03-01 ") == date(2025, 3, 1)
    assert parse_day(date(2025, 3, 1)) == date(2025, 3, 1)

@pytest.mark.parametrize("value", ["", None, "2025-3-1", "01/03/2025", "2025-02-30", "2025-03-01T10:00:00"])
def test_parse_day_rejects_malformed(value):
    with pytest.raises(InvalidInputError):
        parse_day(value, "day")

def test_parse_day_rejects_timestamps():
    with pytest.raises(InvalidInputError):
        parse_day(datetime(2025, 3, 1, 23, 30))

def test_expand_range_inclusive_ascending():
    days = expand_range(date(2025, 3, 1), date(2025, 3, 5))
    assert days == [date(2025, 3, n) for n in range(1, 6)]

def test_expand_range_end_defaults_to_start():
    assert expand_range(date(2025, 3, 1)) == [date(2025, 3, 1)]

def test_expand_range_crosses_month_and_leap_day():
    days = expand_range(date(2024, 2, 28), date(2024, 3, 1))
    assert days == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]

def test_expand_range_rejects_reversed_range():
    with pytest.raises(InvalidInputError):
        expand_range(date(2025, 3, 5), date(2025, 3, 1))

def test_expand_range_length_guardrail():
    # Jan 1 .. Mar 3 2025 is exactly 62 days
    assert len(expand_range(date(2025, 1, 1), date(2025, 3, 3))) == 62
    with pytest.raises(RangeTooLongError) as exc:
        expand_range(date(2025, 1, 1), date(2025, 3, 4))
    assert exc.value.error_code == "RANGE_TOO_LONG"
    assert exc.value.details["days"] == 63

def test_month_window_is_half_open():
    assert month_window("2025-03") == (date(2025, 3, 1), date(2025, 4, 1))
    assert month_window("2025-12") == (date(2025, 12, 1), date(2026, 1, 1))

@pytest.mark.parametrize("token", ["2025-13", "2025-00", "2025-3", "March", "", "0000-01", "9999-12", "1999-12"])
def test_month_window_rejects_bad_tokens(token):
    with pytest.raises(InvalidInputError):
        month_window(token)

def test_year_window():
    assert year_window(2025) == (date(2025, 1, 1), date(2026, 1, 1))
    assert year_window("2100") == (date(2100, 1, 1), date(2101, 1, 1))

@pytest.mark.parametrize("year", [1999, 2101, "twenty"])
def test_year_window_bounds(year):
    with pytest.raises(InvalidInputError):
        year_window(year)
