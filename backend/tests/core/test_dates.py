"""Date Helpers — verifies DD-MM-YYYY formatting, lenient parsing and age bounds."""

from datetime import date, datetime

import pytest

from scouting.core.dates import calculate_age, format_date, parse_date

TODAY = date(2026, 6, 1)


def test_format_date_is_zero_padded():
    assert format_date(date(2005, 3, 7)) == "07-03-2005"
    assert format_date(datetime(2024, 12, 25, 18, 30)) == "25-12-2024"
    assert format_date(None) is None


@pytest.mark.parametrize("raw, expected", [
    ("15-03-2005", date(2005, 3, 15)),
    ("5-3-2005", date(2005, 3, 5)),
    ("2005-03-15", date(2005, 3, 15)),
    ("2005-03-15T10:00:00Z", date(2005, 3, 15)),
    (" 15-03-2005 ", date(2005, 3, 15)),
])
def test_parse_date_accepts_both_formats(raw, expected):
    assert parse_date(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "31-02-2005", "15/03/2005", "soon"])
def test_parse_date_returns_none_for_garbage(raw):
    assert parse_date(raw) is None


def test_age_before_and_after_birthday():
    assert calculate_age(date(2000, 6, 1), TODAY) == 26
    assert calculate_age(date(2000, 6, 2), TODAY) == 25


@pytest.mark.parametrize("dob", [date(1850, 1, 1), date(2027, 1, 1), date(2026, 12, 1)])
def test_implausible_birth_dates_have_no_age(dob):
    assert calculate_age(dob, TODAY) is None


def test_age_of_missing_birth_date():
    assert calculate_age(None, TODAY) is None
