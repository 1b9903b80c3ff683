from datetime import date, datetime

import pytest

from tool_rental.utils.dates import (
    days_overdue,
    days_remaining,
    days_rented,
    format_date,
    format_date_short,
    is_rental_overdue,
    to_date,
)

TODAY = date(2024, 5, 15)


@pytest.mark.parametrize(
    "value, expected",
    [
        (datetime(2024, 5, 15, 23, 59), date(2024, 5, 15)),
        ("2024-05-03", date(2024, 5, 3)),
        ("03/05/2024", date(2024, 5, 3)),
        ("2024-05-03T10:15:00Z", date(2024, 5, 3)),
    ],
)
def test_to_date(value, expected):
    assert to_date(value) == expected


def test_to_date_rejects_empty_text():
    with pytest.raises(ValueError):
        to_date("  ")


def test_formatting():
    assert format_date(date(2024, 5, 3)) == "03 May 2024"
    assert format_date_short(date(2024, 5, 3)) == "03/05/2024"


def test_overdue_only_after_expected_day():
    assert not is_rental_overdue(TODAY, today=TODAY)
    assert is_rental_overdue(date(2024, 5, 14), today=TODAY)
    assert days_overdue(date(2024, 5, 12), today=TODAY) == 3
    assert days_remaining(date(2024, 5, 20), today=TODAY) == 5
    assert days_rented(date(2024, 5, 1), today=TODAY) == 14
