"""Date parsing, formatting and rental period arithmetic."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from dateutil import parser

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO-like string to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        raise ValueError("Empty date value.")
    return parser.parse(text, dayfirst="/" in text).date()


def format_date(value: DateLike) -> str:
    return to_date(value).strftime("%d %b %Y")


def format_date_short(value: DateLike) -> str:
    return to_date(value).strftime("%d/%m/%Y")


def is_rental_overdue(expected_return_date: DateLike, today: Optional[date] = None) -> bool:
    """Return True once the expected return day has fully passed."""
    return (today or date.today()) > to_date(expected_return_date)


def days_remaining(end_date: DateLike, today: Optional[date] = None) -> int:
    return (to_date(end_date) - (today or date.today())).days


def days_overdue(expected_return_date: DateLike, today: Optional[date] = None) -> int:
    return ((today or date.today()) - to_date(expected_return_date)).days


def days_rented(
    start_date: DateLike,
    end_date: Optional[DateLike] = None,
    today: Optional[date] = None,
) -> int:
    end = to_date(end_date) if end_date is not None else (today or date.today())
    return (end - to_date(start_date)).days
