"""Centralized UI strings and display helpers."""

from __future__ import annotations

from tool_rental.config import CURRENCY_SYMBOL
from tool_rental.domain.models import AttendanceStatus, RentalStatus
from tool_rental.version import __app_name__

APP_NAME = __app_name__

TITLE_WARNING = "Warning"
TITLE_ERROR = "Error"
TITLE_SUCCESS = "Success"
TITLE_CONFIRMATION = "Confirm"

RENTAL_STATUS_LABELS = {
    RentalStatus.ACTIVE: "Active",
    RentalStatus.OVERDUE: "Overdue",
    RentalStatus.RETURNED: "Returned",
    RentalStatus.CANCELLED: "Cancelled",
}

ATTENDANCE_STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT: "Absent",
    AttendanceStatus.HALF_DAY: "Half Day",
    AttendanceStatus.LEAVE: "Leave",
}


def format_money(value: float) -> str:
    return f"{CURRENCY_SYMBOL}{value:,.2f}"
