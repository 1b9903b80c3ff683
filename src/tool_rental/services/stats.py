"""Derived state: effective rental status, monthly revenue and dashboard stats.

Every function here is pure. The store calls them after each mutation with
its current collections and the reference date, so the same collection
contents always produce the same figures.
"""

from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Sequence

from tool_rental.domain.models import (
    AttendanceRecord,
    AttendanceStatus,
    AttendanceSummary,
    DailyRevenue,
    DashboardStats,
    Rental,
    RentalStatus,
    RevenueSummary,
    Tool,
)
from tool_rental.utils.dates import to_date


def effective_status(rental: Rental, today: date) -> RentalStatus:
    """Status as shown to the user on ``today``.

    Open rentals past their expected return day read as overdue; closed
    rentals keep their stored status.
    """
    if rental.status == RentalStatus.ACTIVE and today > rental.expected_return_date:
        return RentalStatus.OVERDUE
    return rental.status


def billed_period(rental: Rental, today: date) -> tuple[date, date]:
    """Return the half-open ``[start, end)`` range of billed days.

    The return day is billed, the same as today is for an open rental.
    """
    start = rental.start_date
    if rental.status == RentalStatus.RETURNED and rental.actual_return_date:
        end = to_date(rental.actual_return_date) + timedelta(days=1)
    else:
        end = today + timedelta(days=1)
    if end <= start:
        end = start + timedelta(days=1)
    return start, end


def _month_bounds(today: date) -> tuple[date, date]:
    first = today.replace(day=1)
    days_in_month = calendar.monthrange(today.year, today.month)[1]
    return first, first + timedelta(days=days_in_month)


def compute_revenue(rentals: Iterable[Rental], today: date) -> RevenueSummary:
    """Revenue for the calendar month of ``today`` from the rental ledger."""
    month_start, month_end = _month_bounds(today)
    series_end = min(today + timedelta(days=1), month_end)
    daily: dict[date, float] = defaultdict(float)
    by_tool: dict[str, float] = defaultdict(float)
    by_customer: dict[str, float] = defaultdict(float)

    for rental in rentals:
        if rental.status == RentalStatus.CANCELLED:
            continue
        start, end = billed_period(rental, today)
        overlap_start = max(start, month_start)
        # Days after today are not billed yet.
        overlap_end = min(end, series_end)
        billed_days = (overlap_end - overlap_start).days
        if billed_days <= 0:
            continue
        per_day = rental.rate_per_day * rental.quantity
        amount = per_day * billed_days
        by_tool[rental.tool_name] += amount
        by_customer[rental.customer_name] += amount
        current = overlap_start
        while current < overlap_end:
            daily[current] += per_day
            current += timedelta(days=1)

    series = []
    current = month_start
    while current < series_end:
        series.append(DailyRevenue(day=f"{current.day:02d}", amount=daily.get(current, 0.0)))
        current += timedelta(days=1)

    return RevenueSummary(
        current_month=month_start.strftime("%B"),
        current_year=month_start.year,
        total_revenue=sum(by_tool.values()),
        revenue_by_tool=dict(sorted(by_tool.items())),
        revenue_by_customer=dict(sorted(by_customer.items())),
        daily_revenue=tuple(series),
    )


def compute_dashboard_stats(
    tools: Sequence[Tool],
    rentals: Sequence[Rental],
    revenue: RevenueSummary,
    today: date,
) -> DashboardStats:
    statuses = [effective_status(rental, today) for rental in rentals]
    return DashboardStats(
        total_tools=sum(tool.total_quantity for tool in tools),
        available_tools=sum(tool.available_quantity for tool in tools),
        rented_tools=sum(tool.rented_quantity for tool in tools),
        active_rentals=statuses.count(RentalStatus.ACTIVE),
        overdue_rentals=statuses.count(RentalStatus.OVERDUE),
        monthly_revenue=revenue.total_revenue,
        today_new_rentals=sum(1 for rental in rentals if rental.start_date == today),
        today_returns=sum(
            1
            for rental in rentals
            if rental.actual_return_date and to_date(rental.actual_return_date) == today
        ),
    )


def summarize_attendance(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    counts = {status: 0 for status in AttendanceStatus}
    for record in records:
        counts[record.status] += 1
    return AttendanceSummary(
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        half_day=counts[AttendanceStatus.HALF_DAY],
        leave=counts[AttendanceStatus.LEAVE],
    )
