from datetime import date, datetime

from tool_rental.domain.models import (
    AttendanceRecord,
    AttendanceStatus,
    Rental,
    RentalStatus,
    Tool,
)
from tool_rental.services.stats import (
    billed_period,
    compute_dashboard_stats,
    compute_revenue,
    effective_status,
    summarize_attendance,
)

TODAY = date(2024, 5, 15)


def _rental(rental_id, start, expected, status=RentalStatus.ACTIVE, returned=None,
            quantity=1, rate=100.0, tool="Drill", customer="Anita"):
    return Rental(
        id=rental_id,
        tool_id="t1",
        tool_name=tool,
        quantity=quantity,
        customer_id="c1",
        customer_name=customer,
        start_date=start,
        expected_return_date=expected,
        rate_per_day=rate,
        status=status,
        actual_return_date=returned,
    )


def test_active_rental_past_due_reads_overdue():
    rental = _rental("r1", date(2024, 5, 1), date(2024, 5, 14))
    assert effective_status(rental, TODAY) == RentalStatus.OVERDUE
    assert effective_status(rental, date(2024, 5, 14)) == RentalStatus.ACTIVE


def test_closed_rentals_keep_their_status():
    returned = _rental("r1", date(2024, 5, 1), date(2024, 5, 3), RentalStatus.RETURNED,
                       datetime(2024, 5, 4, 9, 0))
    cancelled = _rental("r2", date(2024, 5, 1), date(2024, 5, 3), RentalStatus.CANCELLED)
    assert effective_status(returned, TODAY) == RentalStatus.RETURNED
    assert effective_status(cancelled, TODAY) == RentalStatus.CANCELLED


def test_billed_period_bills_at_least_one_day():
    same_day = _rental("r1", TODAY, TODAY, RentalStatus.RETURNED, datetime(2024, 5, 15, 18))
    assert billed_period(same_day, TODAY) == (TODAY, date(2024, 5, 16))
    open_rental = _rental("r2", date(2024, 5, 10), date(2024, 5, 20))
    assert billed_period(open_rental, TODAY) == (date(2024, 5, 10), date(2024, 5, 16))
    returned = _rental("r3", date(2024, 5, 10), date(2024, 5, 12), RentalStatus.RETURNED,
                       datetime(2024, 5, 12, 9))
    assert billed_period(returned, TODAY) == (date(2024, 5, 10), date(2024, 5, 13))


def test_revenue_only_counts_days_in_current_month():
    rentals = [
        # 28 Apr to 3 May returned: 1, 2 and 3 May are billed.
        _rental("r1", date(2024, 4, 28), date(2024, 5, 2), RentalStatus.RETURNED,
                datetime(2024, 5, 3, 10), quantity=2, rate=50.0, customer="Vijay"),
        # Open since 13 May: 13, 14 and 15 are billed.
        _rental("r2", date(2024, 5, 13), date(2024, 5, 20), rate=100.0),
        _rental("r3", date(2024, 5, 2), date(2024, 5, 9), RentalStatus.CANCELLED),
        _rental("r4", date(2024, 3, 1), date(2024, 3, 5), RentalStatus.RETURNED,
                datetime(2024, 3, 5, 12)),
    ]
    revenue = compute_revenue(rentals, TODAY)
    assert revenue.current_month == "May"
    assert revenue.current_year == 2024
    assert revenue.total_revenue == 3 * 2 * 50.0 + 3 * 100.0
    assert revenue.revenue_by_tool == {"Drill": 600.0}
    assert revenue.revenue_by_customer == {"Anita": 300.0, "Vijay": 300.0}
    assert len(revenue.daily_revenue) == 15
    assert revenue.daily_revenue[0].day == "01"
    assert revenue.daily_revenue[0].amount == 100.0
    assert revenue.daily_revenue[12].amount == 100.0
    assert sum(entry.amount for entry in revenue.daily_revenue) == revenue.total_revenue


def test_revenue_for_empty_ledger():
    revenue = compute_revenue([], TODAY)
    assert revenue.total_revenue == 0
    assert revenue.revenue_by_tool == {}
    assert all(entry.amount == 0 for entry in revenue.daily_revenue)


def test_returning_today_bills_the_same_days_as_staying_open():
    open_rental = _rental("r1", date(2024, 5, 11), date(2024, 5, 20), quantity=10, rate=15.0)
    returned = _rental("r1", date(2024, 5, 11), date(2024, 5, 20), RentalStatus.RETURNED,
                       datetime(2024, 5, 15, 17, 30), quantity=10, rate=15.0)
    before = compute_revenue([open_rental], TODAY)
    after = compute_revenue([returned], TODAY)
    assert before.total_revenue == 750.0
    assert after.total_revenue == before.total_revenue
    assert after.daily_revenue == before.daily_revenue


def test_rental_starting_after_today_bills_nothing_yet():
    rentals = [
        _rental("r1", date(2024, 5, 17), date(2024, 5, 20), rate=150.0),
        _rental("r2", date(2024, 5, 14), date(2024, 5, 20), rate=100.0),
    ]
    revenue = compute_revenue(rentals, TODAY)
    assert revenue.total_revenue == 200.0
    assert revenue.revenue_by_tool == {"Drill": 200.0}
    assert sum(entry.amount for entry in revenue.daily_revenue) == revenue.total_revenue


def test_dashboard_stats_counts():
    tools = [
        Tool("t1", "Drill", "Power Tools", 10, 7, 100.0),
        Tool("t2", "Ladder", "Access", 4, 4, 50.0),
    ]
    rentals = [
        _rental("r1", TODAY, date(2024, 5, 20), quantity=3),
        _rental("r2", date(2024, 5, 1), date(2024, 5, 10)),
        _rental("r3", date(2024, 5, 1), date(2024, 5, 10), RentalStatus.RETURNED,
                datetime(2024, 5, 15, 8, 0)),
    ]
    revenue = compute_revenue(rentals, TODAY)
    stats = compute_dashboard_stats(tools, rentals, revenue, TODAY)
    assert stats.total_tools == 14
    assert stats.available_tools == 11
    assert stats.rented_tools == 3
    assert stats.active_rentals == 1
    assert stats.overdue_rentals == 1
    assert stats.today_new_rentals == 1
    assert stats.today_returns == 1
    assert stats.monthly_revenue == revenue.total_revenue


def test_summarize_attendance():
    records = [
        AttendanceRecord("a1", "w1", "Suresh", date(2024, 5, 13), AttendanceStatus.PRESENT),
        AttendanceRecord("a2", "w1", "Suresh", date(2024, 5, 14), AttendanceStatus.PRESENT),
        AttendanceRecord("a3", "w1", "Suresh", date(2024, 5, 15), AttendanceStatus.LEAVE),
    ]
    summary = summarize_attendance(records)
    assert (summary.present, summary.absent, summary.half_day, summary.leave) == (2, 0, 0, 1)
