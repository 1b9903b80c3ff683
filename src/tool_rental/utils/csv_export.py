"""CSV export of inventory, rentals, people and revenue."""

from __future__ import annotations

import csv
import io
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Sequence

from tool_rental.config import CURRENCY_SYMBOL
from tool_rental.domain.models import (
    AttendanceRecord,
    Customer,
    Rental,
    RevenueSummary,
    Tool,
    Worker,
)
from tool_rental.logging_config import get_logger
from tool_rental.services.stats import effective_status
from tool_rental.utils.dates import format_date_short

RENTAL_HEADERS = [
    "ID",
    "Tool",
    "Quantity",
    "Customer",
    "Start Date",
    "Expected Return",
    "Actual Return",
    "Rate/Day",
    "Status",
]
TOOL_HEADERS = ["ID", "Name", "Category", "Total Quantity", "Available", "Rate/Day"]
CUSTOMER_HEADERS = ["ID", "Name", "Phone", "Address", "Total Rentals", "Active Rentals"]
WORKER_HEADERS = ["ID", "Name", "Phone", "Role", "Joining Date"]
ATTENDANCE_HEADERS = ["ID", "Worker", "Date", "Status"]
REVENUE_HEADERS = ["Month", "Year", "Tool", "Customer", "Revenue"]


def format_amount(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0")


def format_currency(value: float) -> str:
    return f"{CURRENCY_SYMBOL}{format_amount(value)}"


def build_csv(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    """Render a header row plus data rows as comma separated text.

    Fields that contain a comma, quote or line break are quoted; everything
    else is written verbatim.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows([["" if value is None else str(value) for value in row] for row in rows])
    return buffer.getvalue().rstrip("\n")


def export_filename(entity: str, today: Optional[date] = None) -> str:
    return f"{entity}_{(today or date.today()).isoformat()}.csv"


def write_csv(
    directory: Path,
    entity: str,
    headers: Sequence[str],
    rows: Iterable[Sequence[object]],
    today: Optional[date] = None,
) -> Path:
    """Write ``<entity>_<YYYY-MM-DD>.csv`` into ``directory`` and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    filepath = directory / export_filename(entity, today)
    content = build_csv(headers, rows)
    try:
        filepath.write_text(content, encoding="utf-8-sig", newline="")
    except OSError:
        get_logger(__name__).exception("Failed to write export %s", filepath)
        raise
    get_logger(__name__).info("Exported %s to %s", entity, filepath)
    return filepath


def rental_rows(rentals: Iterable[Rental], today: Optional[date] = None) -> list[list[str]]:
    today = today or date.today()
    return [
        [
            rental.id,
            rental.tool_name,
            str(rental.quantity),
            rental.customer_name,
            format_date_short(rental.start_date),
            format_date_short(rental.expected_return_date),
            format_date_short(rental.actual_return_date)
            if rental.actual_return_date
            else "-",
            format_currency(rental.rate_per_day),
            effective_status(rental, today).value,
        ]
        for rental in rentals
    ]


def tool_rows(tools: Iterable[Tool]) -> list[list[str]]:
    return [
        [
            tool.id,
            tool.name,
            tool.category,
            str(tool.total_quantity),
            str(tool.available_quantity),
            format_currency(tool.rate_per_day),
        ]
        for tool in tools
    ]


def customer_rows(customers: Iterable[Customer]) -> list[list[str]]:
    return [
        [
            customer.id,
            customer.name,
            customer.phone_number,
            customer.address,
            str(customer.total_rentals),
            str(customer.active_rentals),
        ]
        for customer in customers
    ]


def worker_rows(workers: Iterable[Worker]) -> list[list[str]]:
    return [
        [
            worker.id,
            worker.name,
            worker.phone_number,
            worker.role,
            format_date_short(worker.joining_date),
        ]
        for worker in workers
    ]


def attendance_rows(records: Iterable[AttendanceRecord]) -> list[list[str]]:
    return [
        [record.id, record.worker_name, format_date_short(record.date), record.status.value]
        for record in records
    ]


def revenue_rows(revenue: RevenueSummary) -> list[list[str]]:
    month = revenue.current_month
    year = str(revenue.current_year)
    rows = [
        [month, year, tool, "-", format_currency(amount)]
        for tool, amount in revenue.revenue_by_tool.items()
    ]
    rows.extend(
        [month, year, "-", customer, format_currency(amount)]
        for customer, amount in revenue.revenue_by_customer.items()
    )
    return rows


def export_rentals_to_csv(
    rentals: Iterable[Rental], directory: Path, today: Optional[date] = None
) -> Path:
    return write_csv(directory, "rentals", RENTAL_HEADERS, rental_rows(rentals, today), today)


def export_tools_to_csv(
    tools: Iterable[Tool], directory: Path, today: Optional[date] = None
) -> Path:
    return write_csv(directory, "tools", TOOL_HEADERS, tool_rows(tools), today)


def export_customers_to_csv(
    customers: Iterable[Customer], directory: Path, today: Optional[date] = None
) -> Path:
    return write_csv(directory, "customers", CUSTOMER_HEADERS, customer_rows(customers), today)


def export_workers_to_csv(
    workers: Iterable[Worker], directory: Path, today: Optional[date] = None
) -> Path:
    return write_csv(directory, "workers", WORKER_HEADERS, worker_rows(workers), today)


def export_attendance_to_csv(
    records: Iterable[AttendanceRecord], directory: Path, today: Optional[date] = None
) -> Path:
    return write_csv(
        directory, "attendance", ATTENDANCE_HEADERS, attendance_rows(records), today
    )


def export_revenue_to_csv(
    revenue: RevenueSummary, directory: Path, today: Optional[date] = None
) -> Path:
    return write_csv(directory, "revenue", REVENUE_HEADERS, revenue_rows(revenue), today)
