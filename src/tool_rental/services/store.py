"""In-memory store for tools, rentals, customers, workers and attendance.

The store is the only writer of its collections. Operations that touch more
than one collection (creating, returning, cancelling or deleting a rental)
check every precondition before changing anything, so a refused operation
leaves no partial update behind. Dashboard stats and monthly revenue are
recomputed after every applied change.
"""

from __future__ import annotations

import dataclasses
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from tool_rental.config import (
    ATTENDANCE_ID_PREFIX,
    CUSTOMER_ID_PREFIX,
    RENTAL_ID_PREFIX,
    TOOL_ID_PREFIX,
    WORKER_ID_PREFIX,
)
from tool_rental.domain.models import (
    AttendanceRecord,
    AttendanceStatus,
    AttendanceSummary,
    Customer,
    DashboardStats,
    Rental,
    RentalStatus,
    RevenueSummary,
    Tool,
    Worker,
)
from tool_rental.logging_config import get_logger
from tool_rental.services import excel_import, filters
from tool_rental.services.excel_import import ImportEntity, ImportReport, RowError
from tool_rental.services.results import OperationResult
from tool_rental.services.stats import (
    compute_dashboard_stats,
    compute_revenue,
    effective_status,
    summarize_attendance,
)
from tool_rental.utils.dates import to_date

E = TypeVar("E")

_ID_SUFFIX = re.compile(r"(\d+)$")


def _next_counter(items: Iterable[Any]) -> int:
    highest = 0
    for item in items:
        match = _ID_SUFFIX.search(item.id)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest + 1


def _find(items: list[E], entity_id: str) -> Optional[int]:
    for index, item in enumerate(items):
        if getattr(item, "id") == entity_id:
            return index
    return None


class RentalStore:
    """Single source of truth for the rental business data."""

    def __init__(
        self,
        tools: Iterable[Tool] = (),
        rentals: Iterable[Rental] = (),
        customers: Iterable[Customer] = (),
        workers: Iterable[Worker] = (),
        attendance: Iterable[AttendanceRecord] = (),
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._tools: list[Tool] = list(tools)
        self._rentals: list[Rental] = list(rentals)
        self._customers: list[Customer] = list(customers)
        self._workers: list[Worker] = list(workers)
        self._attendance: list[AttendanceRecord] = list(attendance)
        self._today = today
        self._now = now
        self._counters = {
            TOOL_ID_PREFIX: _next_counter(self._tools),
            RENTAL_ID_PREFIX: _next_counter(self._rentals),
            CUSTOMER_ID_PREFIX: _next_counter(self._customers),
            WORKER_ID_PREFIX: _next_counter(self._workers),
            ATTENDANCE_ID_PREFIX: _next_counter(self._attendance),
        }
        self._logger = get_logger(self.__class__.__name__)

        self.tools_filter = ""
        self.rentals_filter = ""
        self.rentals_status_filter: Optional[RentalStatus] = None
        self.customers_filter = ""
        self.workers_filter = ""

        self._revenue = RevenueSummary(current_month="", current_year=0)
        self._stats = DashboardStats()
        self.recompute_stats()

    # Collections -----------------------------------------------------------

    @property
    def tools(self) -> tuple[Tool, ...]:
        return tuple(self._tools)

    @property
    def rentals(self) -> tuple[Rental, ...]:
        return tuple(self._rentals)

    @property
    def customers(self) -> tuple[Customer, ...]:
        return tuple(self._customers)

    @property
    def workers(self) -> tuple[Worker, ...]:
        return tuple(self._workers)

    @property
    def attendance(self) -> tuple[AttendanceRecord, ...]:
        return tuple(self._attendance)

    @property
    def revenue(self) -> RevenueSummary:
        return self._revenue

    @property
    def stats(self) -> DashboardStats:
        return self._stats

    def today(self) -> date:
        return self._today()

    def get_tool(self, tool_id: str) -> Optional[Tool]:
        index = _find(self._tools, tool_id)
        return self._tools[index] if index is not None else None

    def get_rental(self, rental_id: str) -> Optional[Rental]:
        index = _find(self._rentals, rental_id)
        return self._rentals[index] if index is not None else None

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        index = _find(self._customers, customer_id)
        return self._customers[index] if index is not None else None

    def get_worker(self, worker_id: str) -> Optional[Worker]:
        index = _find(self._workers, worker_id)
        return self._workers[index] if index is not None else None

    def rental_status(self, rental: Rental) -> RentalStatus:
        return effective_status(rental, self._today())

    # Derived state ---------------------------------------------------------

    def recompute_stats(self) -> DashboardStats:
        """Rebuild revenue and dashboard stats from the current collections."""
        today = self._today()
        self._revenue = compute_revenue(self._rentals, today)
        self._stats = compute_dashboard_stats(
            self._tools, self._rentals, self._revenue, today
        )
        return self._stats

    # Filters ---------------------------------------------------------------

    def filtered_tools(self) -> list[Tool]:
        return filters.filter_tools(self._tools, self.tools_filter)

    def filtered_rentals(self) -> list[Rental]:
        return filters.filter_rentals(
            self._rentals,
            self.rentals_filter,
            self.rentals_status_filter,
            today=self._today(),
        )

    def filtered_customers(self) -> list[Customer]:
        return filters.filter_customers(self._customers, self.customers_filter)

    def filtered_workers(self) -> list[Worker]:
        return filters.filter_workers(self._workers, self.workers_filter)

    # Tools -----------------------------------------------------------------

    def add_tool(self, data: Mapping[str, Any]) -> OperationResult[Tool]:
        total = int(data["total_quantity"])
        available = int(data.get("available_quantity", total))
        rate = float(data["rate_per_day"])
        if total < 0 or not 0 <= available <= total:
            return self._refuse(
                "Available quantity must be between 0 and the total quantity."
            )
        if rate <= 0:
            return self._refuse("Rate per day must be greater than zero.")
        tool = Tool(
            id=self._new_id(TOOL_ID_PREFIX),
            name=str(data["name"]),
            category=str(data["category"]),
            total_quantity=total,
            available_quantity=available,
            rate_per_day=rate,
            image_url=data.get("image_url") or None,
        )
        self._tools.append(tool)
        return self._applied(f"{tool.name} has been added to inventory.", tool)

    def update_tool(self, tool: Tool) -> OperationResult[Tool]:
        """Replace a tool, keeping the units currently rented out."""
        index = _find(self._tools, tool.id)
        if index is None:
            return self._missing("Tool", tool.id)
        if tool.rate_per_day <= 0:
            return self._refuse("Rate per day must be greater than zero.")
        rented = self._tools[index].rented_quantity
        if tool.total_quantity < rented:
            return self._refuse(
                f"{rented} units of {tool.name} are rented out; "
                "total quantity cannot be lower."
            )
        updated = dataclasses.replace(
            tool, available_quantity=tool.total_quantity - rented
        )
        self._tools[index] = updated
        return self._applied(f"{updated.name} has been updated.", updated)

    def delete_tool(self, tool_id: str) -> OperationResult[Tool]:
        index = _find(self._tools, tool_id)
        if index is None:
            return self._missing("Tool", tool_id)
        tool = self._tools[index]
        if any(rental.is_open and rental.tool_id == tool_id for rental in self._rentals):
            return self._refuse(
                f"{tool.name} has active rentals. Return all units first."
            )
        del self._tools[index]
        return self._applied(f"{tool.name} has been removed from inventory.", tool)

    # Rentals ---------------------------------------------------------------

    def add_rental(self, data: Mapping[str, Any]) -> OperationResult[Rental]:
        tool_index = _find(self._tools, str(data["tool_id"]))
        if tool_index is None:
            return self._missing("Tool", str(data["tool_id"]))
        customer_index = _find(self._customers, str(data["customer_id"]))
        if customer_index is None:
            return self._missing("Customer", str(data["customer_id"]))

        tool = self._tools[tool_index]
        customer = self._customers[customer_index]
        quantity = int(data["quantity"])
        start_date = to_date(data["start_date"])
        expected_return_date = to_date(data["expected_return_date"])
        if quantity <= 0:
            return self._refuse("Quantity must be at least 1.")
        if quantity > tool.available_quantity:
            return self._refuse(
                f"Only {tool.available_quantity} units of {tool.name} are available."
            )
        if expected_return_date < start_date:
            return self._refuse("Expected return date cannot be before the start date.")
        rate = data.get("rate_per_day")
        rate = tool.rate_per_day if rate in (None, "") else float(rate)
        if rate <= 0:
            return self._refuse("Rate per day must be greater than zero.")

        rental = Rental(
            id=self._new_id(RENTAL_ID_PREFIX),
            tool_id=tool.id,
            tool_name=str(data.get("tool_name") or tool.name),
            quantity=quantity,
            customer_id=customer.id,
            customer_name=str(data.get("customer_name") or customer.name),
            start_date=start_date,
            expected_return_date=expected_return_date,
            rate_per_day=rate,
            status=RentalStatus.ACTIVE,
        )
        self._tools[tool_index] = dataclasses.replace(
            tool, available_quantity=tool.available_quantity - quantity
        )
        self._customers[customer_index] = dataclasses.replace(
            customer,
            total_rentals=customer.total_rentals + 1,
            active_rentals=customer.active_rentals + 1,
        )
        self._rentals.append(rental)
        return self._applied(f"New rental created for {rental.customer_name}.", rental)

    def update_rental(self, rental: Rental) -> OperationResult[Rental]:
        """Replace a rental's dates, rate or labels.

        Tool, customer, quantity and status are owned by the create, return,
        cancel and delete operations and cannot change here.
        """
        index = _find(self._rentals, rental.id)
        if index is None:
            return self._missing("Rental", rental.id)
        current = self._rentals[index]
        if (
            rental.tool_id != current.tool_id
            or rental.customer_id != current.customer_id
            or rental.quantity != current.quantity
            or rental.status != current.status
        ):
            return self._refuse(
                "Tool, customer, quantity and status cannot be edited; "
                "return or delete the rental instead."
            )
        if rental.expected_return_date < rental.start_date:
            return self._refuse("Expected return date cannot be before the start date.")
        if rental.rate_per_day <= 0:
            return self._refuse("Rate per day must be greater than zero.")
        self._rentals[index] = rental
        return self._applied(f"Rental #{rental.id[1:]} has been updated.", rental)

    def delete_rental(self, rental_id: str) -> OperationResult[Rental]:
        index = _find(self._rentals, rental_id)
        if index is None:
            return self._missing("Rental", rental_id)
        rental = self._rentals[index]
        if rental.is_open:
            self._release(rental)
        del self._rentals[index]
        return self._applied(
            f"Rental for {rental.customer_name} has been deleted.", rental
        )

    def mark_rental_as_returned(self, rental_id: str) -> OperationResult[Rental]:
        index = _find(self._rentals, rental_id)
        if index is None:
            return self._missing("Rental", rental_id)
        rental = self._rentals[index]
        if not rental.is_open:
            return self._refuse(f"Rental #{rental.id[1:]} is already {rental.status.value}.")
        self._release(rental)
        returned = dataclasses.replace(
            rental, status=RentalStatus.RETURNED, actual_return_date=self._now()
        )
        self._rentals[index] = returned
        return self._applied(
            f"{returned.tool_name} has been returned by {returned.customer_name}.",
            returned,
        )

    def cancel_rental(self, rental_id: str) -> OperationResult[Rental]:
        index = _find(self._rentals, rental_id)
        if index is None:
            return self._missing("Rental", rental_id)
        rental = self._rentals[index]
        if not rental.is_open:
            return self._refuse(f"Rental #{rental.id[1:]} is already {rental.status.value}.")
        self._release(rental)
        cancelled = dataclasses.replace(rental, status=RentalStatus.CANCELLED)
        self._rentals[index] = cancelled
        return self._applied(
            f"Rental for {cancelled.customer_name} has been cancelled.", cancelled
        )

    def _release(self, rental: Rental) -> None:
        tool_index = _find(self._tools, rental.tool_id)
        if tool_index is not None:
            tool = self._tools[tool_index]
            self._tools[tool_index] = dataclasses.replace(
                tool,
                available_quantity=min(
                    tool.available_quantity + rental.quantity, tool.total_quantity
                ),
            )
        customer_index = _find(self._customers, rental.customer_id)
        if customer_index is not None:
            customer = self._customers[customer_index]
            self._customers[customer_index] = dataclasses.replace(
                customer, active_rentals=max(customer.active_rentals - 1, 0)
            )

    # Customers -------------------------------------------------------------

    def add_customer(self, data: Mapping[str, Any]) -> OperationResult[Customer]:
        customer = Customer(
            id=self._new_id(CUSTOMER_ID_PREFIX),
            name=str(data["name"]),
            phone_number=str(data["phone_number"]),
            address=str(data["address"]),
            total_rentals=0,
            active_rentals=0,
        )
        self._customers.append(customer)
        return self._applied(f"{customer.name} has been added as a customer.", customer)

    def update_customer(self, customer: Customer) -> OperationResult[Customer]:
        index = _find(self._customers, customer.id)
        if index is None:
            return self._missing("Customer", customer.id)
        current = self._customers[index]
        updated = dataclasses.replace(
            customer,
            total_rentals=current.total_rentals,
            active_rentals=current.active_rentals,
        )
        self._customers[index] = updated
        return self._applied(f"{updated.name}'s information has been updated.", updated)

    def delete_customer(self, customer_id: str) -> OperationResult[Customer]:
        index = _find(self._customers, customer_id)
        if index is None:
            return self._missing("Customer", customer_id)
        customer = self._customers[index]
        if customer.active_rentals > 0:
            return self._refuse(
                f"{customer.name} has active rentals. Return all tools first."
            )
        del self._customers[index]
        return self._applied(f"{customer.name} has been removed from customers.", customer)

    # Workers and attendance ------------------------------------------------

    def add_worker(self, data: Mapping[str, Any]) -> OperationResult[Worker]:
        worker = Worker(
            id=self._new_id(WORKER_ID_PREFIX),
            name=str(data["name"]),
            phone_number=str(data["phone_number"]),
            role=str(data["role"]),
            joining_date=to_date(data["joining_date"]),
        )
        self._workers.append(worker)
        return self._applied(f"{worker.name} has been added as a worker.", worker)

    def update_worker(self, worker: Worker) -> OperationResult[Worker]:
        index = _find(self._workers, worker.id)
        if index is None:
            return self._missing("Worker", worker.id)
        self._workers[index] = worker
        return self._applied(f"{worker.name}'s information has been updated.", worker)

    def delete_worker(self, worker_id: str) -> OperationResult[Worker]:
        index = _find(self._workers, worker_id)
        if index is None:
            return self._missing("Worker", worker_id)
        worker = self._workers.pop(index)
        return self._applied(f"{worker.name} has been removed from workers.", worker)

    def mark_attendance(
        self,
        worker_id: str,
        worker_name: str,
        day: date | datetime,
        status: AttendanceStatus | str,
    ) -> OperationResult[AttendanceRecord]:
        """Record a worker's status for one calendar day, replacing any earlier mark."""
        if _find(self._workers, worker_id) is None:
            return self._missing("Worker", worker_id)
        try:
            status = AttendanceStatus(status)
        except ValueError:
            return self._refuse(f"Unknown attendance status: {status}.")
        day = to_date(day)
        for index, record in enumerate(self._attendance):
            if record.worker_id == worker_id and record.date == day:
                updated = dataclasses.replace(record, status=status)
                self._attendance[index] = updated
                return self._applied(
                    f"{worker_name}'s attendance updated to {status.value}.", updated
                )
        record = AttendanceRecord(
            id=self._new_id(ATTENDANCE_ID_PREFIX),
            worker_id=worker_id,
            worker_name=worker_name,
            date=day,
            status=status,
        )
        self._attendance.append(record)
        return self._applied(
            f"{worker_name} marked as {status.value} for {day.strftime('%d/%m/%Y')}.",
            record,
        )

    def attendance_for_date(self, day: date | datetime) -> list[AttendanceRecord]:
        day = to_date(day)
        return [record for record in self._attendance if record.date == day]

    def attendance_for_worker(self, worker_id: str) -> list[AttendanceRecord]:
        return [record for record in self._attendance if record.worker_id == worker_id]

    def attendance_summary(self, worker_id: str) -> AttendanceSummary:
        return summarize_attendance(self.attendance_for_worker(worker_id))

    # Bulk insert and spreadsheet import ------------------------------------

    def bulk_add_tools(self, rows: Iterable[Mapping[str, Any]]) -> list[OperationResult[Tool]]:
        return [self.add_tool(row) for row in rows]

    def bulk_add_customers(
        self, rows: Iterable[Mapping[str, Any]]
    ) -> list[OperationResult[Customer]]:
        return [self.add_customer(row) for row in rows]

    def bulk_add_workers(
        self, rows: Iterable[Mapping[str, Any]]
    ) -> list[OperationResult[Worker]]:
        return [self.add_worker(row) for row in rows]

    def bulk_add_rentals(
        self, rows: Iterable[Mapping[str, Any]]
    ) -> list[OperationResult[Rental]]:
        """Create rentals from rows naming their tool and customer.

        Rows may carry ``tool_id``/``customer_id`` or, as spreadsheets do,
        ``tool_name``/``customer_name`` matched without regard to case.
        """
        results: list[OperationResult[Rental]] = []
        for row in rows:
            payload = dict(row)
            if not payload.get("tool_id"):
                tool = self._find_by_name(self._tools, payload.get("tool_name"))
                if tool is None:
                    results.append(self._missing("Tool", str(payload.get("tool_name"))))
                    continue
                payload["tool_id"] = tool.id
                payload.pop("tool_name", None)
            if not payload.get("customer_id"):
                customer = self._find_by_name(
                    self._customers, payload.get("customer_name")
                )
                if customer is None:
                    results.append(
                        self._missing("Customer", str(payload.get("customer_name")))
                    )
                    continue
                payload["customer_id"] = customer.id
                payload.pop("customer_name", None)
            results.append(self.add_rental(payload))
        return results

    def import_from_excel(
        self, workbook_path: Path, entity: ImportEntity | str
    ) -> ImportReport:
        """Parse a workbook and insert its valid rows."""
        parsed = excel_import.read_sheet(workbook_path, entity)
        return self.apply_import(parsed)

    def apply_import(self, parsed: excel_import.ParsedSheet) -> ImportReport:
        inserters = {
            ImportEntity.TOOLS: self.bulk_add_tools,
            ImportEntity.RENTALS: self.bulk_add_rentals,
            ImportEntity.CUSTOMERS: self.bulk_add_customers,
            ImportEntity.WORKERS: self.bulk_add_workers,
        }
        results = inserters[parsed.entity]([row.data for row in parsed.rows])
        report = ImportReport(entity=parsed.entity, errors=list(parsed.errors))
        for row, result in zip(parsed.rows, results):
            if result.ok:
                report.imported += 1
            else:
                report.errors.append(RowError(row.row_number, result.message))
        report.errors.sort(key=lambda error: error.row_number)
        self._logger.info(
            "Imported %s %s, skipped %s rows",
            report.imported,
            parsed.entity.value,
            report.skipped,
        )
        return report

    # Helpers ---------------------------------------------------------------

    @staticmethod
    def _find_by_name(items: Iterable[E], name: Any) -> Optional[E]:
        if not name:
            return None
        wanted = str(name).strip().casefold()
        for item in items:
            if getattr(item, "name").strip().casefold() == wanted:
                return item
        return None

    def _new_id(self, prefix: str) -> str:
        number = self._counters[prefix]
        self._counters[prefix] = number + 1
        return f"{prefix}{number}"

    def _applied(self, message: str, value: E) -> OperationResult[E]:
        self.recompute_stats()
        self._logger.info("%s", message)
        return OperationResult.applied(message, value)

    def _refuse(self, reason: str) -> OperationResult[Any]:
        self._logger.warning("Operation refused: %s", reason)
        return OperationResult.violation(reason)

    def _missing(self, entity: str, entity_id: str) -> OperationResult[Any]:
        result: OperationResult[Any] = OperationResult.not_found(entity, entity_id)
        self._logger.warning("%s", result.message)
        return result
