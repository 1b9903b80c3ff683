"""Domain dataclasses and enums."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class RentalStatus(str, Enum):
    ACTIVE = "active"
    OVERDUE = "overdue"
    RETURNED = "returned"
    CANCELLED = "cancelled"


OPEN_RENTAL_STATUSES = (RentalStatus.ACTIVE, RentalStatus.OVERDUE)


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half-day"
    LEAVE = "leave"


WORKER_ROLES = ("Supervisor", "Helper", "Driver", "Accountant", "Other")


@dataclass(slots=True)
class Tool:
    id: str
    name: str
    category: str
    total_quantity: int
    available_quantity: int
    rate_per_day: float
    image_url: Optional[str] = None

    @property
    def rented_quantity(self) -> int:
        return self.total_quantity - self.available_quantity


@dataclass(slots=True)
class Customer:
    id: str
    name: str
    phone_number: str
    address: str
    total_rentals: int = 0
    active_rentals: int = 0


@dataclass(slots=True)
class Rental:
    id: str
    tool_id: str
    tool_name: str
    quantity: int
    customer_id: str
    customer_name: str
    start_date: date
    expected_return_date: date
    rate_per_day: float
    status: RentalStatus = RentalStatus.ACTIVE
    actual_return_date: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_RENTAL_STATUSES


@dataclass(slots=True)
class Worker:
    id: str
    name: str
    phone_number: str
    role: str
    joining_date: date


@dataclass(slots=True)
class AttendanceRecord:
    id: str
    worker_id: str
    worker_name: str
    date: date
    status: AttendanceStatus


@dataclass(frozen=True, slots=True)
class User:
    """Signed-in identity kept by the session manager."""

    id: str
    email: str
    name: str


@dataclass(frozen=True, slots=True)
class DailyRevenue:
    day: str
    amount: float


@dataclass(frozen=True, slots=True)
class RevenueSummary:
    """Revenue of one calendar month derived from the rental ledger."""

    current_month: str
    current_year: int
    total_revenue: float = 0.0
    revenue_by_tool: dict[str, float] = field(default_factory=dict)
    revenue_by_customer: dict[str, float] = field(default_factory=dict)
    daily_revenue: tuple[DailyRevenue, ...] = ()


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_tools: int = 0
    available_tools: int = 0
    rented_tools: int = 0
    active_rentals: int = 0
    overdue_rentals: int = 0
    monthly_revenue: float = 0.0
    today_new_rentals: int = 0
    today_returns: int = 0


@dataclass(frozen=True, slots=True)
class AttendanceSummary:
    present: int = 0
    absent: int = 0
    half_day: int = 0
    leave: int = 0
