"""Domain models for ToolRental Manager."""

from tool_rental.domain.models import (
    OPEN_RENTAL_STATUSES,
    WORKER_ROLES,
    AttendanceRecord,
    AttendanceStatus,
    AttendanceSummary,
    Customer,
    DailyRevenue,
    DashboardStats,
    Rental,
    RentalStatus,
    RevenueSummary,
    Tool,
    User,
    Worker,
)

__all__ = [
    "AttendanceRecord",
    "AttendanceStatus",
    "AttendanceSummary",
    "Customer",
    "DailyRevenue",
    "DashboardStats",
    "OPEN_RENTAL_STATUSES",
    "Rental",
    "RentalStatus",
    "RevenueSummary",
    "Tool",
    "User",
    "WORKER_ROLES",
    "Worker",
]
