"""Screen widgets for the ToolRental UI."""

from tool_rental.ui.screens.customers_screen import CustomersScreen
from tool_rental.ui.screens.dashboard_screen import DashboardScreen
from tool_rental.ui.screens.inventory_screen import InventoryScreen
from tool_rental.ui.screens.reports_screen import ReportsScreen
from tool_rental.ui.screens.rentals_screen import RentalsScreen
from tool_rental.ui.screens.workers_screen import WorkersScreen

__all__ = [
    "CustomersScreen",
    "DashboardScreen",
    "InventoryScreen",
    "ReportsScreen",
    "RentalsScreen",
    "WorkersScreen",
]
