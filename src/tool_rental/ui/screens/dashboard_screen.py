"""Dashboard screen with headline figures and rentals needing attention."""

from __future__ import annotations

from PySide6 import QtWidgets

from tool_rental.domain.models import RentalStatus
from tool_rental.ui.app_services import AppServices
from tool_rental.ui.screens.base_screen import BaseScreen
from tool_rental.ui.strings import format_money
from tool_rental.ui.widgets.cards import KpiCard
from tool_rental.utils.dates import days_overdue, format_date


class DashboardScreen(BaseScreen):
    """Overview of inventory, rentals and this month's revenue."""

    def __init__(self, services: AppServices) -> None:
        super().__init__(services)
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        self._build_header(layout, "Dashboard", "Today's snapshot of the business.")

        theme_manager = self._services.theme_manager
        self.total_card = KpiCard(theme_manager, "Total Tools")
        self.available_card = KpiCard(theme_manager, "Available")
        self.rented_card = KpiCard(theme_manager, "Rented Out")
        self.active_card = KpiCard(theme_manager, "Active Rentals")
        self.overdue_card = KpiCard(theme_manager, "Overdue")
        self.revenue_card = KpiCard(theme_manager, "Monthly Revenue", format_money(0))
        self.new_card = KpiCard(theme_manager, "New Today")
        self.returns_card = KpiCard(theme_manager, "Returns Today")

        grid = QtWidgets.QGridLayout()
        grid.setHorizontalSpacing(12)
        grid.setVerticalSpacing(12)
        cards = [
            self.total_card,
            self.available_card,
            self.rented_card,
            self.active_card,
            self.overdue_card,
            self.revenue_card,
            self.new_card,
            self.returns_card,
        ]
        for index, card in enumerate(cards):
            grid.addWidget(card, index // 4, index % 4)
        layout.addLayout(grid)

        overdue_title = QtWidgets.QLabel("Overdue rentals")
        overdue_title.setStyleSheet("font-size: 16px; font-weight: 600;")
        layout.addWidget(overdue_title)
        self.overdue_table = self._build_table(
            ["Tool", "Qty", "Customer", "Expected Return", "Days Overdue"]
        )
        layout.addWidget(self.overdue_table)

    def refresh(self) -> None:
        stats = self.store.recompute_stats()
        revenue = self.store.revenue
        self.total_card.set_value(str(stats.total_tools))
        self.available_card.set_value(str(stats.available_tools))
        self.rented_card.set_value(str(stats.rented_tools))
        self.active_card.set_value(str(stats.active_rentals))
        self.overdue_card.set_value(str(stats.overdue_rentals))
        self.revenue_card.set_value(
            format_money(stats.monthly_revenue),
            f"{revenue.current_month} {revenue.current_year}",
        )
        self.new_card.set_value(str(stats.today_new_rentals))
        self.returns_card.set_value(str(stats.today_returns))

        today = self.store.today()
        overdue = [
            rental
            for rental in self.store.rentals
            if self.store.rental_status(rental) == RentalStatus.OVERDUE
        ]
        overdue.sort(key=lambda rental: rental.expected_return_date)
        self.overdue_table.setRowCount(len(overdue))
        for row, rental in enumerate(overdue):
            values = [
                rental.tool_name,
                str(rental.quantity),
                rental.customer_name,
                format_date(rental.expected_return_date),
                str(days_overdue(rental.expected_return_date, today)),
            ]
            for column, value in enumerate(values):
                self.overdue_table.setItem(row, column, QtWidgets.QTableWidgetItem(value))
        self.overdue_table.resizeRowsToContents()
