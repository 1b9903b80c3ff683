"""Monthly revenue report."""

from __future__ import annotations

from PySide6 import QtWidgets

from tool_rental.logging_config import get_logger
from tool_rental.ui.app_services import AppServices
from tool_rental.ui.screens.base_screen import BaseScreen
from tool_rental.ui.strings import format_money
from tool_rental.ui.widgets.cards import KpiCard
from tool_rental.utils.csv_export import export_revenue_to_csv


class ReportsScreen(BaseScreen):
    """Revenue for the current month, broken down by tool, customer and day."""

    def __init__(self, services: AppServices) -> None:
        super().__init__(services)
        self._logger = get_logger(self.__class__.__name__)
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        self._build_header(layout, "Reports", "Revenue earned by rentals this month.")

        top_layout = QtWidgets.QHBoxLayout()
        self.total_card = KpiCard(self._services.theme_manager, "Total Revenue")
        top_layout.addWidget(self.total_card)
        top_layout.addStretch()
        self.export_button = QtWidgets.QPushButton("Export CSV")
        self.export_button.clicked.connect(self._on_export)
        top_layout.addWidget(self.export_button)
        layout.addLayout(top_layout)

        tables = QtWidgets.QHBoxLayout()
        self.tool_table = self._build_table(["Tool", "Revenue"])
        self.customer_table = self._build_table(["Customer", "Revenue"])
        self.daily_table = self._build_table(["Day", "Revenue"])
        for title, table in (
            ("By tool", self.tool_table),
            ("By customer", self.customer_table),
            ("By day", self.daily_table),
        ):
            column = QtWidgets.QVBoxLayout()
            label = QtWidgets.QLabel(title)
            label.setStyleSheet("font-weight: 600;")
            column.addWidget(label)
            column.addWidget(table)
            tables.addLayout(column)
        layout.addLayout(tables)

    def refresh(self) -> None:
        self.store.recompute_stats()
        revenue = self.store.revenue
        self.total_card.set_value(
            format_money(revenue.total_revenue),
            f"{revenue.current_month} {revenue.current_year}",
        )
        self._fill(self.tool_table, revenue.revenue_by_tool.items())
        self._fill(self.customer_table, revenue.revenue_by_customer.items())
        self._fill(
            self.daily_table,
            [(entry.day, entry.amount) for entry in revenue.daily_revenue],
        )

    def _fill(self, table: QtWidgets.QTableWidget, rows) -> None:
        rows = list(rows)
        table.setRowCount(len(rows))
        for row, (label, amount) in enumerate(rows):
            table.setItem(row, 0, QtWidgets.QTableWidgetItem(label))
            table.setItem(row, 1, QtWidgets.QTableWidgetItem(format_money(amount)))
        table.resizeRowsToContents()

    def _on_export(self) -> None:
        try:
            path = export_revenue_to_csv(
                self.store.revenue, self._services.exports_dir, self.store.today()
            )
        except OSError:
            self._logger.exception("Failed to export revenue")
            self._show_error("Could not write the CSV file.")
            return
        self._show_success(f"File saved to:\n{path}")
