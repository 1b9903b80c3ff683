"""Screen for rentals: creation, returns and history."""

from __future__ import annotations

from typing import Any, List, Optional

from PySide6 import QtCore, QtWidgets

from tool_rental.domain.models import Customer, Rental, RentalStatus, Tool
from tool_rental.logging_config import get_logger
from tool_rental.services.errors import ValidationError
from tool_rental.services.excel_import import ImportEntity
from tool_rental.services.validation import validate_rental_form
from tool_rental.ui.app_services import AppServices
from tool_rental.ui.import_dialog import ImportDialog
from tool_rental.ui.screens.base_screen import BaseScreen
from tool_rental.ui.strings import RENTAL_STATUS_LABELS, TITLE_WARNING, format_money
from tool_rental.utils.csv_export import export_rentals_to_csv
from tool_rental.utils.dates import days_overdue, days_remaining, format_date


class RentalDialog(QtWidgets.QDialog):
    """Dialog for creating a rental."""

    def __init__(
        self,
        tools: List[Tool],
        customers: List[Customer],
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._tools = [tool for tool in tools if tool.available_quantity > 0]
        self._customers = customers
        self._data: dict[str, Any] = {}
        self.setWindowTitle("New Rental")
        self.setModal(True)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        form = QtWidgets.QFormLayout()
        self.tool_input = QtWidgets.QComboBox()
        self.tool_input.addItem("Select a tool", None)
        for tool in self._tools:
            self.tool_input.addItem(
                f"{tool.name} ({tool.available_quantity} available)", tool.id
            )
        self.tool_input.currentIndexChanged.connect(self._on_tool_changed)
        self.customer_input = QtWidgets.QComboBox()
        self.customer_input.addItem("Select a customer", None)
        for customer in self._customers:
            self.customer_input.addItem(customer.name, customer.id)
        self.quantity_input = QtWidgets.QSpinBox()
        self.quantity_input.setRange(1, 1_000_000)
        today = QtCore.QDate.currentDate()
        self.start_input = QtWidgets.QDateEdit(today)
        self.start_input.setCalendarPopup(True)
        self.start_input.setDisplayFormat("dd/MM/yyyy")
        self.return_input = QtWidgets.QDateEdit(today.addDays(7))
        self.return_input.setCalendarPopup(True)
        self.return_input.setDisplayFormat("dd/MM/yyyy")
        self.rate_label = QtWidgets.QLabel("-")

        form.addRow("Tool:", self.tool_input)
        form.addRow("Customer:", self.customer_input)
        form.addRow("Quantity:", self.quantity_input)
        form.addRow("Start date:", self.start_input)
        form.addRow("Expected return:", self.return_input)
        form.addRow("Rate per day:", self.rate_label)
        layout.addLayout(form)

        self.button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Save | QtWidgets.QDialogButtonBox.Cancel
        )
        self.button_box.accepted.connect(self._on_accept)
        self.button_box.rejected.connect(self.reject)
        layout.addWidget(self.button_box)

    def _selected_tool(self) -> Optional[Tool]:
        tool_id = self.tool_input.currentData()
        return next((tool for tool in self._tools if tool.id == tool_id), None)

    def _on_tool_changed(self) -> None:
        tool = self._selected_tool()
        self.rate_label.setText(format_money(tool.rate_per_day) if tool else "-")
        if tool:
            self.quantity_input.setMaximum(tool.available_quantity)

    def _on_accept(self) -> None:
        try:
            self._data = validate_rental_form(
                {
                    "tool_id": self.tool_input.currentData(),
                    "customer_id": self.customer_input.currentData(),
                    "quantity": self.quantity_input.value(),
                    "start_date": self.start_input.date().toPython(),
                    "expected_return_date": self.return_input.date().toPython(),
                },
                self._selected_tool(),
            )
        except ValidationError as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            return
        self.accept()

    def get_data(self) -> dict[str, Any]:
        return dict(self._data)


class RentalsScreen(BaseScreen):
    """Screen listing rentals with their current status."""

    def __init__(self, services: AppServices) -> None:
        super().__init__(services)
        self._rentals: List[Rental] = []
        self._logger = get_logger(self.__class__.__name__)
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        self._build_header(layout, "Rentals", "Create rentals and record returns.")

        search_layout = QtWidgets.QHBoxLayout()
        self.search_input = QtWidgets.QLineEdit()
        self.search_input.setPlaceholderText("Search by tool or customer...")
        self.search_input.setText(self.store.rentals_filter)
        self.search_input.textChanged.connect(self._on_search_changed)
        self.status_input = QtWidgets.QComboBox()
        self.status_input.addItem("All statuses", None)
        for status, label in RENTAL_STATUS_LABELS.items():
            self.status_input.addItem(label, status)
        self.status_input.currentIndexChanged.connect(self._on_status_changed)
        search_layout.addWidget(QtWidgets.QLabel("Search:"))
        search_layout.addWidget(self.search_input)
        search_layout.addWidget(self.status_input)
        layout.addLayout(search_layout)

        button_layout = QtWidgets.QHBoxLayout()
        self.new_button = QtWidgets.QPushButton("New Rental")
        self.return_button = QtWidgets.QPushButton("Mark Returned")
        self.cancel_button = QtWidgets.QPushButton("Cancel Rental")
        self.delete_button = QtWidgets.QPushButton("Delete")
        self.export_button = QtWidgets.QPushButton("Export CSV")
        self.import_button = QtWidgets.QPushButton("Import Excel")
        self.new_button.clicked.connect(self._on_new)
        self.return_button.clicked.connect(self._on_return)
        self.cancel_button.clicked.connect(self._on_cancel)
        self.delete_button.clicked.connect(self._on_delete)
        self.export_button.clicked.connect(self._on_export)
        self.import_button.clicked.connect(
            lambda: ImportDialog(self._services, ImportEntity.RENTALS, self).exec()
        )
        for button in (
            self.new_button,
            self.return_button,
            self.cancel_button,
            self.delete_button,
            self.export_button,
            self.import_button,
        ):
            button_layout.addWidget(button)
        button_layout.addStretch()
        layout.addLayout(button_layout)

        self.table = self._build_table(
            [
                "ID",
                "Tool",
                "Qty",
                "Customer",
                "Start",
                "Expected Return",
                "Returned",
                "Rate/Day",
                "Status",
                "Days",
            ]
        )
        self.table.itemSelectionChanged.connect(self._on_selection_changed)
        layout.addWidget(self.table)

    def _on_search_changed(self, text: str) -> None:
        self.store.rentals_filter = text
        self.refresh()

    def _on_status_changed(self) -> None:
        self.store.rentals_status_filter = self.status_input.currentData()
        self.refresh()

    def refresh(self) -> None:
        today = self.store.today()
        self._rentals = self.store.filtered_rentals()
        self.table.setRowCount(len(self._rentals))
        for row, rental in enumerate(self._rentals):
            status = self.store.rental_status(rental)
            if status == RentalStatus.OVERDUE:
                days = f"{days_overdue(rental.expected_return_date, today)} days overdue"
            elif status == RentalStatus.ACTIVE:
                days = f"{days_remaining(rental.expected_return_date, today)} days left"
            else:
                days = "-"
            values = [
                f"#{rental.id[1:]}",
                rental.tool_name,
                str(rental.quantity),
                rental.customer_name,
                format_date(rental.start_date),
                format_date(rental.expected_return_date),
                format_date(rental.actual_return_date) if rental.actual_return_date else "-",
                format_money(rental.rate_per_day),
                RENTAL_STATUS_LABELS[status],
                days,
            ]
            for column, value in enumerate(values):
                self.table.setItem(row, column, QtWidgets.QTableWidgetItem(value))
        self.table.resizeRowsToContents()
        self._on_selection_changed()

    def _selected_rental(self) -> Optional[Rental]:
        row = self._selected_row(self.table)
        if row is None or row >= len(self._rentals):
            return None
        return self._rentals[row]

    def _on_selection_changed(self) -> None:
        rental = self._selected_rental()
        is_open = rental is not None and rental.is_open
        self.return_button.setEnabled(is_open)
        self.cancel_button.setEnabled(is_open)
        self.delete_button.setEnabled(rental is not None)

    def _on_new(self) -> None:
        dialog = RentalDialog(list(self.store.tools), list(self.store.customers), self)
        if dialog.exec() != QtWidgets.QDialog.Accepted:
            return
        self._report(self.store.add_rental(dialog.get_data()))

    def _on_return(self) -> None:
        rental = self._selected_rental()
        if not rental:
            return
        if not self._confirm(
            f"Mark {rental.quantity} x {rental.tool_name} as returned by "
            f"{rental.customer_name}?"
        ):
            return
        self._report(self.store.mark_rental_as_returned(rental.id))

    def _on_cancel(self) -> None:
        rental = self._selected_rental()
        if not rental:
            return
        if not self._confirm(f"Cancel the rental for {rental.customer_name}?"):
            return
        self._report(self.store.cancel_rental(rental.id))

    def _on_delete(self) -> None:
        rental = self._selected_rental()
        if not rental:
            return
        if not self._confirm(f"Delete rental #{rental.id[1:]}? This cannot be undone."):
            return
        self._report(self.store.delete_rental(rental.id))

    def _on_export(self) -> None:
        try:
            path = export_rentals_to_csv(
                self.store.rentals, self._services.exports_dir, self.store.today()
            )
        except OSError:
            self._logger.exception("Failed to export rentals")
            self._show_error("Could not write the CSV file.")
            return
        self._show_success(f"File saved to:\n{path}")

