"""Screen for customer management."""

from __future__ import annotations

import dataclasses
from typing import Any, List, Optional

from PySide6 import QtWidgets

from tool_rental.domain.models import Customer
from tool_rental.logging_config import get_logger
from tool_rental.services.errors import ValidationError
from tool_rental.services.excel_import import ImportEntity
from tool_rental.services.validation import validate_customer_form
from tool_rental.ui.app_services import AppServices
from tool_rental.ui.import_dialog import ImportDialog
from tool_rental.ui.screens.base_screen import BaseScreen
from tool_rental.ui.strings import TITLE_WARNING
from tool_rental.utils.csv_export import export_customers_to_csv


class CustomerDialog(QtWidgets.QDialog):
    """Dialog for creating or editing a customer."""

    def __init__(
        self,
        parent: QtWidgets.QWidget | None = None,
        customer: Optional[Customer] = None,
    ) -> None:
        super().__init__(parent)
        self._data: dict[str, Any] = {}
        self.setWindowTitle("Edit Customer" if customer else "Add Customer")
        self.setModal(True)
        self._build_ui()
        if customer:
            self.name_input.setText(customer.name)
            self.phone_input.setText(customer.phone_number)
            self.address_input.setPlainText(customer.address)

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        form = QtWidgets.QFormLayout()
        self.name_input = QtWidgets.QLineEdit()
        self.phone_input = QtWidgets.QLineEdit()
        self.phone_input.setPlaceholderText("10 digit phone number")
        self.address_input = QtWidgets.QPlainTextEdit()
        self.address_input.setFixedHeight(80)

        form.addRow("Name:", self.name_input)
        form.addRow("Phone:", self.phone_input)
        form.addRow("Address:", self.address_input)
        layout.addLayout(form)

        self.button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Save | QtWidgets.QDialogButtonBox.Cancel
        )
        self.button_box.accepted.connect(self._on_accept)
        self.button_box.rejected.connect(self.reject)
        layout.addWidget(self.button_box)

    def _on_accept(self) -> None:
        try:
            self._data = validate_customer_form(
                {
                    "name": self.name_input.text(),
                    "phone_number": self.phone_input.text(),
                    "address": self.address_input.toPlainText(),
                }
            )
        except ValidationError as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            return
        self.accept()

    def get_data(self) -> dict[str, Any]:
        return dict(self._data)


class CustomersScreen(BaseScreen):
    """Screen for customers."""

    def __init__(self, services: AppServices) -> None:
        super().__init__(services)
        self._customers: List[Customer] = []
        self._logger = get_logger(self.__class__.__name__)
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        self._build_header(
            layout, "Customers", "Register customers and follow their rentals."
        )

        search_layout = QtWidgets.QHBoxLayout()
        self.search_input = QtWidgets.QLineEdit()
        self.search_input.setPlaceholderText("Search by name, phone or address...")
        self.search_input.setText(self.store.customers_filter)
        self.search_input.textChanged.connect(self._on_search_changed)
        search_layout.addWidget(QtWidgets.QLabel("Search:"))
        search_layout.addWidget(self.search_input)
        layout.addLayout(search_layout)

        button_layout = QtWidgets.QHBoxLayout()
        self.new_button = QtWidgets.QPushButton("Add Customer")
        self.edit_button = QtWidgets.QPushButton("Edit")
        self.delete_button = QtWidgets.QPushButton("Delete")
        self.export_button = QtWidgets.QPushButton("Export CSV")
        self.import_button = QtWidgets.QPushButton("Import Excel")
        self.new_button.clicked.connect(self._on_new)
        self.edit_button.clicked.connect(self._on_edit)
        self.delete_button.clicked.connect(self._on_delete)
        self.export_button.clicked.connect(self._on_export)
        self.import_button.clicked.connect(
            lambda: ImportDialog(self._services, ImportEntity.CUSTOMERS, self).exec()
        )
        for button in (
            self.new_button,
            self.edit_button,
            self.delete_button,
            self.export_button,
            self.import_button,
        ):
            button_layout.addWidget(button)
        button_layout.addStretch()
        layout.addLayout(button_layout)

        self.table = self._build_table(
            ["Name", "Phone", "Address", "Total Rentals", "Active Rentals"]
        )
        self.table.itemSelectionChanged.connect(self._on_selection_changed)
        layout.addWidget(self.table)

    def _on_search_changed(self, text: str) -> None:
        self.store.customers_filter = text
        self.refresh()

    def refresh(self) -> None:
        self._customers = self.store.filtered_customers()
        self.table.setRowCount(len(self._customers))
        for row, customer in enumerate(self._customers):
            values = [
                customer.name,
                customer.phone_number,
                customer.address,
                str(customer.total_rentals),
                str(customer.active_rentals),
            ]
            for column, value in enumerate(values):
                self.table.setItem(row, column, QtWidgets.QTableWidgetItem(value))
        self.table.resizeRowsToContents()
        self._on_selection_changed()

    def _selected_customer(self) -> Optional[Customer]:
        row = self._selected_row(self.table)
        if row is None or row >= len(self._customers):
            return None
        return self._customers[row]

    def _on_selection_changed(self) -> None:
        has_selection = self._selected_customer() is not None
        self.edit_button.setEnabled(has_selection)
        self.delete_button.setEnabled(has_selection)

    def _on_new(self) -> None:
        dialog = CustomerDialog(self)
        if dialog.exec() != QtWidgets.QDialog.Accepted:
            return
        self._report(self.store.add_customer(dialog.get_data()))

    def _on_edit(self) -> None:
        customer = self._selected_customer()
        if not customer:
            return
        dialog = CustomerDialog(self, customer=customer)
        if dialog.exec() != QtWidgets.QDialog.Accepted:
            return
        self._report(
            self.store.update_customer(dataclasses.replace(customer, **dialog.get_data()))
        )

    def _on_delete(self) -> None:
        customer = self._selected_customer()
        if not customer:
            return
        if not self._confirm(f"Are you sure you want to delete '{customer.name}'?"):
            return
        self._report(self.store.delete_customer(customer.id))

    def _on_export(self) -> None:
        try:
            path = export_customers_to_csv(self.store.customers, self._services.exports_dir)
        except OSError:
            self._logger.exception("Failed to export customers")
            self._show_error("Could not write the CSV file.")
            return
        self._show_success(f"File saved to:\n{path}")
