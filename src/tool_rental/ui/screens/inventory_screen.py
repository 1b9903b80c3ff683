"""Screen for tool inventory management."""

from __future__ import annotations

import dataclasses
from typing import Any, List, Optional

from PySide6 import QtCore, QtWidgets

from tool_rental.config import CURRENCY_SYMBOL
from tool_rental.domain.models import Tool
from tool_rental.logging_config import get_logger
from tool_rental.services.errors import ValidationError
from tool_rental.services.excel_import import ImportEntity
from tool_rental.services.validation import validate_tool_form
from tool_rental.ui.app_services import AppServices
from tool_rental.ui.import_dialog import ImportDialog
from tool_rental.ui.screens.base_screen import BaseScreen
from tool_rental.ui.strings import TITLE_WARNING, format_money
from tool_rental.utils.csv_export import export_tools_to_csv


class ToolDialog(QtWidgets.QDialog):
    """Dialog for creating or editing a tool."""

    def __init__(
        self,
        parent: QtWidgets.QWidget | None = None,
        tool: Optional[Tool] = None,
    ) -> None:
        super().__init__(parent)
        self._tool = tool
        self._data: dict[str, Any] = {}
        self.setWindowTitle("Edit Tool" if tool else "Add Tool")
        self.setModal(True)
        self._build_ui()
        if tool:
            self._load_tool(tool)

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        form = QtWidgets.QFormLayout()
        self.name_input = QtWidgets.QLineEdit()
        self.category_input = QtWidgets.QLineEdit()
        self.total_qty_input = QtWidgets.QSpinBox()
        self.total_qty_input.setRange(0, 1_000_000)
        self.rate_input = QtWidgets.QDoubleSpinBox()
        self.rate_input.setRange(0.0, 1_000_000.0)
        self.rate_input.setDecimals(2)
        self.rate_input.setPrefix(f"{CURRENCY_SYMBOL} ")
        self.image_input = QtWidgets.QLineEdit()
        self.image_input.setPlaceholderText("Optional image URL")

        form.addRow("Name:", self.name_input)
        form.addRow("Category:", self.category_input)
        form.addRow("Total quantity:", self.total_qty_input)
        form.addRow("Rate per day:", self.rate_input)
        form.addRow("Image URL:", self.image_input)
        layout.addLayout(form)

        self.button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Save | QtWidgets.QDialogButtonBox.Cancel
        )
        self.button_box.accepted.connect(self._on_accept)
        self.button_box.rejected.connect(self.reject)
        layout.addWidget(self.button_box)

    def _load_tool(self, tool: Tool) -> None:
        self.name_input.setText(tool.name)
        self.category_input.setText(tool.category)
        self.total_qty_input.setValue(tool.total_quantity)
        self.rate_input.setValue(tool.rate_per_day)
        self.image_input.setText(tool.image_url or "")

    def _on_accept(self) -> None:
        try:
            self._data = validate_tool_form(
                {
                    "name": self.name_input.text(),
                    "category": self.category_input.text(),
                    "total_quantity": self.total_qty_input.value(),
                    "rate_per_day": self.rate_input.value(),
                    "image_url": self.image_input.text(),
                }
            )
        except ValidationError as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            return
        self.accept()

    def get_data(self) -> dict[str, Any]:
        return dict(self._data)


class InventoryScreen(BaseScreen):
    """Screen listing tools with their availability."""

    def __init__(self, services: AppServices) -> None:
        super().__init__(services)
        self._tools: List[Tool] = []
        self._logger = get_logger(self.__class__.__name__)
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        self._build_header(layout, "Inventory", "Track tools, stock and daily rates.")

        search_layout = QtWidgets.QHBoxLayout()
        self.search_input = QtWidgets.QLineEdit()
        self.search_input.setPlaceholderText("Search tools...")
        self.search_input.setText(self.store.tools_filter)
        self.search_input.textChanged.connect(self._on_search_changed)
        search_layout.addWidget(QtWidgets.QLabel("Search:"))
        search_layout.addWidget(self.search_input)
        layout.addLayout(search_layout)

        button_layout = QtWidgets.QHBoxLayout()
        self.new_button = QtWidgets.QPushButton("Add Tool")
        self.edit_button = QtWidgets.QPushButton("Edit")
        self.delete_button = QtWidgets.QPushButton("Delete")
        self.export_button = QtWidgets.QPushButton("Export CSV")
        self.import_button = QtWidgets.QPushButton("Import Excel")
        self.new_button.clicked.connect(self._on_new)
        self.edit_button.clicked.connect(self._on_edit)
        self.delete_button.clicked.connect(self._on_delete)
        self.export_button.clicked.connect(self._on_export)
        self.import_button.clicked.connect(self._on_import)
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
            ["Name", "Category", "Total", "Available", "Rented", "Rate/Day"]
        )
        self.table.itemSelectionChanged.connect(self._on_selection_changed)
        self.table.doubleClicked.connect(lambda _index: self._on_edit())
        layout.addWidget(self.table)

        self.empty_label = QtWidgets.QLabel("No tools found.")
        self.empty_label.setAlignment(QtCore.Qt.AlignCenter)
        layout.addWidget(self.empty_label)

    def _on_search_changed(self, text: str) -> None:
        self.store.tools_filter = text
        self.refresh()

    def refresh(self) -> None:
        self._tools = self.store.filtered_tools()
        self.table.setRowCount(len(self._tools))
        for row, tool in enumerate(self._tools):
            values = [
                tool.name,
                tool.category,
                str(tool.total_quantity),
                str(tool.available_quantity),
                str(tool.rented_quantity),
                format_money(tool.rate_per_day),
            ]
            for column, value in enumerate(values):
                self.table.setItem(row, column, QtWidgets.QTableWidgetItem(value))
        self.table.resizeRowsToContents()
        self.empty_label.setVisible(not self._tools)
        self._on_selection_changed()

    def _selected_tool(self) -> Optional[Tool]:
        row = self._selected_row(self.table)
        if row is None or row >= len(self._tools):
            return None
        return self._tools[row]

    def _on_selection_changed(self) -> None:
        has_selection = self._selected_tool() is not None
        self.edit_button.setEnabled(has_selection)
        self.delete_button.setEnabled(has_selection)

    def _on_new(self) -> None:
        dialog = ToolDialog(self)
        if dialog.exec() != QtWidgets.QDialog.Accepted:
            return
        self._report(self.store.add_tool(dialog.get_data()))

    def _on_edit(self) -> None:
        tool = self._selected_tool()
        if not tool:
            return
        dialog = ToolDialog(self, tool=tool)
        if dialog.exec() != QtWidgets.QDialog.Accepted:
            return
        self._report(self.store.update_tool(dataclasses.replace(tool, **dialog.get_data())))

    def _on_delete(self) -> None:
        tool = self._selected_tool()
        if not tool:
            return
        if not self._confirm(f"Delete '{tool.name}' from the inventory?"):
            return
        self._report(self.store.delete_tool(tool.id))

    def _on_export(self) -> None:
        try:
            path = export_tools_to_csv(self.store.tools, self._services.exports_dir)
        except OSError:
            self._logger.exception("Failed to export tools")
            self._show_error("Could not write the CSV file.")
            return
        self._show_success(f"File saved to:\n{path}")

    def _on_import(self) -> None:
        ImportDialog(self._services, ImportEntity.TOOLS, self).exec()
