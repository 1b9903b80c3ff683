"""Screen for workers and daily attendance."""

from __future__ import annotations

import dataclasses
from datetime import date
from typing import Any, List, Optional

from PySide6 import QtCore, QtWidgets

from tool_rental.domain.models import WORKER_ROLES, AttendanceStatus, Worker
from tool_rental.logging_config import get_logger
from tool_rental.services.errors import ValidationError
from tool_rental.services.excel_import import ImportEntity
from tool_rental.services.validation import validate_worker_form
from tool_rental.ui.app_services import AppServices
from tool_rental.ui.import_dialog import ImportDialog
from tool_rental.ui.screens.base_screen import BaseScreen
from tool_rental.ui.strings import ATTENDANCE_STATUS_LABELS, TITLE_WARNING
from tool_rental.utils.csv_export import export_attendance_to_csv, export_workers_to_csv
from tool_rental.utils.dates import format_date


class WorkerDialog(QtWidgets.QDialog):
    """Dialog for creating or editing a worker."""

    def __init__(
        self,
        parent: QtWidgets.QWidget | None = None,
        worker: Optional[Worker] = None,
    ) -> None:
        super().__init__(parent)
        self._data: dict[str, Any] = {}
        self.setWindowTitle("Edit Worker" if worker else "Add Worker")
        self.setModal(True)
        self._build_ui()
        if worker:
            self.name_input.setText(worker.name)
            self.phone_input.setText(worker.phone_number)
            self.role_input.setCurrentText(worker.role)
            self.joining_input.setDate(QtCore.QDate(worker.joining_date))

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        form = QtWidgets.QFormLayout()
        self.name_input = QtWidgets.QLineEdit()
        self.phone_input = QtWidgets.QLineEdit()
        self.role_input = QtWidgets.QComboBox()
        self.role_input.setEditable(True)
        self.role_input.addItems(list(WORKER_ROLES))
        self.joining_input = QtWidgets.QDateEdit(QtCore.QDate.currentDate())
        self.joining_input.setCalendarPopup(True)
        self.joining_input.setDisplayFormat("dd/MM/yyyy")

        form.addRow("Name:", self.name_input)
        form.addRow("Phone:", self.phone_input)
        form.addRow("Role:", self.role_input)
        form.addRow("Joining date:", self.joining_input)
        layout.addLayout(form)

        self.button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Save | QtWidgets.QDialogButtonBox.Cancel
        )
        self.button_box.accepted.connect(self._on_accept)
        self.button_box.rejected.connect(self.reject)
        layout.addWidget(self.button_box)

    def _on_accept(self) -> None:
        try:
            self._data = validate_worker_form(
                {
                    "name": self.name_input.text(),
                    "phone_number": self.phone_input.text(),
                    "role": self.role_input.currentText(),
                    "joining_date": self.joining_input.date().toPython(),
                }
            )
        except ValidationError as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            return
        self.accept()

    def get_data(self) -> dict[str, Any]:
        return dict(self._data)


class AttendanceDialog(QtWidgets.QDialog):
    """Dialog for marking one worker's attendance on a day."""

    def __init__(
        self,
        workers: List[Worker],
        day: date,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._workers = workers
        self.setWindowTitle("Mark Attendance")
        self.setModal(True)

        layout = QtWidgets.QVBoxLayout(self)
        form = QtWidgets.QFormLayout()
        self.worker_input = QtWidgets.QComboBox()
        for worker in workers:
            self.worker_input.addItem(worker.name, worker.id)
        self.date_input = QtWidgets.QDateEdit(QtCore.QDate(day))
        self.date_input.setCalendarPopup(True)
        self.date_input.setDisplayFormat("dd/MM/yyyy")
        self.status_input = QtWidgets.QComboBox()
        for status, label in ATTENDANCE_STATUS_LABELS.items():
            self.status_input.addItem(label, status)
        form.addRow("Worker:", self.worker_input)
        form.addRow("Date:", self.date_input)
        form.addRow("Status:", self.status_input)
        layout.addLayout(form)

        button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Save | QtWidgets.QDialogButtonBox.Cancel
        )
        button_box.accepted.connect(self._on_accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

    def _on_accept(self) -> None:
        if self.worker_input.currentData() is None:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, "Please select a worker")
            return
        self.accept()

    def get_data(self) -> tuple[str, str, date, AttendanceStatus]:
        return (
            self.worker_input.currentData(),
            self.worker_input.currentText(),
            self.date_input.date().toPython(),
            self.status_input.currentData(),
        )


class WorkersScreen(BaseScreen):
    """Screen with the worker list and the attendance register."""

    def __init__(self, services: AppServices) -> None:
        super().__init__(services)
        self._workers: List[Worker] = []
        self._logger = get_logger(self.__class__.__name__)
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        self._build_header(layout, "Workers", "Manage staff and record daily attendance.")

        tabs = QtWidgets.QTabWidget()
        tabs.addTab(self._build_workers_tab(), "Workers")
        tabs.addTab(self._build_attendance_tab(), "Attendance")
        layout.addWidget(tabs)

    def _build_workers_tab(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(page)

        search_layout = QtWidgets.QHBoxLayout()
        self.search_input = QtWidgets.QLineEdit()
        self.search_input.setPlaceholderText("Search by name, phone or role...")
        self.search_input.setText(self.store.workers_filter)
        self.search_input.textChanged.connect(self._on_search_changed)
        search_layout.addWidget(QtWidgets.QLabel("Search:"))
        search_layout.addWidget(self.search_input)
        layout.addLayout(search_layout)

        button_layout = QtWidgets.QHBoxLayout()
        self.new_button = QtWidgets.QPushButton("Add Worker")
        self.edit_button = QtWidgets.QPushButton("Edit")
        self.delete_button = QtWidgets.QPushButton("Delete")
        self.export_button = QtWidgets.QPushButton("Export CSV")
        self.import_button = QtWidgets.QPushButton("Import Excel")
        self.new_button.clicked.connect(self._on_new)
        self.edit_button.clicked.connect(self._on_edit)
        self.delete_button.clicked.connect(self._on_delete)
        self.export_button.clicked.connect(self._on_export_workers)
        self.import_button.clicked.connect(
            lambda: ImportDialog(self._services, ImportEntity.WORKERS, self).exec()
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
            ["Name", "Phone", "Role", "Joined", "Present", "Absent", "Half Day", "Leave"]
        )
        self.table.itemSelectionChanged.connect(self._on_selection_changed)
        layout.addWidget(self.table)
        return page

    def _build_attendance_tab(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(page)

        controls = QtWidgets.QHBoxLayout()
        self.date_input = QtWidgets.QDateEdit(QtCore.QDate.currentDate())
        self.date_input.setCalendarPopup(True)
        self.date_input.setDisplayFormat("dd/MM/yyyy")
        self.date_input.dateChanged.connect(lambda _date: self._render_attendance())
        self.mark_button = QtWidgets.QPushButton("Mark Attendance")
        self.mark_button.clicked.connect(self._on_mark_attendance)
        self.export_attendance_button = QtWidgets.QPushButton("Export CSV")
        self.export_attendance_button.clicked.connect(self._on_export_attendance)
        controls.addWidget(QtWidgets.QLabel("Date:"))
        controls.addWidget(self.date_input)
        controls.addWidget(self.mark_button)
        controls.addWidget(self.export_attendance_button)
        controls.addStretch()
        layout.addLayout(controls)

        self.attendance_table = self._build_table(["Worker", "Date", "Status"])
        layout.addWidget(self.attendance_table)
        return page

    def _on_search_changed(self, text: str) -> None:
        self.store.workers_filter = text
        self.refresh()

    def refresh(self) -> None:
        self._workers = self.store.filtered_workers()
        self.table.setRowCount(len(self._workers))
        for row, worker in enumerate(self._workers):
            summary = self.store.attendance_summary(worker.id)
            values = [
                worker.name,
                worker.phone_number,
                worker.role,
                format_date(worker.joining_date),
                str(summary.present),
                str(summary.absent),
                str(summary.half_day),
                str(summary.leave),
            ]
            for column, value in enumerate(values):
                self.table.setItem(row, column, QtWidgets.QTableWidgetItem(value))
        self.table.resizeRowsToContents()
        self._on_selection_changed()
        self._render_attendance()

    def _render_attendance(self) -> None:
        records = self.store.attendance_for_date(self.date_input.date().toPython())
        self.attendance_table.setRowCount(len(records))
        for row, record in enumerate(records):
            values = [
                record.worker_name,
                format_date(record.date),
                ATTENDANCE_STATUS_LABELS[record.status],
            ]
            for column, value in enumerate(values):
                self.attendance_table.setItem(row, column, QtWidgets.QTableWidgetItem(value))
        self.mark_button.setEnabled(bool(self.store.workers))

    def _selected_worker(self) -> Optional[Worker]:
        row = self._selected_row(self.table)
        if row is None or row >= len(self._workers):
            return None
        return self._workers[row]

    def _on_selection_changed(self) -> None:
        has_selection = self._selected_worker() is not None
        self.edit_button.setEnabled(has_selection)
        self.delete_button.setEnabled(has_selection)

    def _on_new(self) -> None:
        dialog = WorkerDialog(self)
        if dialog.exec() != QtWidgets.QDialog.Accepted:
            return
        self._report(self.store.add_worker(dialog.get_data()))

    def _on_edit(self) -> None:
        worker = self._selected_worker()
        if not worker:
            return
        dialog = WorkerDialog(self, worker=worker)
        if dialog.exec() != QtWidgets.QDialog.Accepted:
            return
        self._report(self.store.update_worker(dataclasses.replace(worker, **dialog.get_data())))

    def _on_delete(self) -> None:
        worker = self._selected_worker()
        if not worker:
            return
        if not self._confirm(f"Are you sure you want to delete '{worker.name}'?"):
            return
        self._report(self.store.delete_worker(worker.id))

    def _on_mark_attendance(self) -> None:
        dialog = AttendanceDialog(
            list(self.store.workers), self.date_input.date().toPython(), self
        )
        if dialog.exec() != QtWidgets.QDialog.Accepted:
            return
        worker_id, worker_name, day, status = dialog.get_data()
        self._report(self.store.mark_attendance(worker_id, worker_name, day, status))

    def _on_export_workers(self) -> None:
        try:
            path = export_workers_to_csv(self.store.workers, self._services.exports_dir)
        except OSError:
            self._logger.exception("Failed to export workers")
            self._show_error("Could not write the CSV file.")
            return
        self._show_success(f"File saved to:\n{path}")

    def _on_export_attendance(self) -> None:
        try:
            path = export_attendance_to_csv(
                self.store.attendance, self._services.exports_dir
            )
        except OSError:
            self._logger.exception("Failed to export attendance")
            self._show_error("Could not write the CSV file.")
            return
        self._show_success(f"File saved to:\n{path}")
