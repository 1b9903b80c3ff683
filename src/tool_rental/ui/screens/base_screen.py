"""Base class for screens that can refresh their data."""

from __future__ import annotations

from PySide6 import QtGui, QtWidgets

from tool_rental.services.results import OperationResult
from tool_rental.ui.app_services import AppServices
from tool_rental.ui.strings import TITLE_CONFIRMATION, TITLE_ERROR, TITLE_SUCCESS, TITLE_WARNING
from tool_rental.utils.theme import apply_table_theme

STATUS_MESSAGE_MS = 5000


class BaseScreen(QtWidgets.QWidget):
    """Base screen with refresh hooks and data change handling."""

    def __init__(self, services: AppServices) -> None:
        super().__init__()
        self._services = services
        self._needs_refresh = False
        self._services.data_bus.data_changed.connect(self._on_data_changed)

    @property
    def store(self):
        return self._services.store

    def refresh(self) -> None:
        """Reload data for this screen."""

    def _on_data_changed(self) -> None:
        if self.isVisible():
            self.refresh()
        else:
            self._needs_refresh = True

    def showEvent(self, event: QtGui.QShowEvent) -> None:
        super().showEvent(event)
        if self._needs_refresh:
            self._needs_refresh = False
            self.refresh()

    def _build_header(self, layout: QtWidgets.QVBoxLayout, title: str, subtitle: str) -> None:
        title_label = QtWidgets.QLabel(title)
        title_label.setStyleSheet("font-size: 24px; font-weight: 600;")
        subtitle_label = QtWidgets.QLabel(subtitle)
        subtitle_label.setWordWrap(True)
        layout.addWidget(title_label)
        layout.addWidget(subtitle_label)

    def _build_table(self, headers: list[str]) -> QtWidgets.QTableWidget:
        table = QtWidgets.QTableWidget(0, len(headers))
        table.setHorizontalHeaderLabels(headers)
        table.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        table.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        table.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        table.verticalHeader().setVisible(False)
        table.horizontalHeader().setStretchLastSection(True)
        theme_manager = self._services.theme_manager
        apply_table_theme(table, "dark" if theme_manager.is_dark() else "light")
        theme_manager.theme_changed.connect(
            lambda theme, table=table: apply_table_theme(table, theme)
        )
        return table

    def _selected_row(self, table: QtWidgets.QTableWidget) -> int | None:
        selected = table.selectionModel().selectedRows()
        if not selected:
            return None
        return selected[0].row()

    def _report(self, result: OperationResult) -> bool:
        """Announce a store result and broadcast the change when applied."""
        if result.ok:
            self._show_status(result.message)
            self._services.data_bus.data_changed.emit()
            return True
        QtWidgets.QMessageBox.warning(self, TITLE_WARNING, result.message)
        return False

    def _confirm(self, message: str) -> bool:
        response = QtWidgets.QMessageBox.question(
            self,
            TITLE_CONFIRMATION,
            message,
            QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No,
        )
        return response == QtWidgets.QMessageBox.Yes

    def _show_error(self, message: str) -> None:
        QtWidgets.QMessageBox.critical(self, TITLE_ERROR, message)

    def _show_success(self, message: str) -> None:
        QtWidgets.QMessageBox.information(self, TITLE_SUCCESS, message)

    def _show_status(self, message: str) -> None:
        window = self.window()
        if isinstance(window, QtWidgets.QMainWindow):
            window.statusBar().showMessage(message, STATUS_MESSAGE_MS)
