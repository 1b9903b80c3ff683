"""Dialog for importing records from an Excel workbook."""

from __future__ import annotations

from pathlib import Path

from PySide6 import QtCore, QtWidgets

from tool_rental.logging_config import get_logger
from tool_rental.services import excel_import
from tool_rental.services.errors import ImportFormatError
from tool_rental.services.excel_import import ImportEntity, ImportReport, ParsedSheet
from tool_rental.ui.app_services import AppServices
from tool_rental.ui.strings import TITLE_ERROR, TITLE_WARNING

_MAX_LISTED_ERRORS = 20


class ImportWorker(QtCore.QThread):
    """Parses a workbook off the GUI thread."""

    parsed = QtCore.Signal(object)
    failed = QtCore.Signal(str)

    def __init__(self, path: Path, entity: ImportEntity) -> None:
        super().__init__()
        self._path = path
        self._entity = entity

    def run(self) -> None:
        try:
            sheet = excel_import.read_sheet(self._path, self._entity)
        except (ImportFormatError, FileNotFoundError) as exc:
            self.failed.emit(str(exc))
            return
        except Exception:
            get_logger(self.__class__.__name__).exception(
                "Unexpected failure importing %s", self._path
            )
            self.failed.emit("The file could not be imported.")
            return
        self.parsed.emit(sheet)


class ImportDialog(QtWidgets.QDialog):
    """Pick a workbook, parse it in the background and insert its rows."""

    def __init__(
        self,
        services: AppServices,
        entity: ImportEntity,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._services = services
        self._entity = entity
        self._worker: ImportWorker | None = None
        self.report: ImportReport | None = None
        self.setWindowTitle(f"Import {entity.value.title()}")
        self.setModal(True)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        columns = ", ".join(excel_import.required_columns(self._entity))
        hint = QtWidgets.QLabel(f"Required columns: {columns}")
        hint.setWordWrap(True)
        layout.addWidget(hint)

        file_layout = QtWidgets.QHBoxLayout()
        self.path_input = QtWidgets.QLineEdit()
        self.path_input.setPlaceholderText("Select an .xlsx file")
        browse_button = QtWidgets.QPushButton("Browse...")
        browse_button.clicked.connect(self._on_browse)
        file_layout.addWidget(self.path_input)
        file_layout.addWidget(browse_button)
        layout.addLayout(file_layout)

        self.status_label = QtWidgets.QLabel("")
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        self.button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel
        )
        self.button_box.button(QtWidgets.QDialogButtonBox.Ok).setText("Import")
        self.button_box.accepted.connect(self._on_import)
        self.button_box.rejected.connect(self.reject)
        layout.addWidget(self.button_box)

    def _on_browse(self) -> None:
        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self, "Select workbook", "", "Excel files (*.xlsx *.xlsm)"
        )
        if path:
            self.path_input.setText(path)

    def _on_import(self) -> None:
        text = self.path_input.text().strip()
        if not text:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, "Select a file to import.")
            return
        self.button_box.setEnabled(False)
        self.status_label.setText("Importing...")
        self._worker = ImportWorker(Path(text), self._entity)
        self._worker.parsed.connect(self._on_parsed)
        self._worker.failed.connect(self._on_failed)
        self._worker.start()

    def _on_parsed(self, sheet: ParsedSheet) -> None:
        self._release_worker()
        self.report = self._services.store.apply_import(sheet)
        self._services.data_bus.data_changed.emit()
        message = f"Imported {self.report.imported} {self._entity.value}."
        if self.report.errors:
            listed = "\n".join(str(error) for error in self.report.errors[:_MAX_LISTED_ERRORS])
            message += f"\nSkipped {self.report.skipped} rows:\n{listed}"
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, message)
        else:
            QtWidgets.QMessageBox.information(self, "Import Completed", message)
        self.accept()

    def _on_failed(self, message: str) -> None:
        self._release_worker()
        self.button_box.setEnabled(True)
        self.status_label.setText("")
        QtWidgets.QMessageBox.critical(self, TITLE_ERROR, message)

    def _release_worker(self) -> None:
        # The result signal can arrive before run() has returned.
        if self._worker is not None:
            self._worker.wait()
            self._worker = None
