"""Light/dark theme handling for the Qt application.

The chosen theme (``light``, ``dark`` or ``system``) is stored under the
``theme`` key of ``config.json``. ``system`` follows the colour scheme Qt
reports for the desktop and falls back to light when it is unknown.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from PySide6 import QtCore, QtGui, QtWidgets

from tool_rental.logging_config import get_logger
from tool_rental.utils.config_store import load_config_data, update_config_value

ThemeChoice = Literal["light", "dark", "system"]
THEME_CHOICES = ("light", "dark", "system")

_Role = QtGui.QPalette.ColorRole

_DARK_COLORS = {
    _Role.Window: "#202228",
    _Role.WindowText: "#f0f0f0",
    _Role.Base: "#181a1f",
    _Role.AlternateBase: "#202228",
    _Role.Text: "#f0f0f0",
    _Role.Button: "#2d303a",
    _Role.ButtonText: "#f0f0f0",
    _Role.Highlight: "#d9822b",
    _Role.HighlightedText: "#ffffff",
    _Role.PlaceholderText: "#8f98aa",
}
_DARK_DISABLED = "#8f98aa"

_TABLE_DARK_COLORS = {
    _Role.Base: "#1f1f1f",
    _Role.AlternateBase: "#262626",
    _Role.Text: "#f0f0f0",
    _Role.Highlight: "#4a3a2a",
    _Role.HighlightedText: "#ffffff",
}

_DARK_STYLESHEET = """
QFrame#sidebar { background-color: #1c1f26; }
QPushButton[nav="true"] { background-color: #2b2f36; color: #f1f1f1; }
QPushButton[nav="true"]:checked { background-color: #d9822b; color: #ffffff; }
QHeaderView::section {
    background-color: #2b2f36;
    color: #f1f1f1;
    padding: 6px 8px;
    border: 1px solid #3a3f48;
}
QLineEdit, QPlainTextEdit, QSpinBox, QDoubleSpinBox, QDateEdit, QComboBox {
    border: 1px solid #4c566a;
    border-radius: 6px;
    padding: 5px;
}
"""

_LIGHT_STYLESHEET = """
QFrame#sidebar { background-color: #f3f1ee; }
QPushButton[nav="true"]:checked { background-color: #d9822b; color: #ffffff; }
"""


def load_theme_choice(config_path: Path) -> ThemeChoice:
    """Return the stored theme choice, ``system`` when unset or unknown."""
    choice = load_config_data(config_path).get("theme", "system")
    return choice if choice in THEME_CHOICES else "system"


def system_prefers_dark() -> bool:
    hints = QtGui.QGuiApplication.styleHints()
    scheme = getattr(hints, "colorScheme", None)
    if scheme is None:
        return False
    return scheme() == QtCore.Qt.ColorScheme.Dark


def resolve_theme_choice(choice: ThemeChoice) -> str:
    if choice in ("light", "dark"):
        return choice
    return "dark" if system_prefers_dark() else "light"


def _palette_from(colors: dict, base: QtGui.QPalette) -> QtGui.QPalette:
    palette = QtGui.QPalette(base)
    for role, color in colors.items():
        palette.setColor(role, QtGui.QColor(color))
    return palette


def build_dark_palette() -> QtGui.QPalette:
    palette = _palette_from(_DARK_COLORS, QtGui.QPalette())
    for role in (_Role.Text, _Role.ButtonText, _Role.WindowText):
        palette.setColor(QtGui.QPalette.Disabled, role, QtGui.QColor(_DARK_DISABLED))
    return palette


def apply_theme(app: QtWidgets.QApplication, theme_name: str) -> None:
    app.setStyle("Fusion")
    if theme_name == "dark":
        app.setPalette(build_dark_palette())
        app.setStyleSheet(_DARK_STYLESHEET)
    else:
        app.setPalette(app.style().standardPalette())
        app.setStyleSheet(_LIGHT_STYLESHEET)


def apply_table_theme(table: QtWidgets.QTableView, theme_name: str) -> None:
    """Recolour one table without touching the application palette."""
    table.setAlternatingRowColors(True)
    if theme_name == "dark":
        table.setPalette(_palette_from(_TABLE_DARK_COLORS, table.palette()))
    else:
        table.setPalette(QtWidgets.QApplication.style().standardPalette())


class ThemeManager(QtCore.QObject):
    """Owns the active theme and tells widgets when it changes."""

    theme_changed = QtCore.Signal(str)

    def __init__(self, app: QtWidgets.QApplication, config_path: Path) -> None:
        super().__init__()
        self._app = app
        self._config_path = config_path
        self._choice: ThemeChoice = load_theme_choice(config_path)
        self._resolved = resolve_theme_choice(self._choice)
        self._logger = get_logger(self.__class__.__name__)
        self._apply()

    @property
    def theme_choice(self) -> ThemeChoice:
        return self._choice

    def is_dark(self) -> bool:
        return self._resolved == "dark"

    def set_theme(self, choice: ThemeChoice) -> None:
        self._choice = choice if choice in THEME_CHOICES else "system"
        try:
            update_config_value(self._config_path, "theme", self._choice)
        except OSError:
            self._logger.warning("Could not save the theme preference.")
        self._apply()
        self.theme_changed.emit(self._resolved)

    def _apply(self) -> None:
        self._resolved = resolve_theme_choice(self._choice)
        apply_theme(self._app, self._resolved)
        self._logger.info("Theme applied: %s (configured: %s)", self._resolved, self._choice)
