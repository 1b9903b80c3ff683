"""Main window for the ToolRental application."""

from __future__ import annotations

from PySide6 import QtCore, QtGui, QtWidgets

from tool_rental.ui.app_services import AppServices
from tool_rental.ui.auth_dialog import AuthDialog
from tool_rental.ui.screens import (
    CustomersScreen,
    DashboardScreen,
    InventoryScreen,
    ReportsScreen,
    RentalsScreen,
    WorkersScreen,
)
from tool_rental.ui.screens.base_screen import BaseScreen
from tool_rental.ui.strings import APP_NAME
from tool_rental.version import __version__

NAVIGATION = (
    ("Dashboard", DashboardScreen, "Ctrl+1"),
    ("Inventory", InventoryScreen, "Ctrl+2"),
    ("Rentals", RentalsScreen, "Ctrl+3"),
    ("Customers", CustomersScreen, "Ctrl+4"),
    ("Workers", WorkersScreen, "Ctrl+5"),
    ("Reports", ReportsScreen, "Ctrl+6"),
)

THEME_LABELS = {"light": "Light", "dark": "Dark", "system": "System"}

_SIDEBAR_STYLE = """
QPushButton[nav="true"] {
    font-size: 15px;
    padding: 10px 14px;
    text-align: left;
    border: none;
    border-radius: 8px;
}
"""


class MainWindow(QtWidgets.QMainWindow):
    """Sidebar navigation over one stacked page per area of the business."""

    def __init__(self, services: AppServices) -> None:
        super().__init__()
        self._services = services
        self._stack = QtWidgets.QStackedWidget()
        self._nav_group = QtWidgets.QButtonGroup(self)
        self._nav_group.setExclusive(True)
        self.setWindowTitle(f"{APP_NAME} v{__version__}")
        self.resize(1100, 680)

        central = QtWidgets.QWidget(self)
        layout = QtWidgets.QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._build_sidebar())
        layout.addWidget(self._stack, 1)
        self.setCentralWidget(central)
        self.setStyleSheet(_SIDEBAR_STYLE)

        self._build_menu()
        self._stack.currentChanged.connect(self._on_page_changed)
        self._go_to(0)

    def _build_sidebar(self) -> QtWidgets.QFrame:
        sidebar = QtWidgets.QFrame()
        sidebar.setObjectName("sidebar")
        sidebar.setFixedWidth(220)
        column = QtWidgets.QVBoxLayout(sidebar)
        column.setContentsMargins(14, 18, 14, 18)
        column.setSpacing(10)

        heading = QtWidgets.QLabel(APP_NAME)
        heading.setWordWrap(True)
        heading.setStyleSheet("font-size: 18px; font-weight: 600;")
        column.addWidget(heading)
        self._user_label = QtWidgets.QLabel()
        self._user_label.setStyleSheet("font-size: 12px;")
        column.addWidget(self._user_label)
        self._update_user_label()
        column.addSpacing(8)

        for index, (label, screen_cls, _shortcut) in enumerate(NAVIGATION):
            screen: BaseScreen = screen_cls(self._services)
            self._stack.addWidget(screen)
            button = QtWidgets.QPushButton(label)
            button.setCheckable(True)
            button.setProperty("nav", True)
            button.setMinimumHeight(44)
            self._nav_group.addButton(button, index)
            column.addWidget(button)
        self._nav_group.idClicked.connect(self._go_to)

        column.addStretch()
        return sidebar

    def _build_menu(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction("Log out", self._on_logout)
        file_menu.addSeparator()
        file_menu.addAction("Exit", self.close)

        go_menu = menu_bar.addMenu("&Go")
        for index, (label, _screen_cls, shortcut) in enumerate(NAVIGATION):
            action = go_menu.addAction(label)
            action.setShortcut(QtGui.QKeySequence(shortcut))
            action.triggered.connect(lambda _checked=False, idx=index: self._go_to(idx))

        theme_menu = menu_bar.addMenu("&View").addMenu("Theme")
        themes = QtGui.QActionGroup(self)
        current = self._services.theme_manager.theme_choice
        for key, label in THEME_LABELS.items():
            action = theme_menu.addAction(label)
            action.setCheckable(True)
            action.setChecked(key == current)
            action.setData(key)
            themes.addAction(action)
        themes.triggered.connect(
            lambda action: self._services.theme_manager.set_theme(action.data())
        )

        menu_bar.addMenu("&Help").addAction("About", self._show_about)

    def _go_to(self, index: int) -> None:
        self._stack.setCurrentIndex(index)
        button = self._nav_group.button(index)
        if button is not None:
            button.setChecked(True)

    def _on_page_changed(self, index: int) -> None:
        screen = self._stack.widget(index)
        if isinstance(screen, BaseScreen):
            screen.refresh()

    def _update_user_label(self) -> None:
        user = self._services.session.user
        self._user_label.setText(f"Signed in as {user.name}" if user else "")

    def _on_logout(self) -> None:
        self._services.session.logout()
        self._update_user_label()
        if AuthDialog(self._services.session, self).exec() != QtWidgets.QDialog.Accepted:
            QtCore.QTimer.singleShot(0, self.close)
            return
        self._update_user_label()

    def _show_about(self) -> None:
        QtWidgets.QMessageBox.about(
            self,
            "About",
            f"<b>{APP_NAME}</b><br>Version {__version__}<br>"
            "Tool rentals, customers, workers and attendance.",
        )
