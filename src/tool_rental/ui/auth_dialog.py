"""Sign-in and sign-up dialog shown before the main window."""

from __future__ import annotations

from PySide6 import QtWidgets

from tool_rental.services.errors import ValidationError
from tool_rental.services.session import SessionManager
from tool_rental.ui.strings import APP_NAME, TITLE_WARNING


class AuthDialog(QtWidgets.QDialog):
    """Collects credentials and opens a session."""

    def __init__(
        self, session: SessionManager, parent: QtWidgets.QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self._session = session
        self.setWindowTitle(APP_NAME)
        self.setModal(True)
        self.setMinimumWidth(360)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        title = QtWidgets.QLabel(APP_NAME)
        title.setStyleSheet("font-size: 20px; font-weight: 600;")
        layout.addWidget(title)

        self.tabs = QtWidgets.QTabWidget()
        self.tabs.addTab(self._build_login_tab(), "Login")
        self.tabs.addTab(self._build_signup_tab(), "Sign Up")
        layout.addWidget(self.tabs)

    def _build_login_tab(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        form = QtWidgets.QFormLayout(page)
        self.login_email = QtWidgets.QLineEdit()
        self.login_email.setPlaceholderText("you@example.com")
        self.login_password = QtWidgets.QLineEdit()
        self.login_password.setEchoMode(QtWidgets.QLineEdit.Password)
        self.login_password.returnPressed.connect(self._on_login)
        login_button = QtWidgets.QPushButton("Login")
        login_button.setDefault(True)
        login_button.clicked.connect(self._on_login)
        form.addRow("E-mail:", self.login_email)
        form.addRow("Password:", self.login_password)
        form.addRow(login_button)
        return page

    def _build_signup_tab(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        form = QtWidgets.QFormLayout(page)
        self.signup_name = QtWidgets.QLineEdit()
        self.signup_email = QtWidgets.QLineEdit()
        self.signup_password = QtWidgets.QLineEdit()
        self.signup_password.setEchoMode(QtWidgets.QLineEdit.Password)
        signup_button = QtWidgets.QPushButton("Create Account")
        signup_button.clicked.connect(self._on_signup)
        form.addRow("Name:", self.signup_name)
        form.addRow("E-mail:", self.signup_email)
        form.addRow("Password:", self.signup_password)
        form.addRow(signup_button)
        return page

    def _on_login(self) -> None:
        try:
            self._session.login(self.login_email.text(), self.login_password.text())
        except ValidationError as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            return
        self.accept()

    def _on_signup(self) -> None:
        try:
            self._session.signup(
                self.signup_name.text(),
                self.signup_email.text(),
                self.signup_password.text(),
            )
        except ValidationError as exc:
            QtWidgets.QMessageBox.warning(self, TITLE_WARNING, str(exc))
            return
        self.accept()
