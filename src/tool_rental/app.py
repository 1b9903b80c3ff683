"""Application entry point."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from PySide6 import QtWidgets

from tool_rental.config import AppConfig
from tool_rental.logging_config import configure_logging, get_logger
from tool_rental.paths import get_app_data_dir, get_config_path, get_exports_dir, get_logs_dir
from tool_rental.services.seed import seed_demo_data
from tool_rental.services.session import SessionManager
from tool_rental.services.store import RentalStore
from tool_rental.ui.app_services import AppServices
from tool_rental.ui.auth_dialog import AuthDialog
from tool_rental.ui.data_bus import DataEventBus
from tool_rental.ui.main_window import MainWindow
from tool_rental.utils.theme import ThemeManager
from tool_rental.version import __version__


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tool-rental", description=AppConfig().app_name)
    parser.add_argument(
        "--demo",
        action="store_true",
        help="start with sample tools, customers, rentals and workers",
    )
    parser.add_argument("--version", action="version", version=__version__)
    args, _qt_args = parser.parse_known_args(argv)
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the ToolRental application."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging()
    get_app_data_dir()
    get_logs_dir()

    config = AppConfig()
    logger = get_logger(__name__)
    logger.info("Starting %s %s", config.app_name, __version__)

    store = RentalStore()
    if args.demo:
        seed_demo_data(store)

    session = SessionManager(get_config_path())
    session.restore()

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName(config.app_name)
    app.setOrganizationName(config.organization_name)
    app.setOrganizationDomain(config.organization_domain)

    services = AppServices(
        store=store,
        session=session,
        data_bus=DataEventBus(),
        theme_manager=ThemeManager(app, get_config_path()),
        exports_dir=get_exports_dir(),
    )

    if not session.is_authenticated:
        if AuthDialog(session).exec() != QtWidgets.QDialog.Accepted:
            logger.info("Sign-in cancelled, exiting.")
            return 0

    window = MainWindow(services)
    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
