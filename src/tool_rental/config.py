"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass

from tool_rental.version import __app_name__, __company__

APP_NAME = __app_name__
APP_DATA_DIRNAME = "ToolRental"
LOGS_DIRNAME = "logs"
LOG_FILENAME = "app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
EXPORTS_DIRNAME = "exports"
CONFIG_FILENAME = "config.json"

SESSION_KEY = "user"
CURRENCY_SYMBOL = "₹"

TOOL_ID_PREFIX = "t"
RENTAL_ID_PREFIX = "r"
CUSTOMER_ID_PREFIX = "c"
WORKER_ID_PREFIX = "w"
ATTENDANCE_ID_PREFIX = "a"


@dataclass(frozen=True)
class AppConfig:
    """Static configuration values for ToolRental Manager."""

    app_name: str = APP_NAME
    organization_name: str = __company__
    organization_domain: str = "toolrental.local"
