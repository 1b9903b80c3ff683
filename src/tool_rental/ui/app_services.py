"""Service container for the UI layer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tool_rental.services.session import SessionManager
from tool_rental.services.store import RentalStore
from tool_rental.ui.data_bus import DataEventBus
from tool_rental.utils.theme import ThemeManager


@dataclass(frozen=True)
class AppServices:
    """Shared services handed to every window and screen."""

    store: RentalStore
    session: SessionManager
    data_bus: DataEventBus
    theme_manager: ThemeManager
    exports_dir: Path
