"""Shared event bus for UI refresh signals."""

from __future__ import annotations

from PySide6 import QtCore


class DataEventBus(QtCore.QObject):
    """Emits after every change made to the rental store."""

    data_changed = QtCore.Signal()
