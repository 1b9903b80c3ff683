"""Card widgets with theme-aware styling."""

from __future__ import annotations

from PySide6 import QtWidgets

from tool_rental.utils.theme import ThemeManager


class KpiCard(QtWidgets.QFrame):
    """Summary card with title, value and an optional caption."""

    def __init__(
        self,
        theme_manager: ThemeManager,
        title: str,
        value: str = "0",
        caption: str = "",
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._theme_manager = theme_manager
        self.setObjectName("KpiCard")

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(6)

        self._title_label = QtWidgets.QLabel(title)
        self._title_label.setObjectName("KpiTitle")
        self._value_label = QtWidgets.QLabel(value)
        self._value_label.setObjectName("KpiValue")
        self._caption_label = QtWidgets.QLabel(caption)
        self._caption_label.setObjectName("KpiCaption")
        self._caption_label.setVisible(bool(caption))

        layout.addWidget(self._title_label)
        layout.addWidget(self._value_label)
        layout.addWidget(self._caption_label)

        self._theme_manager.theme_changed.connect(self.apply_theme)
        self.apply_theme()

    def set_value(self, value: str, caption: str | None = None) -> None:
        self._value_label.setText(value)
        if caption is not None:
            self._caption_label.setText(caption)
            self._caption_label.setVisible(bool(caption))

    def apply_theme(self) -> None:
        if self._theme_manager.is_dark():
            background, border, title, value = "#2b2f36", "#3a3f48", "rgba(255, 255, 255, 0.82)", "#ffffff"
        else:
            background, border, title, value = "#ffffff", "rgba(0, 0, 0, 0.10)", "rgba(0, 0, 0, 0.70)", "rgba(0, 0, 0, 0.92)"
        self.setStyleSheet(
            f"""
            QFrame#KpiCard {{
                background: {background};
                border: 1px solid {border};
                border-radius: 12px;
            }}
            QLabel#KpiTitle {{
                color: {title};
                font-weight: 600;
                font-size: 13px;
            }}
            QLabel#KpiValue {{
                color: {value};
                font-size: 22px;
                font-weight: 700;
            }}
            QLabel#KpiCaption {{
                color: {title};
                font-size: 11px;
            }}
            """
        )
