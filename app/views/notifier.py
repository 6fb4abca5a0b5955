"""Message-box notifier for user-facing alerts."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QMessageBox, QWidget
from loguru import logger


class MessageBoxNotifier:
    """Show a non-blocking information box per alert."""

    def __init__(self, parent: QWidget | None = None) -> None:
        self._parent = parent

    def notify(self, title: str, message: str) -> None:
        logger.info("Alert: {} - {}", title, message)
        box = QMessageBox(self._parent)
        box.setWindowTitle(title)
        box.setText(message)
        box.setIcon(QMessageBox.Critical if title == "Error" else QMessageBox.Information)
        box.setAttribute(Qt.WA_DeleteOnClose)
        box.open()
