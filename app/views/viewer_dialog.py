"""Full-screen paged viewer over the displayed view."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QImage, QKeyEvent, QPixmap
from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from core.models import PhotoRecord


class ViewerDialog(QDialog):
    """Shows one page of the displayed view at a time.

    The dialog never changes pages on its own: arrow keys and the paging
    buttons emit `previousRequested` / `nextRequested`, and the owner answers
    with `show_page` once the selection has followed.
    """

    previousRequested = Signal()
    nextRequested = Signal()
    saveRequested = Signal()
    closeRequested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setModal(False)
        self.setStyleSheet("QDialog { background-color: rgba(0, 0, 0, 204); }")

        self._page: int | None = None
        self._url: str | None = None
        self._pixmap: QPixmap | None = None

        root = QVBoxLayout(self)

        self.image_label = QLabel("Loading…")
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setMinimumSize(200, 200)
        self.image_label.setStyleSheet("color: white;")
        root.addWidget(self.image_label, 1)

        self.title_label = QLabel()
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setWordWrap(True)
        self.title_label.setStyleSheet("color: white;")
        root.addWidget(self.title_label)

        buttons = QHBoxLayout()
        self.prev_button = QPushButton("◀")
        self.next_button = QPushButton("▶")
        self.save_button = QPushButton("Save Image")
        self.close_button = QPushButton("Close")
        self.page_label = QLabel()
        self.page_label.setStyleSheet("color: white;")
        buttons.addWidget(self.prev_button)
        buttons.addStretch(1)
        buttons.addWidget(self.save_button)
        buttons.addWidget(self.close_button)
        buttons.addWidget(self.page_label)
        buttons.addStretch(1)
        buttons.addWidget(self.next_button)
        root.addLayout(buttons)

        self.prev_button.clicked.connect(self.previousRequested.emit)
        self.next_button.clicked.connect(self.nextRequested.emit)
        self.save_button.clicked.connect(self.saveRequested.emit)
        self.close_button.clicked.connect(self.closeRequested.emit)
        self.rejected.connect(self.closeRequested.emit)

    @property
    def current_page(self) -> int | None:
        return self._page

    @property
    def current_url(self) -> str | None:
        return self._url

    def show_page(self, record: PhotoRecord, page: int, total: int) -> None:
        """Display `record` as page `page` of `total`."""
        self._page = page
        self._url = record.url
        self._pixmap = None
        self.image_label.setPixmap(QPixmap())
        self.image_label.setText("Loading…")
        self.title_label.setText(record.title)
        self.page_label.setText(f"{page + 1} / {total}")
        self.prev_button.setEnabled(page > 0)
        self.next_button.setEnabled(page + 1 < total)

    def set_image(self, url: str, image: QImage | None) -> None:
        """Show `image` if it belongs to the current page."""
        if url != self._url:
            return
        if image is None or image.isNull():
            self.image_label.setText("Image unavailable")
            return
        self._pixmap = QPixmap.fromImage(image)
        self._refit()

    def set_saving(self, saving: bool) -> None:
        self.save_button.setText("Saving…" if saving else "Save Image")

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802
        if event.key() == Qt.Key_Left:
            self.previousRequested.emit()
        elif event.key() == Qt.Key_Right:
            self.nextRequested.emit()
        else:
            super().keyPressEvent(event)

    def resizeEvent(self, event) -> None:  # noqa: N802
        super().resizeEvent(event)
        self._refit()

    def _refit(self) -> None:
        if self._pixmap is None:
            return
        self.image_label.setPixmap(
            self._pixmap.scaled(self.image_label.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation)
        )
