"""MainWindow: search/sort toolbar, photo grid and the viewer dialog.

The window renders `GalleryVM` state and forwards user actions to it. Fetch,
export and image loads run through `TaskRunner`; their results come back on
the signals declared below and are applied on the UI thread.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QRect, QSize, Qt, Signal
from PySide6.QtGui import QIcon, QKeySequence, QPixmap, QShortcut
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListView,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from app.viewmodels.photo_vm import PhotoVM
from app.views.constants import (
    DEFAULT_GRID_COLUMNS,
    DEFAULT_THUMB_SIZE,
    FETCH_FAILURE_TITLE,
    GRID_SPACING_PX,
    INDEX_ROLE,
    SAVE_FAILURE,
    SAVE_SUCCESS,
    SORT_ACTIVE_COLOR,
    SORT_INACTIVE_COLOR,
    URL_ROLE,
    WINDOW_TITLE,
)
from app.views.notifier import MessageBoxNotifier
from app.views.tasks import TaskRunner
from app.views.viewer_dialog import ViewerDialog
from core.errors import ExportFailed, FetchFailed
from core.models import PhotoRecord, SortOption
from core.services.interfaces import ExportResult, Notifier
from infrastructure.logging import find_latest_log_file


class MainWindow(QMainWindow):
    """Gallery window; implements `GalleryListener` for its view-model."""

    catalogLoaded = Signal(int, object)  # ticket, list[PhotoRecord]
    catalogFailed = Signal(int, object)  # ticket, FetchFailed
    exportFinished = Signal(object)  # ExportResult
    exportFailed = Signal(object)  # ExportFailed
    imageLoaded = Signal(str, str, object)  # token, url, QImage

    def __init__(
        self,
        vm: GalleryVM,
        notifier: Notifier | None = None,
        source: Any | None = None,
        exporter: Any | None = None,
        image_service: Any | None = None,
        settings: Any | None = None,
        log_dir: str | None = None,
    ) -> None:
        """Initialize the window.

        Args:
            vm: Gallery view-model.
            notifier: Alert sink for export results and fetch failures;
                defaults to message boxes parented to this window.
            source: Catalog source run on the worker pool.
            exporter: `AssetExporter` run on the worker pool.
            image_service: Loader for thumbnails and viewer pages.
            settings: Settings with `get(key, default)`.
            log_dir: Directory searched by the "Show Log File" action.
        """
        super().__init__()
        self._vm = vm
        self._notifier: Notifier = notifier or MessageBoxNotifier(self)
        self._thumb_size = DEFAULT_THUMB_SIZE
        self._columns = DEFAULT_GRID_COLUMNS
        if settings is not None:
            try:
                self._thumb_size = int(settings.get("grid.thumbnail_size", DEFAULT_THUMB_SIZE))
                self._columns = int(settings.get("grid.columns", DEFAULT_GRID_COLUMNS))
            except (ValueError, TypeError):
                logger.warning("Invalid grid settings; using defaults")

        self._runner = TaskRunner(
            receiver=self, source=source, exporter=exporter, image_service=image_service
        )
        self._items_by_url: dict[str, list[QListWidgetItem]] = {}
        self._requested_thumbs: set[str] = set()
        self._exports_pending = 0
        self._log_dir = log_dir

        self._setup_ui()
        self._connect_signals()
        self._vm.set_listener(self)
        self.statusBar().showMessage("Ready", 3000)

    @property
    def runner(self) -> TaskRunner:
        return self._runner

    @property
    def viewer(self) -> ViewerDialog:
        return self._viewer

    def _setup_ui(self) -> None:
        self.setWindowTitle(WINDOW_TITLE)
        central = QWidget()
        root = QVBoxLayout(central)

        search_row = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search by title")
        self.search_input.setClearButtonEnabled(True)
        self.reset_button = QPushButton("Reset")
        self.refresh_button = QPushButton("Refresh")
        search_row.addWidget(self.search_input, 1)
        search_row.addWidget(self.reset_button)
        search_row.addWidget(self.refresh_button)
        root.addLayout(search_row)

        sort_row = QHBoxLayout()
        sort_row.addWidget(QLabel("Sort by:"))
        self.sort_title_button = QPushButton("Title")
        self.sort_album_button = QPushButton("Album ID")
        sort_row.addWidget(self.sort_title_button)
        sort_row.addWidget(self.sort_album_button)
        sort_row.addStretch(1)
        root.addLayout(sort_row)

        self.grid = QListWidget()
        self.grid.setViewMode(QListView.IconMode)
        self.grid.setResizeMode(QListView.Adjust)
        self.grid.setMovement(QListView.Static)
        self.grid.setUniformItemSizes(True)
        self.grid.setWordWrap(True)
        self.grid.setSpacing(GRID_SPACING_PX)
        self.grid.setIconSize(QSize(self._thumb_size, self._thumb_size))
        self.grid.setGridSize(QSize(self._thumb_size + 2 * GRID_SPACING_PX, self._thumb_size + 48))
        root.addWidget(self.grid, 1)

        self.setCentralWidget(central)
        self.resize(
            self._columns * (self._thumb_size + 3 * GRID_SPACING_PX) + 40,
            3 * (self._thumb_size + 48) + 120,
        )

        help_menu = self.menuBar().addMenu("&Help")
        help_menu.addAction("Show Log File", self.on_show_log_file)

        self._viewer = ViewerDialog(self)
        self._refresh_sort_buttons()

    def _connect_signals(self) -> None:
        self.search_input.textChanged.connect(self.on_search_changed)
        self.reset_button.clicked.connect(self.on_reset)
        self.refresh_button.clicked.connect(self.refresh)
        QShortcut(QKeySequence.Refresh, self, activated=self.refresh)
        self.sort_title_button.clicked.connect(lambda: self.on_sort(SortOption.TITLE))
        self.sort_album_button.clicked.connect(lambda: self.on_sort(SortOption.ALBUM_ID))
        self.grid.itemClicked.connect(self.on_item_activated)
        self.grid.itemActivated.connect(self.on_item_activated)
        self.grid.verticalScrollBar().valueChanged.connect(self._request_visible_thumbnails)

        self._viewer.previousRequested.connect(self._vm.previous_page)
        self._viewer.nextRequested.connect(self._vm.next_page)
        self._viewer.saveRequested.connect(self.on_save_image)
        self._viewer.closeRequested.connect(self._vm.close_viewer)

        self.catalogLoaded.connect(self._on_catalog_loaded)
        self.catalogFailed.connect(self._on_catalog_failed)
        self.exportFinished.connect(self._on_export_finished)
        self.exportFailed.connect(self._on_export_failed)
        self.imageLoaded.connect(self._on_image_loaded)

    # User actions

    def refresh(self) -> int:
        """Start a catalog fetch; returns its ticket."""
        ticket = self._vm.begin_refresh()
        self._runner.request_catalog(ticket)
        return ticket

    def on_search_changed(self, text: str) -> None:
        self._vm.set_filter_term(text)

    def on_sort(self, option: SortOption) -> None:
        self._vm.set_sort_option(option)
        self._refresh_sort_buttons()

    def on_reset(self) -> None:
        self._vm.reset()
        self.search_input.blockSignals(True)
        self.search_input.setText("")
        self.search_input.blockSignals(False)
        self._refresh_sort_buttons()

    def on_item_activated(self, item: QListWidgetItem) -> None:
        index = item.data(INDEX_ROLE)
        if index is None:
            return
        self._vm.open_item(int(index))

    def on_save_image(self) -> None:
        record = self._vm.current_record
        reference = record.url if record is not None else ""
        self._exports_pending += 1
        self._viewer.set_saving(True)
        self._runner.request_export(reference)

    def on_show_log_file(self) -> None:
        path = find_latest_log_file(self._log_dir)
        self._notifier.notify("Log File", str(path) if path else "No log file written yet")

    # GalleryListener

    def view_changed(self, records: list[PhotoRecord]) -> None:
        self.grid.clear()
        self._items_by_url = {}
        self._requested_thumbs.clear()
        for pos, record in enumerate(records):
            vm = PhotoVM(record)
            item = QListWidgetItem(vm.caption)
            item.setToolTip(vm.tooltip)
            item.setData(INDEX_ROLE, pos)
            item.setData(URL_ROLE, vm.thumbnail_url)
            item.setTextAlignment(Qt.AlignHCenter | Qt.AlignTop)
            self.grid.addItem(item)
            self._items_by_url.setdefault(vm.thumbnail_url, []).append(item)
        self._show_status()
        self._request_visible_thumbnails()

    def refreshing_changed(self, refreshing: bool) -> None:
        self.refresh_button.setText("Refreshing…" if refreshing else "Refresh")
        if refreshing:
            self.statusBar().showMessage("Refreshing…")
        else:
            self._show_status()

    def selection_changed(self, index: int | None) -> None:
        if index is None:
            if self._viewer.isVisible():
                self._viewer.hide()
            return
        record = self._vm.displayed[index]
        self._viewer.show_page(record, index, len(self._vm.displayed))
        self._runner.request_page_image(record.url)
        if not self._viewer.isVisible():
            self._viewer.showFullScreen()

    def fetch_failed(self, error: FetchFailed) -> None:
        self.statusBar().showMessage(f"Could not load photos: {error.reason}", 10000)
        self._notifier.notify(FETCH_FAILURE_TITLE, "Failed to load photos")

    # Task completions

    def _on_catalog_loaded(self, ticket: int, records: object) -> None:
        self._vm.on_catalog_loaded(ticket, list(records))  # type: ignore[call-overload]

    def _on_catalog_failed(self, ticket: int, error: object) -> None:
        self._vm.on_catalog_failed(ticket, error)  # type: ignore[arg-type]

    def _on_export_finished(self, result: ExportResult) -> None:
        self._export_done()
        logger.info("Export complete: {}", result.path)
        self._notifier.notify(*SAVE_SUCCESS)

    def _on_export_failed(self, error: ExportFailed) -> None:
        self._export_done()
        logger.error("Export failed: {}", error)
        self._notifier.notify(*SAVE_FAILURE)

    def _export_done(self) -> None:
        self._exports_pending = max(0, self._exports_pending - 1)
        self._viewer.set_saving(self._exports_pending > 0)

    def _on_image_loaded(self, token: str, url: str, image: object) -> None:
        kind = token.split("|", 1)[0]
        if kind == "page":
            self._viewer.set_image(url, image)  # type: ignore[arg-type]
            return
        if image is None:
            self._requested_thumbs.discard(url)
            return
        pm = QPixmap.fromImage(image)  # type: ignore[arg-type]
        for item in self._items_by_url.get(url, []):
            item.setIcon(QIcon(pm))

    def resizeEvent(self, event) -> None:  # noqa: N802
        super().resizeEvent(event)
        self._request_visible_thumbnails()

    # Helpers

    def _request_visible_thumbnails(self, *_: Any) -> None:
        self.grid.doItemsLayout()
        viewport: QRect = self.grid.viewport().rect()
        for row in range(self.grid.count()):
            item = self.grid.item(row)
            rect = self.grid.visualItemRect(item)
            if rect.top() > viewport.bottom():
                break
            if not rect.intersects(viewport):
                continue
            url = item.data(URL_ROLE)
            if not url or url in self._requested_thumbs:
                continue
            self._requested_thumbs.add(url)
            self._runner.request_grid_thumbnail(url, self._thumb_size)

    def _show_status(self) -> None:
        error = self._vm.last_error
        if not self._vm.loaded:
            text = f"Could not load photos: {error.reason}" if error else "No photos loaded"
        else:
            text = f"{len(self._vm.displayed)} of {len(self._vm.catalog)} photos"
            if error is not None:
                text += " (last refresh failed)"
        self.statusBar().showMessage(text)

    def _refresh_sort_buttons(self) -> None:
        active = self._vm.query.sort_option
        for button, option in (
            (self.sort_title_button, SortOption.TITLE),
            (self.sort_album_button, SortOption.ALBUM_ID),
        ):
            color = SORT_ACTIVE_COLOR if active is option else SORT_INACTIVE_COLOR
            button.setStyleSheet(f"background-color: {color}; color: #fff;")
