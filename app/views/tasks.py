"""Background tasks for the two suspending operations and image loads.

Each task runs on the global `QThreadPool` and reports back by emitting a
signal owned by the receiver (normally `MainWindow`). Qt queues cross-thread
emissions, so completions are applied on the UI thread one at a time.

Receiver signals:
    catalogLoaded(int ticket, object records)
    catalogFailed(int ticket, object error)
    exportFinished(object result)
    exportFailed(object error)
    imageLoaded(str token, str url, object image)
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool
from loguru import logger

from core.errors import ExportFailed, FetchFailed


class _FetchTask(QRunnable):
    def __init__(self, *, ticket: int, source: Any, receiver: QObject) -> None:
        super().__init__()
        self._ticket = ticket
        self._source = source
        self._receiver = receiver

    def run(self) -> None:  # type: ignore[override]
        try:
            records = self._source.fetch()
        except FetchFailed as ex:
            self._receiver.catalogFailed.emit(self._ticket, ex)  # type: ignore[attr-defined]
            return
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.exception("Unexpected catalog fetch error")
            self._receiver.catalogFailed.emit(  # type: ignore[attr-defined]
                self._ticket, FetchFailed(str(ex))
            )
            return
        self._receiver.catalogLoaded.emit(self._ticket, records)  # type: ignore[attr-defined]


class _ExportTask(QRunnable):
    def __init__(self, *, reference: str, exporter: Any, receiver: QObject) -> None:
        super().__init__()
        self._reference = reference
        self._exporter = exporter
        self._receiver = receiver

    def run(self) -> None:  # type: ignore[override]
        try:
            result = self._exporter.export(self._reference)
        except ExportFailed as ex:
            logger.error("Export failed: {}", ex)
            self._receiver.exportFailed.emit(ex)  # type: ignore[attr-defined]
            return
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.exception("Unexpected export error")
            self._receiver.exportFailed.emit(  # type: ignore[attr-defined]
                ExportFailed(self._reference, str(ex))
            )
            return
        self._receiver.exportFinished.emit(result)  # type: ignore[attr-defined]


class _ImageTask(QRunnable):
    """Emits `receiver.imageLoaded(token, url, image)` upon completion."""

    def __init__(
        self, *, url: str, side: int, is_preview: bool, service: Any, receiver: QObject, token: str
    ) -> None:
        super().__init__()
        self._url = url
        self._side = side
        self._is_preview = is_preview
        self._service = service
        self._receiver = receiver
        self._token = token

    def run(self) -> None:  # type: ignore[override]
        try:
            if self._is_preview:
                img = self._service.get_preview(self._url, self._side)
            else:
                img = self._service.get_thumbnail(self._url, self._side)
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.error("Image task failed: {}", ex)
            img = None
        self._receiver.imageLoaded.emit(self._token, self._url, img)  # type: ignore[attr-defined]


class TaskRunner:
    """Dispatches fetch, export and image tasks to the global thread pool.

    Image tokens keep the format:
    - Viewer page: "page|{url}|{side}"
    - Grid thumbnail: "grid|{url}|{thumb_side}"
    """

    def __init__(
        self,
        *,
        receiver: QObject,
        source: Any | None = None,
        exporter: Any | None = None,
        image_service: Any | None = None,
        pool: QThreadPool | None = None,
    ) -> None:
        self._receiver = receiver
        self._source = source
        self._exporter = exporter
        self._images = image_service
        self._pool = pool or QThreadPool.globalInstance()

    @property
    def pool(self) -> QThreadPool:
        return self._pool

    def request_catalog(self, ticket: int) -> None:
        """Fetch the catalog for refresh `ticket`."""
        if self._source is None:
            self._receiver.catalogFailed.emit(  # type: ignore[attr-defined]
                ticket, FetchFailed("no catalog source configured")
            )
            return
        self._pool.start(_FetchTask(ticket=ticket, source=self._source, receiver=self._receiver))

    def request_export(self, reference: str) -> None:
        """Save `reference` to local storage."""
        if self._exporter is None:
            self._receiver.exportFailed.emit(  # type: ignore[attr-defined]
                ExportFailed(reference, "no exporter configured")
            )
            return
        self._pool.start(
            _ExportTask(reference=reference, exporter=self._exporter, receiver=self._receiver)
        )

    def request_page_image(self, url: str, side: int = 0) -> str:
        """Request a full-size viewer image. Returns the token string."""
        token = f"page|{url}|{side}"
        self._start_image(url, side, True, token)
        return token

    def request_grid_thumbnail(self, url: str, thumb_side: int) -> str:
        """Request a grid thumbnail for `url`. Returns the token string."""
        token = f"grid|{url}|{thumb_side}"
        self._start_image(url, thumb_side, False, token)
        return token

    def _start_image(self, url: str, side: int, is_preview: bool, token: str) -> None:
        if self._images is None:
            return
        self._pool.start(
            _ImageTask(
                url=url,
                side=side,
                is_preview=is_preview,
                service=self._images,
                receiver=self._receiver,
                token=token,
            )
        )
