"""Export of remote images into a fixed local directory.

The exporter only talks to a `FileSystemSink`, so the download and directory
primitives can be swapped in tests.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
import uuid

from loguru import logger

from core.errors import ExportFailed
from core.services.interfaces import ExportResult, FileSystemSink

EXPORT_EXTENSION = ".jpg"


def make_export_name(now: datetime | None = None) -> str:
    """Return a fresh `<token>.jpg` file name.

    The token is the epoch time in milliseconds plus a short random suffix so
    two exports in the same millisecond still get distinct files.
    """
    ts = int((now or datetime.now()).timestamp() * 1000)
    return f"{ts}_{uuid.uuid4().hex[:8]}{EXPORT_EXTENSION}"


class AssetExporter:
    """Copies a remote image into `target_dir`."""

    def __init__(self, sink: FileSystemSink, target_dir: str | Path) -> None:
        self._sink = sink
        self._dir = Path(target_dir)

    @property
    def target_dir(self) -> Path:
        return self._dir

    def ensure_directory(self) -> None:
        """Create the target directory if it does not exist yet."""
        try:
            if not self._sink.exists(self._dir):
                logger.info("Creating export directory: {}", self._dir)
                self._sink.mkdir(self._dir)
        except OSError as ex:
            raise ExportFailed(str(self._dir), f"Cannot create directory: {ex}") from ex

    def export(self, reference: str) -> ExportResult:
        """Download `reference` into a new file in the target directory.

        Raises:
            ExportFailed: If there is nothing to export, the directory cannot
                be created, or the download or write fails.
        """
        if not reference:
            raise ExportFailed("", "No image selected")

        self.ensure_directory()

        path = self._dir / make_export_name()
        while self._sink.exists(path):
            path = self._dir / make_export_name()

        try:
            self._sink.download(reference, path)
        except ExportFailed:
            raise
        except OSError as ex:
            logger.error("Export of {} to {} failed: {}", reference, path, ex)
            raise ExportFailed(reference, f"Write failed: {ex}") from ex

        logger.info("Image saved: {} -> {}", reference, path)
        return ExportResult(reference=reference, path=path)
