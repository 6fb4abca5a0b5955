from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from app.views.main_window import MainWindow
from core.services.export_service import AssetExporter
from infrastructure.catalog_repository import DEFAULT_CATALOG_URL, HttpCatalogSource
from infrastructure.file_system import LocalFileSystem
from infrastructure.image_service import ImageService
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings

BASE_DIR = Path(__file__).parent


def build_exporter(settings: JsonSettings) -> AssetExporter:
    """Create the exporter writing into the configured directory."""
    target = settings.get_path("export.directory") or Path.home() / "Documents" / "PhotoGallery"
    return AssetExporter(LocalFileSystem(), target)


def build_source(settings: JsonSettings) -> HttpCatalogSource:
    try:
        timeout = float(settings.get("catalog.timeout_seconds", 30) or 30)
    except (ValueError, TypeError):
        timeout = 30.0
    return HttpCatalogSource(settings.get("catalog.url", DEFAULT_CATALOG_URL), timeout=timeout)


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    log_dir = init_logging(settings.get_path("logging.directory"))
    logger.info("Photo Gallery starting; logs in {}", log_dir)

    app = QApplication(sys.argv)

    vm = GalleryVM()
    exporter = build_exporter(settings)
    logger.info("Images will be saved to {}", exporter.target_dir)
    win = MainWindow(
        vm=vm,
        source=build_source(settings),
        exporter=exporter,
        image_service=ImageService(settings),
        settings=settings,
        log_dir=str(log_dir),
    )
    win.show()
    win.refresh()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
