"""Pytest configuration.

Several test modules build PySide6 widgets, so a single `QApplication` is
created for the whole session before collection and shut down at the end.
Tests run on the offscreen platform unless the caller chose another one.
"""

from __future__ import annotations

import os
from typing import Any

import pytest

from core.models import PhotoRecord

_APP: Any | None = None


def pytest_configure(config) -> None:  # noqa: ARG001
    """Ensure a QApplication exists before collecting/running tests."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

    try:
        from PySide6.QtWidgets import QApplication
    except ImportError:
        return

    global _APP

    app = QApplication.instance()
    _APP = app if app is not None else QApplication([])


def pytest_sessionfinish(session, exitstatus) -> None:  # noqa: ARG001
    """Attempt a clean Qt shutdown to avoid lingering threads at interpreter exit."""
    try:
        from PySide6.QtCore import QThreadPool
        from PySide6.QtWidgets import QApplication
    except ImportError:
        return

    QThreadPool.globalInstance().waitForDone(2000)
    app = QApplication.instance()
    if app is None:
        return
    app.quit()
    app.processEvents()


def record(rid: int, title: str, album_id: int = 1) -> PhotoRecord:
    """Build a photo record with URLs derived from its id."""
    return PhotoRecord(
        id=rid,
        album_id=album_id,
        title=title,
        url=f"https://img.example/full/{rid}.jpg",
        thumbnail_url=f"https://img.example/thumb/{rid}.jpg",
    )


@pytest.fixture
def banana_apple() -> list[PhotoRecord]:
    return [record(1, "Banana", album_id=2), record(2, "apple", album_id=1)]


@pytest.fixture
def catalog() -> list[PhotoRecord]:
    return [
        record(1, "black cat on a wall", album_id=3),
        record(2, "Dog in the park", album_id=1),
        record(3, "Cathedral at dusk", album_id=2),
        record(4, "bobcat", album_id=1),
        record(5, "apple tree", album_id=2),
        record(6, "ALLEY CAT", album_id=1),
    ]
