"""Core service interfaces and shared data structures.

This module defines the protocols of the external collaborators the core
depends on (catalog source, filesystem sink, user alerts) and the simple
dataclasses passed between the infrastructure and UI layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from core.models import PhotoRecord


@dataclass
class ExportResult:
    """Outcome of a successful export.

    Attributes:
        reference: Remote image URI that was saved.
        path: Local file the image was written to.
    """

    reference: str
    path: Path


class CatalogSource(Protocol):
    """Read access to the remote photo catalog."""

    def fetch(self) -> list[PhotoRecord]:
        """Return the full catalog in source order.

        Raises:
            FetchFailed: On any transport or parse failure.
        """
        ...


class FileSystemSink(Protocol):
    """The three filesystem primitives an export needs."""

    def exists(self, path: Path) -> bool:
        """Return True if `path` exists."""
        ...

    def mkdir(self, path: Path) -> None:
        """Create directory `path` (and parents)."""
        ...

    def download(self, url: str, path: Path) -> None:
        """Download `url` to `path`; `path` must not exist on failure."""
        ...


class Notifier(Protocol):
    """Fire-and-forget user alert."""

    def notify(self, title: str, message: str) -> None:
        """Show `message` under `title`."""
        ...
