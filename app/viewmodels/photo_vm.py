"""Lightweight view model wrapper around `PhotoRecord`."""

from __future__ import annotations

from dataclasses import dataclass

from core.models import PhotoRecord


@dataclass
class PhotoVM:
    """Expose convenient properties for bindings/templates."""

    record: PhotoRecord

    @property
    def caption(self) -> str:
        """Title shown under the grid tile."""
        return self.record.title

    @property
    def tooltip(self) -> str:
        """Title plus album/id details for hover text."""
        return f"{self.record.title}\nAlbum {self.record.album_id} - Photo {self.record.id}"

    @property
    def thumbnail_url(self) -> str:
        return self.record.thumbnail_url

    @property
    def image_url(self) -> str:
        return self.record.url
