"""Remote image loading and caching utilities.

Thumbnails and full-size pages are fetched over HTTP and decoded into
`QImage`. Decoded images are kept in a small in-memory LRU keyed by URL and
requested side.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import threading
from typing import Any

import httpx
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage
from loguru import logger


@dataclass
class _MemCacheItem:
    key: str
    image: QImage


class _LRUCache:
    """Size-bounded cache shared by all image tasks; every access holds `_lock`."""

    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, _MemCacheItem] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def get(self, key: str) -> QImage | None:
        """Return cached QImage for key, moving it to the MRU position."""
        with self._lock:
            item = self._data.get(key)
            if not item:
                return None
            self._data.move_to_end(key)
            return item.image

    def put(self, key: str, image: QImage) -> None:
        """Insert or update `key` with `image`, evicting LRU when over capacity."""
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
            self._data[key] = _MemCacheItem(key, image)
            while len(self._data) > self._cap:
                self._data.popitem(last=False)


class ImageService:
    """Fetches and decodes remote images with a memory cache."""

    def __init__(
        self,
        settings: object | None = None,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the cache size from settings.

        Args:
            settings: Optional settings with `get(key, default)`.
            client: Optional shared `httpx.Client`; one is created per load
                otherwise.
            timeout: Request timeout in seconds.
        """
        self._mem_cap = 256
        if settings is not None:
            try:
                self._mem_cap = int(settings.get("images.mem_cache", 256) or 256)
            except (ValueError, TypeError):
                self._mem_cap = 256
        self._mem_cache = _LRUCache(self._mem_cap)
        self._client = client
        self._timeout = timeout

    # Public API
    def get_thumbnail(self, url: str, size: int) -> Any:
        """Return the thumbnail at `url` scaled to fit `size`."""
        return self._get_image(url, size)

    def get_preview(self, url: str, max_side: int = 0) -> Any:
        """Return the full image at `url`, bounded by `max_side` when > 0."""
        return self._get_image(url, max_side)

    def _get_image(self, url: str, requested_side: int) -> QImage | None:
        key = f"{url}|{int(requested_side)}"
        cached = self._mem_cache.get(key)
        if cached is not None:
            return cached

        data = self._fetch_bytes(url)
        if data is None:
            return None
        img = QImage.fromData(data)
        if img.isNull():
            logger.warning("Could not decode image: {}", url)
            return None
        if requested_side > 0 and max(img.width(), img.height()) > requested_side:
            img = img.scaled(
                requested_side, requested_side, Qt.KeepAspectRatio, Qt.SmoothTransformation
            )
        self._mem_cache.put(key, img)
        return img

    def _fetch_bytes(self, url: str) -> bytes | None:
        try:
            if self._client is not None:
                response = self._client.get(url, timeout=self._timeout)
            else:
                with httpx.Client(timeout=self._timeout, follow_redirects=True) as client:
                    response = client.get(url)
            response.raise_for_status()
            return response.content
        except httpx.HTTPError as ex:
            logger.error("Image download failed for {}: {}", url, ex)
            return None
