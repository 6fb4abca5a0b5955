"""Local filesystem sink used by image exports.

Downloads are streamed into a `.part` sibling and moved into place only once
the body is complete, so a failed download never leaves a file under the
final name.
"""

from __future__ import annotations

import os
from pathlib import Path

import httpx
from loguru import logger

from core.errors import ExportFailed

CHUNK_SIZE = 64 * 1024


class LocalFileSystem:
    """`exists` / `mkdir` / `download` over `pathlib` and `httpx`."""

    def __init__(self, client: httpx.Client | None = None, timeout: float = 60.0) -> None:
        self._client = client
        self._timeout = timeout

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def mkdir(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def download(self, url: str, path: Path) -> None:
        """Stream `url` into `path`.

        Raises:
            ExportFailed: On HTTP errors or if the file cannot be written.
        """
        target = Path(path)
        part = target.with_name(target.name + ".part")
        try:
            if self._client is not None:
                self._stream_to(self._client, url, part)
            else:
                with httpx.Client(timeout=self._timeout, follow_redirects=True) as client:
                    self._stream_to(client, url, part)
            os.replace(part, target)
        except (httpx.HTTPError, OSError) as ex:
            self._discard(part)
            reason = "Download failed" if isinstance(ex, httpx.HTTPError) else "Write failed"
            raise ExportFailed(url, f"{reason}: {ex}") from ex

    def _stream_to(self, client: httpx.Client, url: str, part: Path) -> None:
        with client.stream("GET", url, timeout=self._timeout) as response:
            response.raise_for_status()
            with part.open("wb") as f:
                for chunk in response.iter_bytes(CHUNK_SIZE):
                    f.write(chunk)

    @staticmethod
    def _discard(part: Path) -> None:
        try:
            part.unlink(missing_ok=True)
        except OSError as ex:
            logger.warning("Could not remove partial download {}: {}", part, ex)
