"""HTTP access to the remote photo catalog.

The catalog is a JSON array of objects with `id`, `albumId`, `title`, `url`
and `thumbnailUrl`. Any transport or parse problem is reported uniformly as
`FetchFailed`; a partially valid payload is rejected as a whole.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from core.errors import FetchFailed
from core.models import PhotoRecord

DEFAULT_CATALOG_URL = "https://jsonplaceholder.typicode.com/photos"
DEFAULT_TIMEOUT = 30.0

REQUIRED_FIELDS = ["id", "albumId", "title", "url", "thumbnailUrl"]


def _parse_int(value: Any, field: str) -> int:
    """Parse an integer field, rejecting booleans and non-integral values."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field '{field}' must be an integer, got {value!r}")
    return value


def _parse_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"field '{field}' must be a string, got {value!r}")
    return value


def parse_record(row: dict[str, Any]) -> PhotoRecord:
    """Build a `PhotoRecord` from one catalog object."""
    missing = [f for f in REQUIRED_FIELDS if f not in row]
    if missing:
        raise ValueError(f"catalog entry missing fields: {missing}")
    return PhotoRecord(
        id=_parse_int(row["id"], "id"),
        album_id=_parse_int(row["albumId"], "albumId"),
        title=_parse_str(row["title"], "title"),
        url=_parse_str(row["url"], "url"),
        thumbnail_url=_parse_str(row["thumbnailUrl"], "thumbnailUrl"),
    )


def parse_catalog(payload: Any) -> list[PhotoRecord]:
    """Validate a decoded JSON payload and return its records in order.

    Raises:
        FetchFailed: If the payload is not a list of valid entries or ids
            repeat.
    """
    if not isinstance(payload, list):
        raise FetchFailed(f"expected a JSON array, got {type(payload).__name__}")

    records: list[PhotoRecord] = []
    seen: set[int] = set()
    for pos, row in enumerate(payload):
        if not isinstance(row, dict):
            raise FetchFailed(f"entry {pos} is not an object")
        try:
            rec = parse_record(row)
        except ValueError as ex:
            logger.error("Catalog row error: {} | row={}", ex, row)
            raise FetchFailed(f"entry {pos}: {ex}") from ex
        if rec.id in seen:
            raise FetchFailed(f"duplicate photo id {rec.id}")
        seen.add(rec.id)
        records.append(rec)
    return records


class HttpCatalogSource:
    """Fetch the full catalog with a single GET request."""

    def __init__(
        self,
        url: str = DEFAULT_CATALOG_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """Create a source.

        Args:
            url: Catalog endpoint.
            timeout: Request timeout in seconds.
            client: Optional preconfigured client (tests pass one with a
                mock transport). A client is created per fetch otherwise.
        """
        self._url = url
        self._timeout = timeout
        self._client = client

    @property
    def url(self) -> str:
        return self._url

    def fetch(self) -> list[PhotoRecord]:
        """GET the catalog and parse it."""
        logger.info("Fetching catalog: {}", self._url)
        try:
            if self._client is not None:
                response = self._client.get(self._url, timeout=self._timeout)
                response.raise_for_status()
                payload = response.json()
            else:
                with httpx.Client(timeout=self._timeout, follow_redirects=True) as client:
                    response = client.get(self._url)
                    response.raise_for_status()
                    payload = response.json()
        except httpx.HTTPError as ex:
            raise FetchFailed(f"request failed: {ex}") from ex
        except ValueError as ex:
            raise FetchFailed(f"invalid JSON: {ex}") from ex

        records = parse_catalog(payload)
        logger.info("Fetched {} catalog records", len(records))
        return records
