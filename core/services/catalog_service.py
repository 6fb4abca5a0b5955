"""Canonical catalog ownership and refresh lifecycle.

A refresh is split into `begin_refresh`, which runs on the UI thread before
the network call is dispatched, and one completion event applied on the UI
thread once the worker finishes. Tickets increase monotonically; a completion
whose ticket is older than the data already applied is dropped so a slow,
earlier request never overwrites newer data.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from core.errors import FetchFailed
from core.models import PhotoRecord


class CatalogStore:
    """Owns the catalog published by the last applied fetch."""

    def __init__(self) -> None:
        self._records: tuple[PhotoRecord, ...] = ()
        self._next_ticket = 0
        self._applied_ticket = -1
        self._in_flight: set[int] = set()
        self.loaded = False
        self.last_error: FetchFailed | None = None

    @property
    def records(self) -> tuple[PhotoRecord, ...]:
        return self._records

    @property
    def refreshing(self) -> bool:
        """True while at least one fetch is outstanding."""
        return bool(self._in_flight)

    def begin_refresh(self) -> int:
        """Register a new fetch and return its ticket."""
        ticket = self._next_ticket
        self._next_ticket += 1
        self._in_flight.add(ticket)
        logger.info("Catalog refresh #{} started ({} in flight)", ticket, len(self._in_flight))
        return ticket

    def complete_refresh(self, ticket: int, records: Sequence[PhotoRecord]) -> bool:
        """Apply a successful fetch.

        Returns:
            True if the catalog was replaced, False if the result was stale.
        """
        self._in_flight.discard(ticket)
        if ticket < self._applied_ticket:
            logger.warning(
                "Dropping stale catalog #{} (already showing #{})", ticket, self._applied_ticket
            )
            return False
        self._records = tuple(records)
        self._applied_ticket = ticket
        self.loaded = True
        self.last_error = None
        logger.info("Catalog refresh #{} applied: {} records", ticket, len(self._records))
        return True

    def fail_refresh(self, ticket: int, error: Exception | str) -> FetchFailed | None:
        """Record a failed fetch, keeping the current catalog.

        Returns:
            The `FetchFailed` to report, or None when the failure is older
            than the data already shown.
        """
        self._in_flight.discard(ticket)
        failure = error if isinstance(error, FetchFailed) else FetchFailed(str(error))
        if ticket < self._applied_ticket:
            logger.warning("Ignoring stale failure of catalog #{}: {}", ticket, failure)
            return None
        self.last_error = failure
        logger.error("Catalog refresh #{} failed: {}", ticket, failure)
        return failure
