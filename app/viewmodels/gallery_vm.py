"""ViewModel holding the gallery state and applying every transition.

All methods are expected to run on the UI thread. Fetch results arrive as
discrete completion events (`on_catalog_loaded` / `on_catalog_failed`) and are
applied atomically; the selection is re-validated after each change of the
displayed view.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from loguru import logger

from core.errors import FetchFailed
from core.models import PhotoRecord, QueryState, SortOption
from core.services.catalog_service import CatalogStore
from core.services.query_service import QueryEngine
from core.services.selection_service import GallerySelection


class GalleryListener(Protocol):
    """Receives state changes the UI must render."""

    def view_changed(self, records: list[PhotoRecord]) -> None: ...

    def refreshing_changed(self, refreshing: bool) -> None: ...

    def selection_changed(self, index: int | None) -> None: ...

    def fetch_failed(self, error: FetchFailed) -> None: ...


class GalleryVM:
    """Main gallery view-model.

    Mediates between the catalog store, the query engine and the viewer
    selection, and notifies an optional listener.
    """

    def __init__(
        self,
        store: CatalogStore | None = None,
        engine: QueryEngine | None = None,
        selection: GallerySelection | None = None,
    ) -> None:
        self.store = store or CatalogStore()
        self.engine = engine or QueryEngine()
        self.selection = selection or GallerySelection()
        self._listener: GalleryListener | None = None

    def set_listener(self, listener: GalleryListener | None) -> None:
        self._listener = listener

    # State accessors
    @property
    def catalog(self) -> tuple[PhotoRecord, ...]:
        return self.store.records

    @property
    def displayed(self) -> list[PhotoRecord]:
        return self.engine.view

    @property
    def query(self) -> QueryState:
        return self.engine.state

    @property
    def refreshing(self) -> bool:
        return self.store.refreshing

    @property
    def loaded(self) -> bool:
        """True once any fetch has been applied."""
        return self.store.loaded

    @property
    def last_error(self) -> FetchFailed | None:
        """Failure of the latest non-stale fetch, cleared by the next success."""
        return self.store.last_error

    @property
    def current_record(self) -> PhotoRecord | None:
        """Record shown by the viewer, if it is open."""
        index = self.selection.index
        if index is None or index >= len(self.engine.view):
            return None
        return self.engine.view[index]

    # Refresh lifecycle
    def begin_refresh(self) -> int:
        ticket = self.store.begin_refresh()
        self._emit_refreshing()
        return ticket

    def on_catalog_loaded(self, ticket: int, records: Sequence[PhotoRecord]) -> bool:
        """Apply a finished fetch and re-derive the view under the live query."""
        applied = self.store.complete_refresh(ticket, records)
        if applied:
            self.engine.rederive(self.store.records)
            self._view_updated()
        self._emit_refreshing()
        return applied

    def on_catalog_failed(self, ticket: int, error: Exception | str) -> FetchFailed | None:
        """Keep the current data and report the failure once."""
        failure = self.store.fail_refresh(ticket, error)
        self._emit_refreshing()
        if failure is not None and self._listener is not None:
            self._listener.fetch_failed(failure)
        return failure

    # Query transitions
    def set_filter_term(self, term: str) -> None:
        self.engine.set_filter_term(self.store.records, term)
        self._view_updated()

    def set_sort_option(self, option: SortOption | str) -> None:
        self.engine.set_sort_option(option)
        self._view_updated()

    def reset(self) -> None:
        logger.info("Resetting filter and sort")
        self.engine.reset(self.store.records)
        self._view_updated()

    # Selection transitions
    def open_item(self, index: int) -> None:
        """Open the viewer at grid position `index`.

        Raises:
            InvalidSelection: If `index` is not a position of the view.
        """
        self.selection.open(index, len(self.engine.view))
        self._emit_selection()

    def close_viewer(self) -> None:
        if self.selection.is_open:
            self.selection.close()
            self._emit_selection()

    def next_page(self) -> None:
        """Follow a forward page turn made in the viewer."""
        self._turn(lambda: self.selection.next_page(len(self.engine.view)))

    def previous_page(self) -> None:
        """Follow a backward page turn made in the viewer."""
        self._turn(self.selection.previous_page)

    def _turn(self, step) -> None:
        before = self.selection.index
        step()
        if self.selection.index != before:
            self._emit_selection()

    def _view_updated(self) -> None:
        changed = self.selection.reconcile(len(self.engine.view))
        if self._listener is not None:
            self._listener.view_changed(self.engine.view)
        if changed or self.selection.is_open:
            self._emit_selection()

    def _emit_selection(self) -> None:
        if self._listener is not None:
            self._listener.selection_changed(self.selection.index)

    def _emit_refreshing(self) -> None:
        if self._listener is not None:
            self._listener.refreshing_changed(self.store.refreshing)
