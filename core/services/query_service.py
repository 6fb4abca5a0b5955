"""Filter and sort transformations over the canonical catalog.

Filtering always starts again from the canonical catalog, while sorting
reorders whatever is currently displayed. A later filter change therefore
discards the order produced by an earlier sort, even though the selected sort
option stays recorded in the query state.
"""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from core.models import PhotoRecord, QueryState, SortOption
from core.services.sort_service import SortService


def filter_records(records: Sequence[PhotoRecord], term: str) -> list[PhotoRecord]:
    """Return records whose title contains `term`, ignoring case."""
    needle = term.casefold()
    if not needle:
        return list(records)
    return [r for r in records if needle in r.title.casefold()]


def derive_view(
    catalog: Sequence[PhotoRecord], state: QueryState, sorter: SortService | None = None
) -> list[PhotoRecord]:
    """Apply the filter of `state` to `catalog`, then its sort option."""
    filtered = filter_records(catalog, state.filter_term)
    return (sorter or SortService()).sort(filtered, state.sort_option)


def parse_sort_option(value: SortOption | str | None) -> SortOption | None:
    """Map `value` to a `SortOption`, or None when it is not recognized."""
    if isinstance(value, SortOption):
        return value
    if value is None:
        return SortOption.NONE
    try:
        return SortOption(str(value))
    except ValueError:
        return None


class QueryEngine:
    """Owns `QueryState` and produces the displayed view."""

    def __init__(self, sorter: SortService | None = None) -> None:
        self._sorter = sorter or SortService()
        self.state = QueryState()
        self.view: list[PhotoRecord] = []

    @property
    def filter_term(self) -> str:
        return self.state.filter_term

    @property
    def sort_option(self) -> SortOption:
        return self.state.sort_option

    def set_filter_term(self, catalog: Sequence[PhotoRecord], term: str) -> list[PhotoRecord]:
        """Store `term` and rebuild the view from `catalog`."""
        term = term or ""
        self.state.filter_term = term
        self.view = filter_records(catalog, term)
        logger.debug("Filter '{}' -> {} of {} records", term, len(self.view), len(catalog))
        return self.view

    def set_sort_option(self, option: SortOption | str | None) -> list[PhotoRecord]:
        """Store `option` and reorder the current view.

        An unrecognized option leaves both the state and the view untouched.
        """
        parsed = parse_sort_option(option)
        if parsed is None:
            logger.warning("Ignoring unknown sort option: {!r}", option)
            return self.view
        self.state.sort_option = parsed
        self.view = self._sorter.sort(self.view, parsed)
        return self.view

    def reset(self, catalog: Sequence[PhotoRecord]) -> list[PhotoRecord]:
        """Clear the query state and show `catalog` in its fetch order."""
        self.state = QueryState()
        self.view = list(catalog)
        return self.view

    def rederive(self, catalog: Sequence[PhotoRecord]) -> list[PhotoRecord]:
        """Rebuild the view from a new `catalog` under the active state."""
        self.view = derive_view(catalog, self.state, self._sorter)
        return self.view
