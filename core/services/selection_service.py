"""Viewer selection state decoupled from any UI toolkit.

The gallery viewer is either closed or open at one index of the displayed
view. Viewers page through `next_page` and `previous_page`, so the selection and
the visible page never drift apart.
"""

from __future__ import annotations

from loguru import logger

from core.errors import InvalidSelection


class GallerySelection:
    """Two-state machine: Closed, or Open(index)."""

    def __init__(self) -> None:
        self._index: int | None = None

    @property
    def is_open(self) -> bool:
        return self._index is not None

    @property
    def index(self) -> int | None:
        """Selected index while open, None while closed."""
        return self._index

    @property
    def current_page(self) -> int | None:
        """Page the viewer is showing; mirrors `index`."""
        return self._index

    def open(self, index: int, view_length: int) -> None:
        """Open the viewer at `index`.

        Raises:
            InvalidSelection: If `index` is outside `[0, view_length)`.
        """
        self._check(index, view_length)
        self._index = index

    def close(self) -> None:
        self._index = None

    def next_page(self, view_length: int) -> int | None:
        """Advance one page, staying on the last one; None while closed."""
        if self._index is not None and self._index + 1 < view_length:
            self._index += 1
        return self._index

    def previous_page(self) -> int | None:
        """Go back one page, staying on the first one; None while closed."""
        if self._index is not None and self._index > 0:
            self._index -= 1
        return self._index

    def reconcile(self, view_length: int) -> bool:
        """Re-validate the index after the displayed view changed.

        Clamps to the last item when the view shrank below the index, and
        closes the viewer when the view became empty.

        Returns:
            True if the selection changed.
        """
        if self._index is None or self._index < view_length:
            return False
        if view_length <= 0:
            logger.info("Displayed view is empty; closing viewer")
            self._index = None
        else:
            logger.info("Clamping viewer index {} to {}", self._index, view_length - 1)
            self._index = view_length - 1
        return True

    @staticmethod
    def _check(index: int, view_length: int) -> None:
        if not 0 <= index < view_length:
            raise InvalidSelection(index, view_length)
