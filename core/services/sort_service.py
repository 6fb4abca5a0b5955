"""Sorting service for `PhotoRecord` sequences.

The service builds a decorated key per record and relies on Python's stable
sort, so records with equal keys keep their incoming relative order.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from core.models import PhotoRecord, SortOption


class SortService:
    """Provides sorting utilities for photo record lists."""

    def sort(self, records: Iterable[PhotoRecord], option: SortOption) -> list[PhotoRecord]:
        """Return a new list of `records` ordered by `option`.

        Args:
            records: Records in their current display order.
            option: `TITLE` sorts case-insensitively by title, `ALBUM_ID`
                numerically by album; `NONE` keeps the incoming order.
        """
        items = list(records)
        if option is SortOption.NONE:
            return items

        decorated: list[tuple[Any, PhotoRecord]] = []
        for item in items:
            if option is SortOption.TITLE:
                key: Any = item.title.casefold()
            else:
                key = int(item.album_id)
            decorated.append((key, item))

        decorated.sort(key=lambda x: x[0])
        return [it for _, it in decorated]
