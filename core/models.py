"""Core domain models for photo records and the gallery query state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class PhotoRecord:
    """A single photo entry as published by the remote catalog."""

    id: int
    album_id: int
    title: str
    url: str
    thumbnail_url: str


class SortOption(str, Enum):
    """Sort choices offered by the gallery toolbar.

    Values match the option tokens used by the catalog field names so that
    settings and UI buttons can refer to them as plain strings.
    """

    NONE = ""
    TITLE = "title"
    ALBUM_ID = "albumId"


@dataclass
class QueryState:
    """Active filter term and sort option."""

    filter_term: str = ""
    sort_option: SortOption = SortOption.NONE
