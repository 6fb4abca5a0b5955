"""Error taxonomy for the gallery core.

None of these are fatal: the UI keeps showing the last valid data and tells
the user what went wrong.
"""

from __future__ import annotations


class GalleryError(Exception):
    """Base class for all gallery errors."""


class FetchFailed(GalleryError):
    """Catalog retrieval or parsing failed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ExportFailed(GalleryError):
    """Saving a remote image to local storage failed."""

    def __init__(self, reference: str, reason: str) -> None:
        super().__init__(f"{reason} ({reference})" if reference else reason)
        self.reference = reference
        self.reason = reason


class InvalidSelection(GalleryError, IndexError):
    """The viewer was asked to open or turn to an index outside the view."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"index {index} out of range for view of length {length}")
        self.index = index
        self.length = length
