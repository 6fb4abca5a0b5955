"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

from PySide6.QtCore import Qt

WINDOW_TITLE: str = "Photo Gallery"

# Data roles
INDEX_ROLE: int = Qt.UserRole  # position in the displayed view
URL_ROLE: int = Qt.UserRole + 1  # thumbnail URL of the tile

# Grid defaults
DEFAULT_THUMB_SIZE: int = 150  # overridable by settings.json
DEFAULT_GRID_COLUMNS: int = 2
GRID_SPACING_PX: int = 10
GRID_CAPTION_LINES: int = 2

# Sort buttons
SORT_ACTIVE_COLOR: str = "#246EE9"
SORT_INACTIVE_COLOR: str = "#ccc"

# Alerts
SAVE_SUCCESS = ("Success", "Image saved successfully")
SAVE_FAILURE = ("Error", "Failed to save image")
FETCH_FAILURE_TITLE: str = "Error"
