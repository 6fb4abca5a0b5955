"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULTS: dict[str, Any] = {
    "catalog": {
        "url": "https://jsonplaceholder.typicode.com/photos",
        "timeout_seconds": 30,
    },
    "export": {"directory": "~/Documents/PhotoGallery"},
    "grid": {"columns": 2, "thumbnail_size": 150},
    "images": {"mem_cache": 256},
    "logging": {"directory": None},
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay `override` onto a copy of `base`."""
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access.

    Values missing from the file fall back to `DEFAULTS`. A missing file is
    not an error: the application runs on defaults alone.
    """

    def __init__(self, settings_path: str | Path | None = None) -> None:
        data: dict[str, Any] = {}
        self._path = Path(settings_path) if settings_path is not None else None
        if self._path is not None:
            if self._path.exists():
                with self._path.open("r", encoding="utf-8") as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError(f"settings root must be an object: {self._path}")
                data = loaded
            else:
                logger.info("settings.json not found ({}); using defaults", self._path)
        self._data = _merge(DEFAULTS, data)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def get_path(self, key: str, default: str | None = None) -> Path | None:
        """Return dotted `key` as a `Path` with `~` and env vars expanded."""
        raw = self.get(key, default)
        if not raw:
            return None
        return Path(os.path.expandvars(str(raw))).expanduser()
