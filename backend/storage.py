"""
storage.py
──────────
Simple JSON file-based persistence for event records.

  - threading.Lock serialises file access
  - writes are atomic: write a tmp file, then os.replace() it over the old one
  - a missing or unreadable file loads as an empty calendar
"""

import os
import json
import logging
import threading
from typing import Any, Dict, List

_LOGGER = logging.getLogger(__name__)


class JsonEventStorage:
    """Stores the event list as {"events": [...]} in a single JSON file."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError:
                _LOGGER.warning("Ignoring corrupt event file %s", self.path)
                return {}

    def _write(self, data: Dict[str, Any]) -> None:
        """Atomic write: write to a tmp file then rename (os.replace)."""
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp, self.path)

    def load(self) -> List[Dict[str, Any]]:
        with self._lock:
            data = self._read()
            rows = data.get("events", []) if isinstance(data, dict) else None
            if not isinstance(rows, list):
                _LOGGER.warning("Ignoring event file %s with unexpected layout", self.path)
                return []
            return list(rows)

    def save(self, rows: List[Dict[str, Any]]) -> None:
        with self._lock:
            self._write({"events": rows})
