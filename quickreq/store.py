"""quickreq store - durable key-value slots on the local machine.

Each slot is one JSON file in the data directory. An absent file is an
empty collection. Every write replaces the whole slot.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

SAVED_REQUESTS = "savedRequests"
REQUEST_HISTORY = "requestHistory"
SAVED_API_KEYS = "savedApiKeys"

SLOTS = (SAVED_REQUESTS, REQUEST_HISTORY, SAVED_API_KEYS)


class Store:
    """String-keyed slots backed by ``<data_dir>/<slot>.json``."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    def path_for(self, slot: str) -> Path:
        if slot not in SLOTS:
            raise KeyError(f"Unknown slot: {slot}")
        return self.data_dir / f"{slot}.json"

    def get(self, slot: str) -> str | None:
        path = self.path_for(slot)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, slot: str, value: str) -> None:
        path = self.path_for(slot)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(value, encoding="utf-8")

    def remove(self, slot: str) -> None:
        path = self.path_for(slot)
        if path.exists():
            path.unlink()

    def load_list(self, slot: str) -> list[Any]:
        """Read a slot as a JSON list. Missing or corrupt slots read as empty."""
        raw = self.get(slot)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return []
        return data if isinstance(data, list) else []

    def save_list(self, slot: str, items: list[Any]) -> None:
        self.set(slot, json.dumps(items, indent=2))
