"""JSON-file-backed session storage for the Supabase auth client.

The auth client persists its session through an object exposing async
``get_item``/``set_item``/``remove_item``. This one keeps every item in
one JSON file, stamped with the time it was written, and forgets items
older than the session lifetime (30 days) so a stale login is never
reused after a restart.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Callable

SESSION_LIFETIME_SECONDS = 60 * 60 * 24 * 30


class JsonSessionStorage:

    def __init__(
        self,
        file_path: Path,
        lifetime: float = SESSION_LIFETIME_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._file_path = file_path
        self._lifetime = lifetime
        self._clock = clock
        self._ensure_file()

    # --- Storage interface ----------------------------------------------------

    async def get_item(self, key: str) -> str | None:
        items = self._load()
        entry = items.get(key)
        if entry is None:
            return None
        if self._clock() - entry["stored_at"] >= self._lifetime:
            del items[key]
            self._persist(items)
            return None
        return entry["value"]

    async def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = {"value": value, "stored_at": self._clock()}
        self._persist(items)

    async def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._persist(items)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, dict]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            return {}
        return raw if isinstance(raw, dict) else {}

    def _persist(self, items: dict[str, dict]) -> None:
        self._file_path.write_text(json.dumps(items, indent=2) + "\n", encoding="utf-8")

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
