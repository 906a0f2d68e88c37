"""Key-value storage kept in a single JSON file."""

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path

from photo_gallery.domain.errors import PersistenceError
from photo_gallery.services.storage import KeyValueStorage


@dataclass
class JsonFileKeyValueStorage(KeyValueStorage):
    """Preferences-style storage: one JSON object mapping keys to strings."""

    path: Path
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)

    async def get(self, key: str) -> str | None:
        """Return the value stored under a key."""
        entries = await asyncio.to_thread(self._read_entries)
        value = entries.get(key)
        return value if isinstance(value, str) else None

    async def set(self, key: str, value: str) -> None:
        """Store a value under a key."""
        async with self._lock:
            entries = await asyncio.to_thread(self._read_entries)
            entries[key] = value
            await asyncio.to_thread(self._write_entries, entries)

    def _read_entries(self) -> dict[str, object]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise PersistenceError(f"Failed to read {self.path}") from exc
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupt storage file {self.path}") from exc
        if not isinstance(entries, dict):
            raise PersistenceError(f"Corrupt storage file {self.path}")
        return entries

    def _write_entries(self, entries: dict[str, object]) -> None:
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(entries), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise PersistenceError(f"Failed to write {self.path}") from exc
