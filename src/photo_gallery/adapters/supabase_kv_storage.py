"""Supabase-backed key-value storage."""

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from photo_gallery.domain.errors import PersistenceError
from photo_gallery.services.storage import KeyValueStorage


@dataclass
class SupabaseKeyValueStorage(KeyValueStorage):
    """Stores values as rows of a key/value table."""

    client: Client
    table: str = "kv_store"

    async def get(self, key: str) -> str | None:
        """Return the value stored under a key."""
        try:
            response = await asyncio.to_thread(self._select, key)
        except Exception as exc:
            raise PersistenceError(f"Failed to read key {key}") from exc
        if not response.data:
            return None
        return response.data[0].get("value")

    async def set(self, key: str, value: str) -> None:
        """Insert or replace the value stored under a key."""
        try:
            await asyncio.to_thread(self._upsert, key, value)
        except Exception as exc:
            raise PersistenceError(f"Failed to write key {key}") from exc

    def _select(self, key: str):  # type: ignore[no-untyped-def]
        return (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )

    def _upsert(self, key: str, value: str) -> None:
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
