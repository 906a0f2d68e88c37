"""Storage capabilities consumed by the gallery core."""

from typing import Protocol


class FileStorage(Protocol):
    """Byte-level access to named files in the durable data directory."""

    async def read(self, path: str) -> bytes:
        """Return the bytes stored at a path."""

    async def write(self, path: str, data: bytes) -> None:
        """Store bytes at a path, replacing any existing file."""

    async def resolve_uri(self, path: str) -> str:
        """Return a stable native URI for a stored path."""

    async def delete(self, path: str) -> None:
        """Delete the file stored at a path."""


class KeyValueStorage(Protocol):
    """Durable storage of opaque string values under string keys."""

    async def get(self, key: str) -> str | None:
        """Return the value stored under a key, if present."""

    async def set(self, key: str, value: str) -> None:
        """Store a value under a key."""
