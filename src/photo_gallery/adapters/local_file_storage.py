"""Local filesystem file storage."""

import asyncio
from dataclasses import dataclass
from pathlib import Path

from photo_gallery.domain.errors import FileIOError, FileMissingError
from photo_gallery.services.storage import FileStorage


@dataclass
class LocalFileStorage(FileStorage):
    """Stores files under a data directory; absolute paths are read as-is."""

    root: Path

    @classmethod
    def create(cls, root: str | Path) -> "LocalFileStorage":
        """Create a storage rooted at a directory, creating it if needed."""
        path = Path(root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return cls(root=path)

    def _path(self, path: str) -> Path:
        return self.root / path

    async def read(self, path: str) -> bytes:
        """Read a stored file."""
        target = self._path(path)
        try:
            return await asyncio.to_thread(target.read_bytes)
        except FileNotFoundError as exc:
            raise FileMissingError(f"File not found: {path}") from exc
        except OSError as exc:
            raise FileIOError(f"Failed to read {path}") from exc

    async def write(self, path: str, data: bytes) -> None:
        """Write a file, replacing any previous content."""
        target = self._path(path)
        try:
            await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(target.write_bytes, data)
        except OSError as exc:
            raise FileIOError(f"Failed to write {path}") from exc

    async def resolve_uri(self, path: str) -> str:
        """Return the file URI of a stored path."""
        return self._path(path).resolve().as_uri()

    async def delete(self, path: str) -> None:
        """Delete a stored file."""
        target = self._path(path)
        try:
            await asyncio.to_thread(target.unlink)
        except FileNotFoundError as exc:
            raise FileMissingError(f"File not found: {path}") from exc
        except OSError as exc:
            raise FileIOError(f"Failed to delete {path}") from exc
