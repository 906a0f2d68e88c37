"""In-memory photo list backed by durable key-value storage."""

import asyncio
import json
import logging
from dataclasses import dataclass, field

from pydantic import TypeAdapter, ValidationError

from photo_gallery.domain.errors import (
    FileIOError,
    FileMissingError,
    PersistenceError,
    SerializationError,
)
from photo_gallery.domain.photos import PhotoRecord
from photo_gallery.services.resolver import ImageResolver
from photo_gallery.services.storage import FileStorage, KeyValueStorage

PHOTO_STORAGE_KEY = "photos"

_logger = logging.getLogger(__name__)
_PHOTO_LIST = TypeAdapter(list[PhotoRecord])


def serialize_photos(photos: list[PhotoRecord] | tuple[PhotoRecord, ...]) -> str:
    """Serialize records to the durable JSON array, dropping decoded data."""
    return json.dumps([photo.to_persisted() for photo in photos])


def parse_photos(raw: str) -> list[PhotoRecord]:
    """Parse the durable JSON array back into records."""
    try:
        photos = _PHOTO_LIST.validate_json(raw)
    except ValidationError as exc:
        raise SerializationError("Malformed photo list") from exc
    # Decoded data is never durable, even if an older blob carried it.
    return [
        photo.model_copy(update={"decoded_data": None})
        if photo.decoded_data is not None
        else photo
        for photo in photos
    ]


@dataclass
class PhotoRecordStore:
    """Owns the newest-first photo list and its durable copy.

    Mutations are serialized on a per-store lock so each one applies to the
    latest list and durable writes land in call order. Loading takes the same
    lock. After a load that could not read the durable list, mutations are
    refused until a load succeeds, so the saved list is never overwritten by
    a partial one.
    """

    kv_storage: KeyValueStorage
    file_storage: FileStorage
    resolver: ImageResolver
    storage_key: str = PHOTO_STORAGE_KEY
    _photos: list[PhotoRecord] = field(default_factory=list, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)
    _load_failed: bool = field(default=False, init=False)

    @property
    def photos(self) -> tuple[PhotoRecord, ...]:
        """Return a snapshot of the current list."""
        return tuple(self._photos)

    @property
    def load_failed(self) -> bool:
        """Whether the last load could not read the durable list."""
        return self._load_failed

    async def load(self) -> list[PhotoRecord]:
        """Load persisted records and make them renderable."""
        async with self._lock:
            try:
                raw = await self.kv_storage.get(self.storage_key)
            except PersistenceError:
                self._load_failed = True
                raise
            stored: list[PhotoRecord] = []
            if raw:
                try:
                    stored = parse_photos(raw)
                except SerializationError:
                    _logger.warning(
                        "Ignoring malformed photo list: key=%s", self.storage_key
                    )
            resolved = [await self._rehydrate(photo) for photo in stored]
            self._photos = resolved
            self._load_failed = False
            _logger.info("Loaded photos: count=%s", len(resolved))
            return list(resolved)

    async def append(self, record: PhotoRecord) -> None:
        """Prepend a record and persist the list."""
        async with self._lock:
            self._ensure_writable()
            self._photos = [record, *self._photos]
            await self._write()

    async def remove(self, filepath: str) -> None:
        """Remove a record and its backing file, then persist the list."""
        async with self._lock:
            self._ensure_writable()
            remaining = [photo for photo in self._photos if photo.filepath != filepath]
            if len(remaining) == len(self._photos):
                _logger.info("Photo not in gallery: filepath=%s", filepath)
                return
            self._photos = remaining
            try:
                await self.file_storage.delete(filepath)
            except FileMissingError:
                _logger.warning("Photo file already absent: filepath=%s", filepath)
            await self._write()

    async def persist(self) -> None:
        """Write the current list to durable storage."""
        async with self._lock:
            self._ensure_writable()
            await self._write()

    async def _rehydrate(self, photo: PhotoRecord) -> PhotoRecord:
        # An unreadable file keeps its record so it survives the next write.
        try:
            return await self.resolver.rehydrate(photo)
        except FileIOError:
            _logger.warning("Photo file unreadable: filepath=%s", photo.filepath)
            return photo.model_copy(update={"webview_path": None})

    def _ensure_writable(self) -> None:
        if self._load_failed:
            raise PersistenceError("Photo list failed to load; refusing to write")

    async def _write(self) -> None:
        await self.kv_storage.set(self.storage_key, serialize_photos(self._photos))
