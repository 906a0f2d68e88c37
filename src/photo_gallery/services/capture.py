"""Capture orchestration: camera to file storage to gallery."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from photo_gallery.domain.photos import (
    CameraSource,
    CaptureDescriptor,
    CaptureOptions,
    PhotoRecord,
)
from photo_gallery.services.gallery import PhotoRecordStore
from photo_gallery.services.resolver import ImageResolver
from photo_gallery.services.storage import FileStorage

_logger = logging.getLogger(__name__)


class Camera(Protocol):
    """Interface for taking a picture."""

    async def capture(self, options: CaptureOptions) -> CaptureDescriptor:
        """Take a picture and describe where it can be read from."""


def current_millis() -> int:
    """Return the current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def photo_file_name(timestamp_millis: int) -> str:
    """Return the stored file name for a capture taken at a timestamp."""
    return f"{timestamp_millis}.jpg"


@dataclass
class PhotoCaptureCoordinator:
    """Takes a photo, stores its bytes and records it in the gallery."""

    camera: Camera
    file_storage: FileStorage
    resolver: ImageResolver
    store: PhotoRecordStore
    quality: int = 100
    clock: Callable[[], int] = field(default=current_millis)

    async def capture(self) -> PhotoRecord:
        """Capture a new photo and prepend it to the gallery."""
        file_name = photo_file_name(self.clock())
        descriptor = await self.camera.capture(
            CaptureOptions(quality=self.quality, source=CameraSource.CAMERA)
        )
        data = await self.resolver.read_capture(descriptor)
        await self.file_storage.write(file_name, data)
        record = await self.resolver.from_capture(descriptor, file_name)
        await self.store.append(record)
        _logger.info("Captured photo: filepath=%s bytes=%s", file_name, len(data))
        return record
