"""Profile-specific resolution of captures and stored records into images."""

import base64
from dataclasses import dataclass
from typing import Protocol

from photo_gallery.domain.errors import CaptureError
from photo_gallery.domain.photos import (
    JPEG_DATA_URL_PREFIX,
    CaptureDescriptor,
    PhotoRecord,
)
from photo_gallery.services.platform import PlatformCapability, PlatformProfile
from photo_gallery.services.storage import FileStorage

DEFAULT_WEBVIEW_SERVER_URL = "capacitor://localhost"
_FILE_SCHEME = "file://"
_FILE_START = "/_capacitor_file_"


class ImageFetcher(Protocol):
    """Loads an in-session transient image path into memory."""

    async def fetch(self, path: str) -> bytes:
        """Return the bytes behind a transient path."""


class ImageResolver(Protocol):
    """Turns captures and persisted records into renderable records."""

    async def read_capture(self, descriptor: CaptureDescriptor) -> bytes:
        """Return the raw bytes of a freshly captured image."""

    async def from_capture(
        self, descriptor: CaptureDescriptor, file_name: str
    ) -> PhotoRecord:
        """Build a record for an image just written under file_name."""

    async def rehydrate(self, record: PhotoRecord) -> PhotoRecord:
        """Make a persisted record renderable in the current session."""


def convert_file_src(
    uri: str, server_url: str = DEFAULT_WEBVIEW_SERVER_URL
) -> str:
    """Rewrite a native file URI into a URL the webview can serve."""
    if uri.startswith(_FILE_SCHEME):
        return f"{server_url}{_FILE_START}{uri[len(_FILE_SCHEME):]}"
    if uri.startswith("/"):
        return f"{server_url}{_FILE_START}{uri}"
    return uri


def to_jpeg_data_url(data: bytes) -> str:
    """Encode image bytes as a JPEG data URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"{JPEG_DATA_URL_PREFIX}{encoded}"


@dataclass
class RichImageResolver(ImageResolver):
    """Resolver for platforms with native file access and URI rewriting."""

    file_storage: FileStorage
    webview_server_url: str = DEFAULT_WEBVIEW_SERVER_URL

    async def read_capture(self, descriptor: CaptureDescriptor) -> bytes:
        """Read the captured image from its native path."""
        if not descriptor.native_path:
            raise CaptureError("Camera returned no native path")
        return await self.file_storage.read(descriptor.native_path)

    async def from_capture(
        self, descriptor: CaptureDescriptor, file_name: str
    ) -> PhotoRecord:
        """Point the record at the stored file through the webview server."""
        uri = await self.file_storage.resolve_uri(file_name)
        return PhotoRecord(
            filepath=file_name,
            webview_path=convert_file_src(uri, self.webview_server_url),
        )

    async def rehydrate(self, record: PhotoRecord) -> PhotoRecord:
        """Return the record as-is; its webview path survives restarts."""
        return record


@dataclass
class ConstrainedImageResolver(ImageResolver):
    """Resolver for platforms that must hold image bytes in memory."""

    file_storage: FileStorage
    fetcher: ImageFetcher

    async def read_capture(self, descriptor: CaptureDescriptor) -> bytes:
        """Fetch the captured image from its transient path."""
        if not descriptor.transient_path:
            raise CaptureError("Camera returned no transient path")
        return await self.fetcher.fetch(descriptor.transient_path)

    async def from_capture(
        self, descriptor: CaptureDescriptor, file_name: str
    ) -> PhotoRecord:
        """Render from the transient path, already addressable in-session."""
        return PhotoRecord(filepath=file_name, webview_path=descriptor.transient_path)

    async def rehydrate(self, record: PhotoRecord) -> PhotoRecord:
        """Read the stored file and attach it as a data URL."""
        data = await self.file_storage.read(record.filepath)
        return record.with_decoded_data(to_jpeg_data_url(data))


def build_resolver(
    platform: PlatformCapability,
    file_storage: FileStorage,
    fetcher: ImageFetcher,
    webview_server_url: str = DEFAULT_WEBVIEW_SERVER_URL,
) -> ImageResolver:
    """Select the resolver for the active platform profile."""
    if platform.profile() == PlatformProfile.RICH:
        return RichImageResolver(
            file_storage=file_storage, webview_server_url=webview_server_url
        )
    return ConstrainedImageResolver(file_storage=file_storage, fetcher=fetcher)
