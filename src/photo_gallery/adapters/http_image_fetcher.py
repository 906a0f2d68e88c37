"""Fetches transient image paths into memory."""

import base64
import binascii
from dataclasses import dataclass

import httpx

from photo_gallery.domain.errors import FileIOError
from photo_gallery.services.resolver import ImageFetcher

_DATA_URL_PREFIX = "data:"


@dataclass
class HttpxImageFetcher(ImageFetcher):
    """Loads http(s) or inline data URLs."""

    http_client: httpx.AsyncClient
    timeout: float = 20.0

    @classmethod
    def create(cls, timeout: float = 20.0) -> "HttpxImageFetcher":
        """Create a fetcher with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(), timeout=timeout)

    async def fetch(self, path: str) -> bytes:
        """Return the bytes behind a transient path."""
        if path.startswith(_DATA_URL_PREFIX):
            return _decode_data_url(path)
        try:
            response = await self.http_client.get(path, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise FileIOError(f"Failed to fetch {path}") from exc
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _decode_data_url(url: str) -> bytes:
    """Decode a base64 data URL."""
    header, _, encoded = url.partition(",")
    if not header.endswith(";base64"):
        raise FileIOError("Only base64 data URLs are supported")
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise FileIOError("Malformed data URL") from exc
