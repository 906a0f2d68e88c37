"""Camera client for an HTTP capture service."""

from dataclasses import dataclass

import httpx

from photo_gallery.domain.errors import CaptureError
from photo_gallery.domain.photos import CaptureDescriptor, CaptureOptions
from photo_gallery.services.capture import Camera

_DENIED_STATUSES = {401, 403}
_CANCELLED_STATUSES = {409, 499}


@dataclass
class HttpxCamera(Camera):
    """Camera backed by a capture service reachable over HTTP."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 20.0

    @classmethod
    def create(cls, base_url: str, timeout: float = 20.0) -> "HttpxCamera":
        """Create a camera client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def capture(self, options: CaptureOptions) -> CaptureDescriptor:
        """Trigger a capture and return where the picture can be read."""
        try:
            response = await self.http_client.post(
                f"{self.base_url}/capture",
                json={
                    "quality": options.quality,
                    "source": str(options.source),
                    "resultType": options.result_type,
                },
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise CaptureError("Camera unavailable") from exc
        if response.status_code in _DENIED_STATUSES:
            raise CaptureError("Camera access denied")
        if response.status_code in _CANCELLED_STATUSES:
            raise CaptureError("Capture cancelled")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise CaptureError("Camera capture failed") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise CaptureError("Camera returned malformed response") from exc
        if not isinstance(payload, dict):
            raise CaptureError("Camera returned malformed response")
        descriptor = CaptureDescriptor(
            native_path=payload.get("path"),
            transient_path=payload.get("webPath"),
        )
        if descriptor.native_path is None and descriptor.transient_path is None:
            raise CaptureError("Camera returned no image location")
        return descriptor

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
