"""Domain models for gallery photos and camera captures."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

JPEG_DATA_URL_PREFIX = "data:image/jpeg;base64,"


class PhotoRecord(BaseModel):
    """A gallery entry: durable file name plus an optional render path."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    filepath: str = Field(min_length=1)
    webview_path: str | None = Field(default=None, alias="webviewPath")
    decoded_data: str | None = Field(
        default=None, alias="decodedData", exclude=True
    )

    def to_persisted(self) -> dict[str, str]:
        """Return the durable form, without any decoded image data."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_view(self) -> dict[str, str]:
        """Return the in-session form, including decoded data when loaded."""
        payload = self.to_persisted()
        if self.decoded_data is not None:
            payload["decodedData"] = self.decoded_data
        return payload

    def with_decoded_data(self, data_url: str) -> "PhotoRecord":
        """Return a copy carrying decoded data instead of a webview path."""
        return self.model_copy(
            update={"decoded_data": data_url, "webview_path": None}
        )


class CameraSource(StrEnum):
    """Where the camera plugin takes the picture from."""

    CAMERA = "CAMERA"
    PHOTOS = "PHOTOS"
    PROMPT = "PROMPT"


@dataclass(frozen=True)
class CaptureOptions:
    """Options passed to the camera for a single capture."""

    quality: int = 100
    source: CameraSource = CameraSource.CAMERA
    result_type: str = "uri"


@dataclass(frozen=True)
class CaptureDescriptor:
    """Where a freshly captured image can be found."""

    native_path: str | None = None
    transient_path: str | None = None
