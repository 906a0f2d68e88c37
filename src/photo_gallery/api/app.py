"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status

from photo_gallery.app_logging import configure_logging
from photo_gallery.containers import AppContainer
from photo_gallery.domain.errors import (
    CaptureError,
    FileIOError,
    GalleryError,
    PersistenceError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.photo_store.load()
        except GalleryError:
            logger.exception("Failed to load photo gallery")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/photos")
    async def list_photos(request: Request) -> dict[str, object]:
        """Return the gallery, newest first."""
        state_container: AppContainer = request.app.state.container
        return {
            "profile": str(state_container.platform.profile()),
            "photos": [photo.to_view() for photo in state_container.photo_store.photos],
        }

    @app.post("/photos", status_code=status.HTTP_201_CREATED)
    async def take_photo(request: Request) -> dict[str, str]:
        """Capture a new photo and add it to the gallery."""
        state_container: AppContainer = request.app.state.container
        try:
            record = await state_container.capture_coordinator.capture()
        except GalleryError as exc:
            logger.exception("Photo capture failed")
            raise _to_http_error(exc) from exc
        return record.to_view()

    @app.delete("/photos/{filepath}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_photo(filepath: str, request: Request) -> Response:
        """Remove a photo and its stored file."""
        state_container: AppContainer = request.app.state.container
        store = state_container.photo_store
        if not any(photo.filepath == filepath for photo in store.photos):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        try:
            await store.remove(filepath)
        except GalleryError as exc:
            logger.exception("Photo removal failed", extra={"filepath": filepath})
            raise _to_http_error(exc) from exc
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


def _to_http_error(exc: GalleryError) -> HTTPException:
    """Map a gallery failure to an HTTP error response."""
    if isinstance(exc, CaptureError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, FileIOError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    if isinstance(exc, PersistenceError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
