"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from photo_gallery.adapters.http_camera import HttpxCamera
from photo_gallery.adapters.http_image_fetcher import HttpxImageFetcher
from photo_gallery.adapters.json_file_kv_storage import JsonFileKeyValueStorage
from photo_gallery.adapters.local_file_storage import LocalFileStorage
from photo_gallery.adapters.supabase_kv_storage import SupabaseKeyValueStorage
from photo_gallery.config import Settings
from photo_gallery.services.capture import Camera, PhotoCaptureCoordinator
from photo_gallery.services.gallery import PhotoRecordStore
from photo_gallery.services.platform import (
    PlatformCapability,
    StaticPlatform,
    parse_platform_profile,
)
from photo_gallery.services.resolver import ImageResolver, build_resolver
from photo_gallery.services.storage import FileStorage, KeyValueStorage


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    platform: PlatformCapability
    camera: Camera
    file_storage: FileStorage
    kv_storage: KeyValueStorage
    resolver: ImageResolver
    photo_store: PhotoRecordStore
    capture_coordinator: PhotoCaptureCoordinator
    close_resources: Callable[[], Awaitable[None]]


def build_kv_storage(settings: Settings) -> KeyValueStorage:
    """Create the configured key-value storage backend."""
    if settings.kv_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase key-value storage requires URL and key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStorage(client, table=settings.supabase_kv_table)
    if settings.kv_backend == "file":
        return JsonFileKeyValueStorage(Path(settings.data_dir) / settings.kv_file)
    raise ValueError(f"Unknown key-value backend: {settings.kv_backend!r}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    profile = parse_platform_profile(resolved_settings.platform_profile)
    platform = StaticPlatform(profile)
    file_storage = LocalFileStorage.create(resolved_settings.data_dir)
    kv_storage = build_kv_storage(resolved_settings)
    camera = HttpxCamera.create(
        resolved_settings.camera_base_url,
        timeout=resolved_settings.http_timeout_seconds,
    )
    fetcher = HttpxImageFetcher.create(timeout=resolved_settings.http_timeout_seconds)
    resolver = build_resolver(
        platform,
        file_storage,
        fetcher,
        webview_server_url=resolved_settings.webview_server_url,
    )
    photo_store = PhotoRecordStore(
        kv_storage=kv_storage,
        file_storage=file_storage,
        resolver=resolver,
        storage_key=resolved_settings.photo_storage_key,
    )
    capture_coordinator = PhotoCaptureCoordinator(
        camera=camera,
        file_storage=file_storage,
        resolver=resolver,
        store=photo_store,
        quality=resolved_settings.camera_quality,
    )

    async def close_resources() -> None:
        await camera.close()
        await fetcher.close()

    return AppContainer(
        settings=resolved_settings,
        platform=platform,
        camera=camera,
        file_storage=file_storage,
        kv_storage=kv_storage,
        resolver=resolver,
        photo_store=photo_store,
        capture_coordinator=capture_coordinator,
        close_resources=close_resources,
    )
