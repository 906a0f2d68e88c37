"""Shared test fixtures."""

import asyncio
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from photo_gallery.config import Settings
from photo_gallery.containers import AppContainer
from photo_gallery.domain.errors import (
    CaptureError,
    FileIOError,
    FileMissingError,
    PersistenceError,
)
from photo_gallery.domain.photos import CaptureDescriptor, CaptureOptions
from photo_gallery.services.capture import Camera, PhotoCaptureCoordinator
from photo_gallery.services.gallery import PhotoRecordStore
from photo_gallery.services.platform import PlatformProfile, StaticPlatform
from photo_gallery.services.resolver import ImageFetcher, build_resolver
from photo_gallery.services.storage import FileStorage, KeyValueStorage


@dataclass
class InMemoryFileStorage(FileStorage):
    """In-memory file storage that records every call."""

    files: dict[str, bytes] = field(default_factory=dict)
    reads: list[str] = field(default_factory=list)
    writes: list[str] = field(default_factory=list)
    deletes: list[str] = field(default_factory=list)
    fail_writes: bool = False
    uri_root: str = "file:///data"

    async def read(self, path: str) -> bytes:
        self.reads.append(path)
        await asyncio.sleep(0)
        if path not in self.files:
            raise FileMissingError(path)
        return self.files[path]

    async def write(self, path: str, data: bytes) -> None:
        await asyncio.sleep(0)
        if self.fail_writes:
            raise FileIOError(path)
        self.writes.append(path)
        self.files[path] = data

    async def resolve_uri(self, path: str) -> str:
        return f"{self.uri_root}/{path}"

    async def delete(self, path: str) -> None:
        self.deletes.append(path)
        if path not in self.files:
            raise FileMissingError(path)
        del self.files[path]


@dataclass
class InMemoryKeyValueStorage(KeyValueStorage):
    """In-memory key-value storage that records every write."""

    values: dict[str, str] = field(default_factory=dict)
    history: list[tuple[str, str]] = field(default_factory=list)
    unavailable: bool = False

    async def get(self, key: str) -> str | None:
        await asyncio.sleep(0)
        if self.unavailable:
            raise PersistenceError(key)
        return self.values.get(key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.sleep(0)
        if self.unavailable:
            raise PersistenceError(key)
        self.history.append((key, value))
        self.values[key] = value


@dataclass
class FakeCamera(Camera):
    """Camera that hands out descriptors, optionally after a delay."""

    delays: list[float] = field(default_factory=list)
    error: CaptureError | None = None
    calls: list[CaptureOptions] = field(default_factory=list)
    storage: InMemoryFileStorage | None = None

    async def capture(self, options: CaptureOptions) -> CaptureDescriptor:
        index = len(self.calls)
        self.calls.append(options)
        if self.delays:
            await asyncio.sleep(self.delays.pop(0))
        if self.error is not None:
            raise self.error
        native_path = f"/camera/IMG_{index}.jpg"
        if self.storage is not None:
            self.storage.files[native_path] = f"native-{index}".encode()
        return CaptureDescriptor(
            native_path=native_path,
            transient_path=f"blob:http://localhost/capture-{index}",
        )


@dataclass
class FakeImageFetcher(ImageFetcher):
    """Fetcher that returns bytes derived from the requested path."""

    fetched: list[str] = field(default_factory=list)

    async def fetch(self, path: str) -> bytes:
        self.fetched.append(path)
        await asyncio.sleep(0)
        return f"web:{path}".encode()


def counting_clock(start: int = 1000) -> Callable[[], int]:
    """Return a clock yielding increasing millisecond timestamps."""
    counter = itertools.count(start)
    return lambda: next(counter)


def build_test_container(
    settings: Settings,
    profile: PlatformProfile,
    file_storage: InMemoryFileStorage | None = None,
    kv_storage: InMemoryKeyValueStorage | None = None,
    camera: FakeCamera | None = None,
) -> AppContainer:
    """Wire the gallery core with in-memory capabilities."""
    files = file_storage or InMemoryFileStorage()
    kv = kv_storage or InMemoryKeyValueStorage()
    fake_camera = camera or FakeCamera(storage=files)
    platform = StaticPlatform(profile)
    resolver = build_resolver(platform, files, FakeImageFetcher())
    store = PhotoRecordStore(kv_storage=kv, file_storage=files, resolver=resolver)
    coordinator = PhotoCaptureCoordinator(
        camera=fake_camera,
        file_storage=files,
        resolver=resolver,
        store=store,
        clock=counting_clock(),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        platform=platform,
        camera=fake_camera,
        file_storage=files,
        kv_storage=kv,
        resolver=resolver,
        photo_store=store,
        capture_coordinator=coordinator,
        close_resources=close_resources,
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        platform_profile="rich",
        data_dir=str(tmp_path / "data"),
        camera_base_url="http://camera.test",
    )


@pytest.fixture
def file_storage() -> InMemoryFileStorage:
    return InMemoryFileStorage()


@pytest.fixture
def kv_storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def rich_container(
    settings: Settings,
    file_storage: InMemoryFileStorage,
    kv_storage: InMemoryKeyValueStorage,
) -> AppContainer:
    return build_test_container(
        settings, PlatformProfile.RICH, file_storage, kv_storage
    )


@pytest.fixture
def constrained_container(
    settings: Settings,
    file_storage: InMemoryFileStorage,
    kv_storage: InMemoryKeyValueStorage,
) -> AppContainer:
    return build_test_container(
        settings, PlatformProfile.CONSTRAINED, file_storage, kv_storage
    )
