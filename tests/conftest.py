"""
Pytest configuration and fixtures for timeless tests.
"""

import io
import threading
from collections.abc import Generator
from datetime import date

import pytest
from PIL import Image

import timeless.config as config_module
from timeless.models.memory import Memory
from timeless.services.client import TimelessClient
from timeless.services.uploads import ImageFile
from timeless.ui.handlers.error import UploadError

CONFIG_KEYS = [
    "ENVIRONMENT",
    "DEBUG",
    "LOG_LEVEL",
    "TIMELESS_DB_PATH",
    "TIMELINE_START_DATE",
    "TIMELINE_END_DATE",
    "ASSET_HOST",
    "CLOUDINARY_CLOUD_NAME",
    "CLOUDINARY_UPLOAD_PRESET",
    "GCS_PHOTOS_BUCKET",
    "GOOGLE_CLOUD_PROJECT",
    "GCS_PUBLIC_BASE_URL",
    "UPLOAD_MAX_WORKERS",
    "UPLOAD_TIMEOUT_SECONDS",
    "MAX_FILE_SIZE",
    "SWIPE_THRESHOLD",
]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch) -> Generator[None, None, None]:
    """Start every test from an empty environment and a fresh config cache."""
    for key in CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setattr(config_module, "_config", None)
    yield
    config_module._config = None


def make_image_bytes(format_type: str = "JPEG", size: tuple[int, int] = (32, 32), exif=None) -> bytes:
    """Encode a small solid-colour image."""
    image = Image.new("RGB", size, color="red")
    buffer = io.BytesIO()
    if exif is not None:
        image.save(buffer, format=format_type, exif=exif)
    else:
        image.save(buffer, format=format_type)
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture
def image_files(jpeg_bytes) -> list[ImageFile]:
    """Two valid images, imgA first."""
    return [
        ImageFile(name="imgA.jpg", data=jpeg_bytes, mime_type="image/jpeg"),
        ImageFile(name="imgB.jpg", data=jpeg_bytes, mime_type="image/jpeg"),
    ]


class FakeAssetHost:
    """Asset host that hands out predictable URLs and can be told to fail."""

    def __init__(self, fail_on: set[str] | None = None, delays: dict[str, float] | None = None):
        self.fail_on = fail_on or set()
        self.delays = delays or {}
        self.uploaded: list[str] = []
        self._lock = threading.Lock()

    def upload(self, image: ImageFile) -> str:
        delay = self.delays.get(image.name)
        if delay:
            threading.Event().wait(delay)
        if image.name in self.fail_on:
            raise UploadError(f"Image upload failed for '{image.name}'", details={"filename": image.name})
        with self._lock:
            self.uploaded.append(image.name)
        return f"https://assets.example.com/{image.name}"


@pytest.fixture
def asset_host_factory():
    """Build fake asset hosts with failures or delays for specific files."""
    return FakeAssetHost


@pytest.fixture
def fake_asset_host() -> FakeAssetHost:
    return FakeAssetHost()


@pytest.fixture
def client(fake_asset_host) -> Generator[TimelessClient, None, None]:
    """Client backed by an in-memory database and the fake asset host."""
    timeless_client = TimelessClient(":memory:", fake_asset_host, max_workers=4).initialize()
    yield timeless_client
    timeless_client.close()


@pytest.fixture
def make_memory():
    """Factory for Memory instances with sensible defaults."""

    def _make(memory_id: str, memory_date: date, title: str | None = None, images: list[str] | None = None) -> Memory:
        return Memory(
            id=memory_id,
            title=title or f"Memory {memory_id}",
            description=f"Description of {memory_id}",
            images=images if images is not None else [f"https://assets.example.com/{memory_id}.jpg"],
            date=memory_date,
        )

    return _make
