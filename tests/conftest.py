"""
Pytest configuration and shared fixtures for course image storage tests.
Provides sample images, upload metadata and a clean storage environment.
"""

import base64
from typing import Any

import pytest

from core.infrastructure.storage_factory import StorageFactory
from core.models.upload import FileMetadata, UploadedFile
from core.utils.constants import STORAGE_ENV_VARS


@pytest.fixture(autouse=True)
def clean_storage_env(monkeypatch):
    """Start every test without storage configuration or a cached provider."""
    for name in STORAGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    StorageFactory.reset()
    yield
    StorageFactory.reset()


@pytest.fixture
def firebase_env(monkeypatch) -> dict[str, str]:
    env = {
        "STORAGE_PROVIDER": "firebase",
        "FIREBASE_PROJECT_ID": "demo-project",
    }
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    return env


@pytest.fixture
def supabase_env(monkeypatch) -> dict[str, str]:
    env = {
        "STORAGE_PROVIDER": "supabase",
        "SUPABASE_URL": "https://abc.supabase.co",
        "SUPABASE_SERVICE_ROLE_KEY": "service-role-key",
        "SUPABASE_STORAGE_BUCKET": "course-images",
    }
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    return env


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (header only)."""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


@pytest.fixture
def sample_webp_binary() -> bytes:
    return b"RIFF\x24\x00\x00\x00WEBPVP8 fake-webp-data"


@pytest.fixture
def uploaded_file() -> UploadedFile:
    return UploadedFile(name="cover.jpg", content_type="image/jpeg", size=1024)


@pytest.fixture
def file_metadata() -> FileMetadata:
    return FileMetadata(
        course_id="c1",
        instructor_id="u1",
        uploaded_by="u1",
        uploaded_at="2024-05-01T10:00:00+00:00",
    )


@pytest.fixture
def upload_kwargs(uploaded_file, file_metadata) -> dict[str, Any]:
    """Keyword arguments for a valid StorageProvider.upload_file call."""
    return {
        "file": uploaded_file,
        "storage_path": "courses/u1/images/c1_1700000000000.jpg",
        "thumbnail_path": "courses/u1/thumbnails/thumb_c1_1700000000000.jpg",
        "primary_buffer": b"main-image-bytes",
        "thumbnail_buffer": b"thumb-bytes",
        "metadata": file_metadata,
        "content_type": "image/jpeg",
    }
