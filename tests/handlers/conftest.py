import base64
import json
from collections.abc import Mapping
from types import SimpleNamespace
from typing import Any

import pytest

from core.models.errors import StorageProviderError
from core.models.upload import FileMetadata, UploadedFile, UploadResult
from core.repositories.course_repository import Course, CourseRepository
from core.repositories.storage_provider import StorageProvider
from handlers.delete_course_image.service import DeleteCourseImageService
from handlers.upload_course_image.service import CourseImageUploadService


class RecordingStorage(StorageProvider):
    """StorageProvider test double that records calls."""

    name = "Recording"

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.uploads: list[dict[str, Any]] = []
        self.deleted: list[str] = []

    def upload_file(
        self,
        *,
        file: UploadedFile,
        storage_path: str,
        thumbnail_path: str,
        primary_buffer: bytes,
        thumbnail_buffer: bytes,
        metadata: FileMetadata | Mapping[str, str],
        content_type: str = "image/jpeg",
    ) -> UploadResult:
        if self.fail:
            raise StorageProviderError(
                message="Failed to upload to Recording Storage: Failed to upload thumbnail"
            )
        self.uploads.append(
            {
                "file": file,
                "storage_path": storage_path,
                "thumbnail_path": thumbnail_path,
                "metadata": metadata,
                "content_type": content_type,
            }
        )
        return UploadResult(
            url=self.get_public_url(storage_path=storage_path),
            file_name=file.name,
            storage_path=storage_path,
            thumbnail_url=self.get_public_url(storage_path=thumbnail_path),
        )

    def delete_file(self, *, storage_path: str) -> None:
        if self.fail:
            raise StorageProviderError(message="Failed to delete from Recording Storage")
        self.deleted.append(storage_path)

    def get_public_url(self, *, storage_path: str) -> str:
        return f"https://cdn.example.com/{storage_path}"

    def is_configured(self) -> bool:
        return True


class DummyCourseRepository(CourseRepository):
    def __init__(self, courses: dict[str, Course]) -> None:
        self._courses = courses

    def fetch_course(self, *, course_id: str) -> Course | None:
        return self._courses.get(course_id)


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture
def courses() -> DummyCourseRepository:
    return DummyCourseRepository({"c1": {"instructorId": "u1", "title": "Intro to Python"}})


@pytest.fixture
def authorizer() -> dict[str, Any]:
    return {"uid": "u1", "role": "instructor"}


@pytest.fixture
def upload_course_image_event(sample_image_binary, authorizer) -> dict[str, Any]:
    encoded = base64.b64encode(sample_image_binary).decode("utf-8")
    return {
        "httpMethod": "POST",
        "path": "/courses/images",
        "body": json.dumps(
            {
                "course_id": "c1",
                "instructor_id": "u1",
                "image_name": "cover.png",
                "file": encoded,
                "thumbnail": encoded,
            }
        ),
        "headers": {"Content-Type": "application/json"},
        "requestContext": {"authorizer": authorizer},
    }


@pytest.fixture
def delete_course_image_event(authorizer) -> dict[str, Any]:
    return {
        "httpMethod": "DELETE",
        "path": "/courses/images",
        "queryStringParameters": {
            "course_id": "c1",
            "storage_path": "courses/u1/images/c1_1700000000000.png",
        },
        "requestContext": {"authorizer": authorizer},
    }


@pytest.fixture
def upload_service_wiring(monkeypatch, storage, courses, supabase_env):
    """Make the upload handler build its service on the test doubles."""

    class WiredUploadService(CourseImageUploadService):
        def __init__(self) -> None:
            super().__init__(storage=storage, courses=courses)

    monkeypatch.setattr(
        "handlers.upload_course_image.handler.CourseImageUploadService",
        WiredUploadService,
    )
    return storage


@pytest.fixture
def delete_service_wiring(monkeypatch, storage, courses, supabase_env):
    """Make the delete handler build its service on the test doubles."""

    class WiredDeleteService(DeleteCourseImageService):
        def __init__(self) -> None:
            super().__init__(storage=storage, courses=courses)

    monkeypatch.setattr(
        "handlers.delete_course_image.handler.DeleteCourseImageService",
        WiredDeleteService,
    )
    return storage
