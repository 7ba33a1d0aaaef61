"""Unit tests for FirebaseStorageProvider."""

from typing import Any

import pytest
from google.api_core.exceptions import Forbidden, NotFound, ServiceUnavailable

from core.infrastructure.firebase.firebase_storage import FirebaseStorageProvider
from core.models.errors import StorageProviderError, ValidationError


class DummyFirebaseAdapter:
    """In-memory Firebase Storage adapter test double."""

    def __init__(
        self,
        *,
        save_errors: dict[str, Exception] | None = None,
        public_errors: dict[str, Exception] | None = None,
        delete_errors: dict[str, Exception] | None = None,
    ) -> None:
        self._save_errors = save_errors or {}
        self._public_errors = public_errors or {}
        self._delete_errors = delete_errors or {}
        self.saved: dict[str, dict[str, Any]] = {}
        self.public: list[str] = []
        self.deleted: list[str] = []

    def save_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        if key in self._save_errors:
            raise self._save_errors[key]
        self.saved[key] = {"body": body, "content_type": content_type, "metadata": metadata}

    def make_public(self, *, key: str) -> None:
        if key in self._public_errors:
            raise self._public_errors[key]
        self.public.append(key)

    def delete_object(self, *, key: str) -> None:
        if key in self._delete_errors:
            raise self._delete_errors[key]
        self.deleted.append(key)


PRIMARY = "courses/u1/images/c1_1700000000000.jpg"
THUMBNAIL = "courses/u1/thumbnails/thumb_c1_1700000000000.jpg"


class TestFirebaseUpload:
    def test_upload_file_success(self, upload_kwargs) -> None:
        adapter = DummyFirebaseAdapter()
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)

        result = provider.upload_file(**upload_kwargs)

        base = "https://storage.googleapis.com/demo-project.appspot.com"
        assert result.url == f"{base}/{PRIMARY}"
        assert result.thumbnail_url == f"{base}/{THUMBNAIL}"
        assert result.storage_path == PRIMARY
        assert result.file_name == "cover.jpg"

        assert list(adapter.saved) == [PRIMARY, THUMBNAIL]
        assert adapter.public == [PRIMARY, THUMBNAIL]
        assert adapter.saved[PRIMARY]["body"] == b"main-image-bytes"
        assert adapter.saved[THUMBNAIL]["body"] == b"thumb-bytes"
        assert adapter.saved[PRIMARY]["content_type"] == "image/jpeg"

    def test_upload_attaches_object_metadata(self, upload_kwargs) -> None:
        adapter = DummyFirebaseAdapter()
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)

        provider.upload_file(**upload_kwargs)

        expected = {
            "courseId": "c1",
            "instructorId": "u1",
            "uploadedBy": "u1",
            "uploadedAt": "2024-05-01T10:00:00+00:00",
        }
        assert adapter.saved[PRIMARY]["metadata"] == expected
        assert adapter.saved[THUMBNAIL]["metadata"] == expected

    def test_upload_uses_explicit_bucket(self, upload_kwargs) -> None:
        provider = FirebaseStorageProvider(
            "demo-project", "custom-bucket", adapter=DummyFirebaseAdapter()
        )

        result = provider.upload_file(**upload_kwargs)

        assert provider.bucket_name == "custom-bucket"
        assert result.url == f"https://storage.googleapis.com/custom-bucket/{PRIMARY}"

    def test_upload_accepts_metadata_mapping(self, upload_kwargs) -> None:
        adapter = DummyFirebaseAdapter()
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)
        upload_kwargs["metadata"] = {
            "course_id": "c1",
            "instructor_id": "u1",
            "uploaded_by": "u1",
            "uploaded_at": "2024-05-01T10:00:00+00:00",
        }

        provider.upload_file(**upload_kwargs)

        assert adapter.saved[PRIMARY]["metadata"]["courseId"] == "c1"

    def test_primary_network_error_is_wrapped(self, upload_kwargs) -> None:
        adapter = DummyFirebaseAdapter(save_errors={PRIMARY: Exception("Network error")})
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)

        with pytest.raises(StorageProviderError) as exc_info:
            provider.upload_file(**upload_kwargs)

        assert exc_info.value.message == "Failed to upload to Firebase Storage"
        assert exc_info.value.stage == "main image"
        assert adapter.saved == {}

    def test_primary_api_error_includes_reason(self, upload_kwargs) -> None:
        adapter = DummyFirebaseAdapter(
            save_errors={PRIMARY: ServiceUnavailable("Backend unavailable")}
        )
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)

        with pytest.raises(StorageProviderError) as exc_info:
            provider.upload_file(**upload_kwargs)

        assert exc_info.value.message == (
            "Failed to upload to Firebase Storage: "
            "Failed to upload main image: Backend unavailable"
        )
        assert isinstance(exc_info.value.__cause__, ServiceUnavailable)

    def test_thumbnail_failure_keeps_primary(self, upload_kwargs) -> None:
        adapter = DummyFirebaseAdapter(save_errors={THUMBNAIL: Exception("Network error")})
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)

        with pytest.raises(StorageProviderError) as exc_info:
            provider.upload_file(**upload_kwargs)

        assert exc_info.value.message == (
            "Failed to upload to Firebase Storage: Failed to upload thumbnail"
        )
        assert exc_info.value.stage == "thumbnail"
        assert list(adapter.saved) == [PRIMARY]
        assert adapter.deleted == []

    def test_make_public_failure_is_wrapped(self, upload_kwargs) -> None:
        adapter = DummyFirebaseAdapter(public_errors={PRIMARY: Forbidden("ACL denied")})
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)

        with pytest.raises(StorageProviderError, match="Failed to upload main image: ACL denied"):
            provider.upload_file(**upload_kwargs)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"primary_buffer": b""},
            {"thumbnail_buffer": b""},
            {"storage_path": ""},
            {"thumbnail_path": PRIMARY},
            {"metadata": {"course_id": "c1"}},
        ],
    )
    def test_invalid_input_rejected_before_io(self, upload_kwargs, overrides) -> None:
        adapter = DummyFirebaseAdapter()
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)
        upload_kwargs.update(overrides)

        with pytest.raises(ValidationError):
            provider.upload_file(**upload_kwargs)

        assert adapter.saved == {}


class TestFirebaseDelete:
    def test_delete_removes_primary_and_thumbnail(self) -> None:
        adapter = DummyFirebaseAdapter()
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)

        provider.delete_file(storage_path=PRIMARY)

        assert adapter.deleted == [PRIMARY, THUMBNAIL]

    def test_delete_tolerates_missing_objects(self) -> None:
        adapter = DummyFirebaseAdapter(
            delete_errors={
                "test/path.jpg": NotFound("No such object"),
                "test/thumb_path.jpg": NotFound("No such object"),
            }
        )
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)

        provider.delete_file(storage_path="test/path.jpg")

    def test_delete_continues_after_missing_primary(self) -> None:
        adapter = DummyFirebaseAdapter(delete_errors={PRIMARY: NotFound("No such object")})
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)

        provider.delete_file(storage_path=PRIMARY)

        assert adapter.deleted == [THUMBNAIL]

    def test_delete_failure_is_wrapped(self) -> None:
        adapter = DummyFirebaseAdapter(delete_errors={PRIMARY: Forbidden("denied")})
        provider = FirebaseStorageProvider("demo-project", adapter=adapter)

        with pytest.raises(StorageProviderError) as exc_info:
            provider.delete_file(storage_path=PRIMARY)

        assert exc_info.value.message == "Failed to delete from Firebase Storage"
        assert exc_info.value.error_code == "STORAGE_DELETE_FAILED"


class TestFirebaseConfiguration:
    def test_get_public_url(self) -> None:
        provider = FirebaseStorageProvider("demo-project", adapter=DummyFirebaseAdapter())

        assert provider.get_public_url(storage_path="a/b.png") == (
            "https://storage.googleapis.com/demo-project.appspot.com/a/b.png"
        )

    def test_is_configured(self) -> None:
        assert FirebaseStorageProvider("demo-project", adapter=DummyFirebaseAdapter()).is_configured()

    def test_empty_project_is_not_configured(self) -> None:
        provider = FirebaseStorageProvider("", "bucket", adapter=DummyFirebaseAdapter())

        assert provider.is_configured() is False

    def test_default_adapter_is_lazy(self) -> None:
        provider = FirebaseStorageProvider("demo-project")

        assert provider.is_configured() is True
        assert provider.name == "Firebase"
