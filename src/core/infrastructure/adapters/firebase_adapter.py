"""Thin adapter for interacting with Firebase Storage (Google Cloud Storage)."""

from collections.abc import Mapping
from typing import Protocol

import firebase_admin
from firebase_admin import storage


class _GCSBlob(Protocol):
    """Internal typing for google.cloud.storage.Blob (GCS-facing only)."""

    metadata: Mapping[str, str] | None

    def upload_from_string(self, data: bytes, content_type: str = ...) -> None: ...

    def make_public(self) -> None: ...

    def delete(self) -> None: ...


class _GCSBucket(Protocol):
    """Internal typing for google.cloud.storage.Bucket (GCS-facing only)."""

    name: str

    def blob(self, blob_name: str) -> _GCSBlob: ...


class FirebaseStorageAdapterProtocol(Protocol):
    """Minimal Firebase Storage adapter protocol (provider-facing)."""

    def save_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None: ...

    def make_public(self, *, key: str) -> None: ...

    def delete_object(self, *, key: str) -> None: ...


def get_firebase_app(project_id: str, bucket_name: str) -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use.

    Credentials come from the environment (application default credentials).
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        return firebase_admin.initialize_app(
            options={"projectId": project_id, "storageBucket": bucket_name}
        )


class FirebaseStorageAdapter:
    """Low-level Firebase Storage operations (mechanical, no error handling).

    This adapter:
    - Wraps a firebase_admin storage bucket
    - Resolves the app and bucket lazily, so construction never does I/O
    - Does NOT handle errors (lets them bubble up)
    - Provider implementations catch and translate errors
    """

    def __init__(self, *, project_id: str, bucket_name: str) -> None:
        self._project_id = project_id
        self._bucket_name = bucket_name
        self._bucket: _GCSBucket | None = None

    @property
    def bucket(self) -> _GCSBucket:
        if self._bucket is None:
            app = get_firebase_app(self._project_id, self._bucket_name)
            self._bucket = storage.bucket(self._bucket_name, app=app)
        return self._bucket

    def save_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        """Write object bytes with custom metadata.
        Raises google-cloud exceptions - caught by provider implementation.
        """
        blob = self.bucket.blob(key)
        blob.metadata = metadata
        blob.upload_from_string(body, content_type=content_type)

    def make_public(self, *, key: str) -> None:
        """Grant public read on an existing object."""
        self.bucket.blob(key).make_public()

    def delete_object(self, *, key: str) -> None:
        """Delete an object.
        Raises google.api_core.exceptions.NotFound when it does not exist.
        """
        self.bucket.blob(key).delete()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(bucket={self._bucket_name!r})"
