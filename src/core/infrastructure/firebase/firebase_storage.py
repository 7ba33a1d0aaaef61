"""Firebase Storage implementation of StorageProvider."""

from collections.abc import Mapping

from aws_lambda_powertools import Logger
from google.api_core.exceptions import GoogleAPICallError, NotFound

from core.infrastructure.adapters.firebase_adapter import (
    FirebaseStorageAdapter,
    FirebaseStorageAdapterProtocol,
)
from core.infrastructure.provider_support import (
    delete_failure,
    upload_failure,
    validate_upload_input,
)
from core.models.upload import FileMetadata, UploadedFile, UploadResult
from core.repositories.storage_provider import StorageProvider
from core.utils.constants import (
    DEFAULT_IMAGE_CONTENT_TYPE,
    FIREBASE_DEFAULT_BUCKET_SUFFIX,
    FIREBASE_PUBLIC_URL_BASE,
    UPLOAD_STAGE_PRIMARY,
    UPLOAD_STAGE_THUMBNAIL,
)
from core.utils.paths import thumbnail_path_for

logger = Logger(UTC=True)


class FirebaseStorageProvider(StorageProvider):
    """Course image storage backed by Firebase Storage.

    Objects are written with ``upload_from_string`` and then made public
    with an explicit ACL call.
    """

    name = "Firebase"

    def __init__(
        self,
        project_id: str,
        bucket_name: str | None = None,
        adapter: FirebaseStorageAdapterProtocol | None = None,
    ) -> None:
        """Create the provider; no network call is made here."""
        self._project_id = project_id
        self._bucket_name = bucket_name or f"{project_id}{FIREBASE_DEFAULT_BUCKET_SUFFIX}"
        self._storage: FirebaseStorageAdapterProtocol = adapter or FirebaseStorageAdapter(
            project_id=project_id,
            bucket_name=self._bucket_name,
        )

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    def upload_file(
        self,
        *,
        file: UploadedFile,
        storage_path: str,
        thumbnail_path: str,
        primary_buffer: bytes,
        thumbnail_buffer: bytes,
        metadata: FileMetadata | Mapping[str, str],
        content_type: str = DEFAULT_IMAGE_CONTENT_TYPE,
    ) -> UploadResult:
        """Upload the primary image and thumbnail, then make both public."""
        file_metadata = validate_upload_input(
            storage_path=storage_path,
            thumbnail_path=thumbnail_path,
            primary_buffer=primary_buffer,
            thumbnail_buffer=thumbnail_buffer,
            metadata=metadata,
        )
        object_metadata = file_metadata.to_object_metadata()

        logger.debug(
            "Uploading image to Firebase Storage",
            extra={
                "bucket": self._bucket_name,
                "storage_path": storage_path,
                "thumbnail_path": thumbnail_path,
                "size": len(primary_buffer),
            },
        )

        self._write_public_object(
            stage=UPLOAD_STAGE_PRIMARY,
            key=storage_path,
            body=primary_buffer,
            content_type=content_type,
            metadata=object_metadata,
        )
        self._write_public_object(
            stage=UPLOAD_STAGE_THUMBNAIL,
            key=thumbnail_path,
            body=thumbnail_buffer,
            content_type=content_type,
            metadata=object_metadata,
        )

        logger.info(
            "Image uploaded to Firebase Storage",
            extra={"storage_path": storage_path, "thumbnail_path": thumbnail_path},
        )

        return UploadResult(
            url=self.get_public_url(storage_path=storage_path),
            file_name=file.name,
            storage_path=storage_path,
            thumbnail_url=self.get_public_url(storage_path=thumbnail_path),
        )

    def _write_public_object(
        self,
        *,
        stage: str,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        try:
            self._storage.save_object(
                key=key,
                body=body,
                content_type=content_type,
                metadata=metadata,
            )
            self._storage.make_public(key=key)

        except GoogleAPICallError as exc:
            logger.error(
                "Firebase Storage rejected upload",
                extra={"stage": stage, "key": key, "error": exc.message},
            )
            raise upload_failure(
                self.name, stage=stage, path=key, reason=exc.message
            ) from exc

        except Exception as exc:
            logger.exception(
                "Unexpected error uploading to Firebase Storage",
                extra={"stage": stage, "key": key},
            )
            raise upload_failure(self.name, stage=stage, path=key) from exc

    def delete_file(self, *, storage_path: str) -> None:
        """Delete the primary object and its thumbnail, ignoring missing ones."""
        thumbnail_path = thumbnail_path_for(storage_path)
        logger.debug(
            "Deleting image from Firebase Storage",
            extra={"storage_path": storage_path, "thumbnail_path": thumbnail_path},
        )

        try:
            self._delete_if_exists(key=storage_path)
            self._delete_if_exists(key=thumbnail_path)

        except Exception as exc:
            logger.exception(
                "Firebase Storage delete failed",
                extra={"storage_path": storage_path},
            )
            raise delete_failure(self.name, path=storage_path) from exc

        logger.info("Image deleted from Firebase Storage", extra={"storage_path": storage_path})

    def _delete_if_exists(self, *, key: str) -> None:
        try:
            self._storage.delete_object(key=key)
        except NotFound:
            logger.warning("Object not found or already deleted", extra={"key": key})

    def get_public_url(self, *, storage_path: str) -> str:
        return f"{FIREBASE_PUBLIC_URL_BASE}/{self._bucket_name}/{storage_path}"

    def is_configured(self) -> bool:
        return bool(self._project_id)
