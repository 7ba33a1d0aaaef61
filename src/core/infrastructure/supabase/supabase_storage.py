"""Supabase Storage implementation of StorageProvider."""

from collections.abc import Mapping

from aws_lambda_powertools import Logger
from storage3.exceptions import StorageApiError
from storage3.utils import StorageException

from core.infrastructure.adapters.supabase_adapter import (
    SupabaseStorageAdapter,
    SupabaseStorageAdapterProtocol,
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
    SUPABASE_PUBLIC_URL_PATH,
    UPLOAD_STAGE_PRIMARY,
    UPLOAD_STAGE_THUMBNAIL,
)
from core.utils.paths import thumbnail_path_for

logger = Logger(UTC=True)

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "not_found"})


def storage_error_message(exc: StorageException) -> str:
    """Return the human readable message of a storage3 error."""
    if isinstance(exc, StorageApiError):
        return exc.message
    message = getattr(exc, "message", None)
    return str(message) if message else str(exc)


def is_not_found(exc: StorageException) -> bool:
    """Whether a storage3 error means the object does not exist."""
    status = getattr(exc, "status", None)
    code = getattr(exc, "code", None)
    if str(status) in _NOT_FOUND_CODES or str(code) in _NOT_FOUND_CODES:
        return True
    return "not found" in storage_error_message(exc).lower()


class SupabaseStorageProvider(StorageProvider):
    """Course image storage backed by a public Supabase Storage bucket.

    Objects are uploaded with the upsert flag; visibility comes from the
    bucket being public, so no separate ACL call is needed.
    """

    name = "Supabase"

    def __init__(
        self,
        supabase_url: str,
        service_key: str,
        bucket_name: str,
        adapter: SupabaseStorageAdapterProtocol | None = None,
    ) -> None:
        """Create the provider; the SDK client is built on first use."""
        self._supabase_url = supabase_url
        self._service_key = service_key
        self._bucket_name = bucket_name
        self._storage: SupabaseStorageAdapterProtocol = adapter or SupabaseStorageAdapter(
            url=supabase_url,
            service_key=service_key,
            bucket_name=bucket_name,
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
        """Upload the primary image, then the thumbnail."""
        file_metadata = validate_upload_input(
            storage_path=storage_path,
            thumbnail_path=thumbnail_path,
            primary_buffer=primary_buffer,
            thumbnail_buffer=thumbnail_buffer,
            metadata=metadata,
        )
        object_metadata = file_metadata.to_object_metadata()

        logger.debug(
            "Uploading image to Supabase Storage",
            extra={
                "bucket": self._bucket_name,
                "storage_path": storage_path,
                "thumbnail_path": thumbnail_path,
                "size": len(primary_buffer),
            },
        )

        self._upload_object(
            stage=UPLOAD_STAGE_PRIMARY,
            key=storage_path,
            body=primary_buffer,
            content_type=content_type,
            metadata=object_metadata,
        )
        self._upload_object(
            stage=UPLOAD_STAGE_THUMBNAIL,
            key=thumbnail_path,
            body=thumbnail_buffer,
            content_type=content_type,
            metadata=object_metadata,
        )

        result = UploadResult(
            url=self.get_public_url(storage_path=storage_path),
            file_name=file.name,
            storage_path=storage_path,
            thumbnail_url=self.get_public_url(storage_path=thumbnail_path),
        )
        logger.info("Image uploaded to Supabase Storage", extra=result.model_dump())
        return result

    def _upload_object(
        self,
        *,
        stage: str,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        try:
            self._storage.upload_object(
                key=key,
                body=body,
                content_type=content_type,
                metadata=metadata,
            )

        except StorageException as exc:
            reason = storage_error_message(exc)
            logger.error(
                "Supabase Storage rejected upload",
                extra={"stage": stage, "key": key, "error": reason},
            )
            raise upload_failure(self.name, stage=stage, path=key, reason=reason) from exc

        except Exception as exc:
            logger.exception(
                "Unexpected error uploading to Supabase Storage",
                extra={"stage": stage, "key": key},
            )
            raise upload_failure(self.name, stage=stage, path=key) from exc

    def delete_file(self, *, storage_path: str) -> None:
        """Delete the primary object and its thumbnail.

        Objects reported as missing are skipped; any other failure aborts
        the call.
        """
        thumbnail_path = thumbnail_path_for(storage_path)
        logger.debug(
            "Deleting image from Supabase Storage",
            extra={"storage_path": storage_path, "thumbnail_path": thumbnail_path},
        )

        for key in (storage_path, thumbnail_path):
            try:
                self._storage.remove_object(key=key)

            except StorageException as exc:
                if is_not_found(exc):
                    logger.warning(
                        "Object not found or already deleted",
                        extra={"key": key, "error": storage_error_message(exc)},
                    )
                    continue

                logger.error(
                    "Supabase Storage rejected delete",
                    extra={"key": key, "error": storage_error_message(exc)},
                )
                raise delete_failure(self.name, path=storage_path) from exc

            except Exception as exc:
                logger.exception(
                    "Unexpected error deleting from Supabase Storage",
                    extra={"key": key},
                )
                raise delete_failure(self.name, path=storage_path) from exc

        logger.info("Image deleted from Supabase Storage", extra={"storage_path": storage_path})

    def get_public_url(self, *, storage_path: str) -> str:
        base_url = self._supabase_url.rstrip("/")
        return f"{base_url}{SUPABASE_PUBLIC_URL_PATH}/{self._bucket_name}/{storage_path}"

    def is_configured(self) -> bool:
        return bool(self._supabase_url and self._service_key and self._bucket_name)
