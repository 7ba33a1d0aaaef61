"""Validation and error-wrapping helpers shared by storage providers."""

from collections.abc import Mapping

from pydantic import ValidationError as PydanticValidationError

from core.models.errors import StorageProviderError, ValidationError
from core.models.upload import FileMetadata
from core.utils.constants import (
    ERROR_CODE_STORAGE_DELETE_FAILED,
    ERROR_CODE_STORAGE_UPLOAD_FAILED,
    UPLOAD_STAGE_THUMBNAIL,
)


def validate_upload_input(
    *,
    storage_path: str,
    thumbnail_path: str,
    primary_buffer: bytes,
    thumbnail_buffer: bytes,
    metadata: FileMetadata | Mapping[str, str],
) -> FileMetadata:
    """Check the structural preconditions of an upload.

    Field contents are not re-validated; only presence is enforced.

    Returns:
        The metadata as a FileMetadata instance

    Raises:
        ValidationError: If paths or buffers are empty, paths collide,
            or a metadata key is missing
    """
    if not storage_path or not thumbnail_path:
        raise ValidationError(
            message="Storage path and thumbnail path are required",
            details={"storage_path": storage_path, "thumbnail_path": thumbnail_path},
        )

    if storage_path == thumbnail_path:
        raise ValidationError(
            message="Storage path and thumbnail path must differ",
            details={"storage_path": storage_path},
        )

    if not primary_buffer or not thumbnail_buffer:
        raise ValidationError(
            message="Image and thumbnail data must not be empty",
            details={"storage_path": storage_path},
        )

    if isinstance(metadata, FileMetadata):
        return metadata

    try:
        return FileMetadata.model_validate(dict(metadata))
    except (PydanticValidationError, TypeError, ValueError) as exc:
        raise ValidationError(
            message="Invalid file metadata",
            details={"storage_path": storage_path},
        ) from exc


def upload_failure(
    backend: str,
    *,
    stage: str,
    path: str,
    reason: str | None = None,
) -> StorageProviderError:
    """Build the wrapped error for a failed upload stage.

    ``reason`` is the message of a structured backend error; it is omitted
    for generic failures such as network errors.
    """
    message = f"Failed to upload to {backend} Storage"

    if stage == UPLOAD_STAGE_THUMBNAIL or reason:
        detail = f"Failed to upload {stage}"
        if reason:
            detail = f"{detail}: {reason}"
        message = f"{message}: {detail}"

    return StorageProviderError(
        message=message,
        error_code=ERROR_CODE_STORAGE_UPLOAD_FAILED,
        details={"provider": backend, "stage": stage, "path": path},
    )


def delete_failure(backend: str, *, path: str) -> StorageProviderError:
    """Build the wrapped error for a failed delete."""
    return StorageProviderError(
        message=f"Failed to delete from {backend} Storage",
        error_code=ERROR_CODE_STORAGE_DELETE_FAILED,
        details={"provider": backend, "stage": "delete", "path": path},
    )

