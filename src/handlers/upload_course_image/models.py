"""Pydantic models for course image upload request/response."""

import base64
import binascii
from pathlib import Path

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import ALLOWED_EXTENSIONS, MAX_FILE_SIZE, get_max_file_size_mb

logger = Logger(UTC=True)


def _validate_base64_image(value: str, *, label: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{label} must not be empty")

    try:
        data = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.error(f"{label} validation error: Invalid base64 - {e}")
        raise ValueError(f"Invalid base64 encoded {label}") from e

    if not data:
        raise ValueError(f"Decoded {label} is empty")

    if len(data) > MAX_FILE_SIZE:
        logger.error(f"{label} validation error: size exceeds limit")
        raise ValueError(f"Image size must be less than {get_max_file_size_mb()}MB")

    return value


class CourseImageUploadRequest(BaseModel):
    """Validation model for course image upload request.

    ``file`` and ``thumbnail`` carry the already resized, encoded images.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    course_id: str = Field(..., min_length=1, description="Course ID")
    instructor_id: str = Field(..., min_length=1, description="Course instructor ID")
    image_name: str = Field(
        ..., min_length=1, max_length=255, description="Original image filename"
    )
    file: str = Field(..., description="Base64 encoded processed image")
    thumbnail: str = Field(..., description="Base64 encoded thumbnail image")
    image_type: str | None = Field(None, max_length=50, description="Image role, e.g. cover")

    @field_validator("image_name")
    @classmethod
    def validate_image_name(cls, value: str) -> str:
        suffix = Path(value).suffix.lower().lstrip(".")

        if suffix and suffix not in ALLOWED_EXTENSIONS:
            raise ValueError(
                f"Invalid image extension '{suffix}'. "
                f"Allowed extensions: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
            )

        return value

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        return _validate_base64_image(value, label="file")

    @field_validator("thumbnail")
    @classmethod
    def validate_thumbnail(cls, value: str) -> str:
        return _validate_base64_image(value, label="thumbnail")


class CourseImageUploadResponse(BaseModel):
    """Response model for a successful course image upload."""

    url: str = Field(..., description="Public URL of the image")
    file_name: str = Field(..., description="Original image name")
    storage_path: str = Field(..., description="Storage key of the image")
    thumbnail_url: str | None = Field(None, description="Public URL of the thumbnail")
