"""Business logic for course image uploads.

This module checks the uploaded bytes and course access, then hands the
image and its thumbnail to the configured storage provider.
"""

import base64
import binascii

from aws_lambda_powertools import Logger

from core.infrastructure.firebase.firestore_courses import FirestoreCourseRepository
from core.infrastructure.storage_factory import StorageFactory
from core.models.errors import ValidationError
from core.models.upload import FileMetadata, UploadedFile, UploadResult
from core.repositories.course_repository import CourseRepository
from core.repositories.storage_provider import StorageProvider
from core.utils.auth import Caller, ensure_course_access
from core.utils.constants import (
    ALLOWED_MIME_TYPES,
    COURSES_SCOPE,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
)
from core.utils.mime import detect_mime_type
from core.utils.paths import build_storage_paths, generate_image_file_name
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class CourseImageUploadService:
    """Application service responsible for course image uploads.

    This service orchestrates:
    - Image type validation
    - Course ownership checks
    - Storage path generation
    - Uploading image and thumbnail through the storage provider
    """

    def __init__(
        self,
        storage: StorageProvider | None = None,
        courses: CourseRepository | None = None,
    ) -> None:
        self.storage = storage or StorageFactory.get_storage_provider()
        self.courses = courses or FirestoreCourseRepository()

    @staticmethod
    def decode_file(encoded: str) -> bytes:
        """Decode base64-encoded image data.

        Raises:
            ValidationError: If decoding fails
        """
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            logger.exception("Failed to decode base64 image data")
            raise ValidationError(
                message="Invalid image data",
                details={"encoding": "base64"},
            ) from exc

    @staticmethod
    def detect_image_type(file_data: bytes) -> str:
        """Return the MIME type of an allowed image.

        Raises:
            ValidationError: If the bytes are not JPEG, PNG or WebP
        """
        try:
            mime_type = detect_mime_type(file_data)
        except ValueError as exc:
            raise ValidationError(
                message="Only JPEG, PNG, and WebP images are allowed",
                error_code=ERROR_CODE_UNSUPPORTED_MIME_TYPE,
            ) from exc

        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                message="Only JPEG, PNG, and WebP images are allowed",
                error_code=ERROR_CODE_UNSUPPORTED_MIME_TYPE,
                details={"mime_type": mime_type},
            )

        return mime_type

    def upload_image(
        self,
        *,
        caller: Caller,
        course_id: str,
        instructor_id: str,
        image_name: str,
        file_data: bytes,
        thumbnail_data: bytes,
        image_type: str | None = None,
    ) -> UploadResult:
        """Upload a course image and its thumbnail.

        The upload flow is:
        1. Detect and validate the image type
        2. Check the caller may modify the course
        3. Build primary and thumbnail storage paths
        4. Upload both objects through the storage provider

        Raises:
            ValidationError: If the image type is not supported or the
                thumbnail is encoded differently from the image
            NotFoundError: If the course does not exist
            ForbiddenError: If the caller may not modify the course
            StorageProviderError: If storage upload fails
        """
        logger.debug(
            "Starting course image upload",
            extra={"course_id": course_id, "uid": caller.uid},
        )

        mime_type = self.detect_image_type(file_data)
        thumbnail_mime_type = self.detect_image_type(thumbnail_data)
        if thumbnail_mime_type != mime_type:
            raise ValidationError(
                message="Image and thumbnail must use the same format",
                error_code=ERROR_CODE_UNSUPPORTED_MIME_TYPE,
                details={"mime_type": mime_type, "thumbnail_mime_type": thumbnail_mime_type},
            )

        ensure_course_access(self.courses, course_id=course_id, caller=caller)

        file_name = generate_image_file_name(course_id, image_name)
        storage_path, thumbnail_path = build_storage_paths(
            f"{COURSES_SCOPE}/{caller.uid}", file_name
        )

        result = self.storage.upload_file(
            file=UploadedFile(name=image_name, content_type=mime_type, size=len(file_data)),
            storage_path=storage_path,
            thumbnail_path=thumbnail_path,
            primary_buffer=file_data,
            thumbnail_buffer=thumbnail_data,
            metadata=FileMetadata(
                course_id=course_id,
                instructor_id=instructor_id,
                uploaded_by=caller.uid,
                uploaded_at=utc_now_iso(),
                image_type=image_type,
            ),
            content_type=mime_type,
        )

        logger.info(
            "Course image uploaded",
            extra={"course_id": course_id, "storage_path": result.storage_path},
        )
        return result
