"""Business logic for course image deletion."""

from typing import Any

from aws_lambda_powertools import Logger

from core.infrastructure.firebase.firestore_courses import FirestoreCourseRepository
from core.infrastructure.storage_factory import StorageFactory
from core.repositories.course_repository import CourseRepository
from core.repositories.storage_provider import StorageProvider
from core.utils.auth import Caller, ensure_course_access
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class DeleteCourseImageService:
    """Application service responsible for deleting course images.

    Missing objects are not an error: deleting an image twice succeeds.
    """

    def __init__(
        self,
        storage: StorageProvider | None = None,
        courses: CourseRepository | None = None,
    ) -> None:
        self.storage = storage or StorageFactory.get_storage_provider()
        self.courses = courses or FirestoreCourseRepository()

    def delete_image(
        self,
        *,
        caller: Caller,
        course_id: str,
        storage_path: str,
    ) -> dict[str, Any]:
        """Delete a course image and its thumbnail.

        Raises:
            NotFoundError: If the course does not exist
            ForbiddenError: If the caller may not modify the course
            StorageProviderError: If storage deletion fails
        """
        logger.debug(
            "Starting course image deletion",
            extra={"course_id": course_id, "storage_path": storage_path},
        )

        ensure_course_access(self.courses, course_id=course_id, caller=caller)
        self.storage.delete_file(storage_path=storage_path)

        logger.info(
            "Course image deleted",
            extra={"course_id": course_id, "storage_path": storage_path},
        )

        return {
            "course_id": course_id,
            "storage_path": storage_path,
            "deleted_at": utc_now_iso(),
        }
