"""Firestore-backed implementation of CourseRepository."""

import os

from aws_lambda_powertools import Logger

from core.infrastructure.adapters.firestore_adapter import (
    FirestoreAdapter,
    FirestoreAdapterProtocol,
)
from core.models.errors import CourseLookupFailedError
from core.repositories.course_repository import Course, CourseRepository
from core.utils.constants import (
    COURSES_COLLECTION,
    ENV_FIREBASE_PROJECT_ID,
    ENV_FIREBASE_STORAGE_BUCKET,
    ENV_NEXT_PUBLIC_FIREBASE_PROJECT_ID,
)

logger = Logger(UTC=True)


class FirestoreCourseRepository(CourseRepository):
    """Reads course documents from the ``courses`` collection."""

    def __init__(self, adapter: FirestoreAdapterProtocol | None = None) -> None:
        self._db: FirestoreAdapterProtocol = adapter or FirestoreAdapter(
            project_id=os.getenv(ENV_FIREBASE_PROJECT_ID)
            or os.getenv(ENV_NEXT_PUBLIC_FIREBASE_PROJECT_ID, ""),
            bucket_name=os.getenv(ENV_FIREBASE_STORAGE_BUCKET, ""),
        )

    def fetch_course(self, *, course_id: str) -> Course | None:
        logger.debug("Fetching course", extra={"course_id": course_id})

        try:
            course = self._db.get_document(
                collection=COURSES_COLLECTION,
                document_id=course_id,
            )
        except Exception as exc:
            logger.exception("Failed to fetch course", extra={"course_id": course_id})
            raise CourseLookupFailedError(
                message="Unable to load course",
                details={"course_id": course_id},
            ) from exc

        if course is None:
            logger.info("Course not found", extra={"course_id": course_id})

        return course
