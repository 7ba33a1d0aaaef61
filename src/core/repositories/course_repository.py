"""Abstract contract for reading course documents."""

from abc import ABC, abstractmethod
from typing import Any

Course = dict[str, Any]


class CourseRepository(ABC):
    """Read access to course documents needed for authorization.

    Implementations could be Firestore, PostgreSQL, etc.
    Handlers depend on this interface, not the implementation.
    """

    @abstractmethod
    def fetch_course(self, *, course_id: str) -> Course | None:
        """Fetch a single course.

        Args:
            course_id: Course document identifier

        Returns:
            Course dict (including ``instructorId``) or None if not found

        Raises:
            CourseLookupFailedError: If the document store cannot be read
        """
