"""Caller identity and course access checks for API Gateway events."""

from collections.abc import Mapping
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, Field

from core.models.errors import ForbiddenError, NotFoundError, UnauthorizedError
from core.repositories.course_repository import Course, CourseRepository
from core.utils.constants import ERROR_CODE_COURSE_NOT_FOUND, ROLE_SUPERADMIN

logger = Logger(UTC=True)


class Caller(BaseModel):
    """Authenticated user resolved by the API Gateway authorizer."""

    uid: str = Field(..., min_length=1, description="User identifier")
    role: str | None = Field(None, description="User role, e.g. instructor or superadmin")

    @property
    def is_superadmin(self) -> bool:
        return self.role == ROLE_SUPERADMIN


def get_caller(event: Mapping[str, Any]) -> Caller:
    """Extract the caller from ``requestContext.authorizer``.

    Both Lambda authorizer context (``uid``/``role``) and Cognito-style
    ``claims`` (``sub``/``custom:role``) are accepted.

    Raises:
        UnauthorizedError: If no authenticated identity is present
    """
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    claims = authorizer.get("claims") or {}

    uid = authorizer.get("uid") or claims.get("sub")
    role = authorizer.get("role") or claims.get("custom:role")

    if not uid:
        raise UnauthorizedError(message="Unauthorized")

    return Caller(uid=uid, role=role)


def ensure_course_access(
    courses: CourseRepository,
    *,
    course_id: str,
    caller: Caller,
) -> Course:
    """Load a course and check the caller may modify it.

    Raises:
        NotFoundError: If the course does not exist
        ForbiddenError: If the caller is neither the instructor nor a superadmin
    """
    course = courses.fetch_course(course_id=course_id)
    if course is None:
        raise NotFoundError(
            message="Course not found",
            error_code=ERROR_CODE_COURSE_NOT_FOUND,
            details={"course_id": course_id},
        )

    if course.get("instructorId") != caller.uid and not caller.is_superadmin:
        logger.warning(
            "Course access denied",
            extra={"course_id": course_id, "uid": caller.uid},
        )
        raise ForbiddenError(
            message="Not authorized to modify this course",
            details={"course_id": course_id},
        )

    return course
