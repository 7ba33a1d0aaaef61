"""
Lambda handler responsible for deleting a course image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.infrastructure.storage_factory import StorageFactory
from core.models.errors import (
    CourseLookupFailedError,
    ForbiddenError,
    NotFoundError,
    StorageProviderError,
    UnauthorizedError,
)
from core.utils.auth import get_caller
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteCourseImageRequest, DeleteCourseImageResponse
from .service import DeleteCourseImageService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle course image deletion requests.

    Reads ``course_id`` and ``storage_path`` from the query string, checks
    the caller may modify the course and removes the image and thumbnail.
    """
    logger.info(
        "Received course image delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    try:
        caller = get_caller(event)
    except UnauthorizedError as exc:
        return ResponseBuilder.unauthorized(exc.message)

    status = StorageFactory.validate_configuration()
    if not status.is_valid:
        logger.error("Storage not configured", extra={"error": status.error})
        return ResponseBuilder.service_unavailable("Storage service unavailable")

    params = event.get("queryStringParameters") or {}

    try:
        request = validate_request(
            DeleteCourseImageRequest,
            {"course_id": params.get("course_id"), "storage_path": params.get("storage_path")},
        )
    except ValidationError as exc:
        logger.error("Request validation failed", extra={"errors": exc.errors()})
        return ResponseBuilder.bad_request(
            "Storage path and course ID are required",
            details=sanitize_validation_errors(exc.errors()),
        )

    try:
        service = DeleteCourseImageService()
        delete_result = service.delete_image(
            caller=caller,
            course_id=request.course_id,
            storage_path=request.storage_path,
        )

    except NotFoundError as exc:
        return ResponseBuilder.not_found(exc.message)

    except ForbiddenError as exc:
        return ResponseBuilder.forbidden(exc.message)

    except (StorageProviderError, CourseLookupFailedError) as exc:
        logger.exception(
            "Course image deletion failed",
            extra={"course_id": request.course_id, "error": exc.message},
        )
        return ResponseBuilder.internal_error("Failed to delete image")

    response = DeleteCourseImageResponse(**delete_result)
    return ResponseBuilder.ok(response.model_dump(), message="Image deleted successfully")
