"""
Lambda handler responsible for course image upload.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.storage_factory import StorageFactory
from core.models.errors import (
    CourseLookupFailedError,
    ForbiddenError,
    NotFoundError,
    StorageProviderError,
    UnauthorizedError,
    ValidationError,
)
from core.utils.auth import get_caller
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import CourseImageUploadRequest, CourseImageUploadResponse
from .service import CourseImageUploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle course image upload requests.

    Expected API Gateway event structure:
    {
        "body": "{...}",   # JSON with course_id, instructor_id, image_name,
                           # file and thumbnail (base64)
        "requestContext": {"authorizer": {"uid": "...", "role": "..."}}
    }

    Returns:
        200 with the public URLs of the image and its thumbnail
    """
    logger.info(
        "Received course image upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
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

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError:
        logger.exception("Invalid JSON body received")
        return ResponseBuilder.bad_request("Invalid JSON body")

    try:
        request = validate_request(CourseImageUploadRequest, body)
    except PydanticValidationError as exc:
        logger.error("Request validation failed", extra={"errors": exc.errors()})
        return ResponseBuilder.bad_request(
            "Invalid input",
            details=sanitize_validation_errors(exc.errors()),
        )

    try:
        service = CourseImageUploadService()
        result = service.upload_image(
            caller=caller,
            course_id=request.course_id,
            instructor_id=request.instructor_id,
            image_name=request.image_name,
            file_data=CourseImageUploadService.decode_file(request.file),
            thumbnail_data=CourseImageUploadService.decode_file(request.thumbnail),
            image_type=request.image_type,
        )

    except ValidationError as exc:
        logger.warning("Invalid course image", extra={"course_id": request.course_id})
        return ResponseBuilder.bad_request(exc.message)

    except NotFoundError as exc:
        return ResponseBuilder.not_found(exc.message)

    except ForbiddenError as exc:
        return ResponseBuilder.forbidden(exc.message)

    except (StorageProviderError, CourseLookupFailedError) as exc:
        logger.exception(
            "Course image upload failed",
            extra={"course_id": request.course_id, "error": exc.message},
        )
        return ResponseBuilder.internal_error("Failed to upload image")

    response = CourseImageUploadResponse(**result.model_dump())
    return ResponseBuilder.ok(response.model_dump(), message="Image uploaded successfully")
