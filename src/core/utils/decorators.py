"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import (
    ConfigurationError,
    CourseStorageError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from core.utils.response import ResponseBuilder

logger = Logger(service="course-image-handler", UTC=True)

JsonDict = dict[str, Any]

# Domain errors that escape a handler, most specific first
DOMAIN_ERROR_STATUS: tuple[tuple[type[CourseStorageError], HTTPStatus], ...] = (
    (ValidationError, HTTPStatus.BAD_REQUEST),
    (UnauthorizedError, HTTPStatus.UNAUTHORIZED),
    (ForbiddenError, HTTPStatus.FORBIDDEN),
    (NotFoundError, HTTPStatus.NOT_FOUND),
    (ConfigurationError, HTTPStatus.SERVICE_UNAVAILABLE),
)

# Built-in errors: (types, status, fixed message or None for a friendly rewrite)
BUILTIN_ERROR_STATUS: tuple[
    tuple[tuple[type[Exception], ...], HTTPStatus, str | None], ...
] = (
    ((PermissionError,), HTTPStatus.FORBIDDEN, "You don't have permission to perform this action."),
    (
        (ConnectionError, TimeoutError),
        HTTPStatus.SERVICE_UNAVAILABLE,
        "Unable to reach the storage service. Please try again later.",
    ),
    ((ValueError, KeyError, TypeError, AttributeError), HTTPStatus.BAD_REQUEST, None),
)

FRIENDLY_PREFIXES = (
    "Invalid",
    "Missing",
    "Required",
    "Must",
    "Cannot",
    "Unable to",
    "Failed to",
    "Image",
    "File",
    "Course",
)


def _get_user_friendly_message(exc: Exception) -> str:
    """
    Turn a stray built-in exception into a message safe to show callers.

    Messages that already read like user-facing text are kept.
    """
    text = str(exc)
    if text.startswith(FRIENDLY_PREFIXES):
        return text

    if isinstance(exc, ValueError):
        return "The provided data is invalid. Please check your input and try again."

    if isinstance(exc, (KeyError, AttributeError)):
        return "A required field is missing. Please ensure all required fields are provided."

    if isinstance(exc, TypeError):
        return "The data format is incorrect. Please check the request format."

    return "We encountered an issue processing your request. Please try again."


def _error_response(
    exc: Exception,
    *,
    handler_name: str,
    request_id: str | None,
    cors_origin: str | None,
) -> JsonDict:
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }
    respond: dict[str, Any] = {"request_id": request_id, "cors_origin": cors_origin}

    if isinstance(exc, CourseStorageError):
        logger.warning("Unhandled domain error in handler", extra=log_extra)
        status = next(
            (s for error_type, s in DOMAIN_ERROR_STATUS if isinstance(exc, error_type)),
            HTTPStatus.INTERNAL_SERVER_ERROR,
        )
        return ResponseBuilder.error(
            status=status, message=exc.message, code=exc.error_code, **respond
        )

    for error_types, status, message in BUILTIN_ERROR_STATUS:
        if isinstance(exc, error_types):
            if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
                logger.exception("Dependency error in handler", extra=log_extra)
            else:
                logger.warning("Client error in handler", extra=log_extra)
            return ResponseBuilder.error(
                status=status,
                message=message or _get_user_friendly_message(exc),
                **respond,
            )

    logger.exception("Unexpected error in handler", extra=log_extra)
    return ResponseBuilder.internal_error(
        "We're experiencing technical difficulties. Please try again in a few moments.",
        **respond,
    )


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Conversion of escaped exceptions into JSON error responses
    - Request ID tracking and structured logging

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({...})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.preflight(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)
        except Exception as exc:
            return _error_response(
                exc,
                handler_name=func.__name__,
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
