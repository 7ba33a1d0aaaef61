"""
Centralized API response builder for the course image endpoints.

Error bodies follow the admin API shape: ``{"error": <message>, "code": <code>}``.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    EXPOSE_HEADERS,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": DEFAULT_CONTENT_TYPE,
    }

    DEFAULT_CORS_HEADERS: dict[str, str] = {
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }

    @staticmethod
    def build_headers(cors_origin: str | None = None) -> dict[str, str]:
        headers = {**ResponseBuilder.DEFAULT_HEADERS, **ResponseBuilder.DEFAULT_CORS_HEADERS}
        if cors_origin:
            headers["Access-Control-Allow-Origin"] = cors_origin
        return headers

    @staticmethod
    def _response(
        *,
        status: HTTPStatus,
        body: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = dict(body or {})

        if request_id:
            payload["request_id"] = request_id

        return {
            "statusCode": status.value,
            "headers": ResponseBuilder.build_headers(cors_origin),
            "body": json.dumps(payload),
        }

    @staticmethod
    def ok(
        data: JsonDict,
        *,
        message: str | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        body: JsonDict = {"data": data}
        if message:
            body["message"] = message
        return ResponseBuilder._response(
            status=HTTPStatus.OK,
            body=body,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def preflight(*, cors_origin: str | None = None) -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": ResponseBuilder.build_headers(cors_origin),
            "body": "",
        }

    @staticmethod
    def error(
        *,
        status: HTTPStatus,
        message: str,
        code: str | None = None,
        details: Any = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": message,
            "code": code or status.name,
            "timestamp": utc_now_iso(),
        }

        if details:
            payload["details"] = details

        return ResponseBuilder._response(
            status=status,
            body=payload,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def bad_request(message: str, *, details: Any = None, **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            code=ERROR_CODE_VALIDATION_FAILED,
            details=details,
            **kwargs,
        )

    @staticmethod
    def unauthorized(message: str = "Unauthorized", **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(status=HTTPStatus.UNAUTHORIZED, message=message, **kwargs)

    @staticmethod
    def forbidden(message: str = "Forbidden", **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(status=HTTPStatus.FORBIDDEN, message=message, **kwargs)

    @staticmethod
    def not_found(message: str = "Resource not found", **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(status=HTTPStatus.NOT_FOUND, message=message, **kwargs)

    @staticmethod
    def internal_error(message: str = "Internal server error", **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.INTERNAL_SERVER_ERROR, message=message, **kwargs
        )

    @staticmethod
    def service_unavailable(message: str = "Service unavailable", **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.SERVICE_UNAVAILABLE, message=message, **kwargs
        )
