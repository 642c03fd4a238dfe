# common/exception_handler.py

"""
API EXCEPTION HANDLER (REST_FRAMEWORK["EXCEPTION_HANDLER"])

One error body for every endpoint:

    {"error": "<message>", "code": "<category>", "retryable": <bool>, "details": {...}?}

Three buckets stay distinguishable for clients:
- fix your input       -> 4xx, retryable false
- try again later      -> 503, retryable true, Retry-After header
- something is wrong   -> 500, generic message, traceback logged server-side
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, InterfaceError, OperationalError
from django.db.models import ProtectedError
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

from common.exceptions import ServiceError

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = "1"

_STATUS_CODES = {
    400: "validation_error",
    401: "not_authenticated",
    403: "permission_denied",
    404: "not_found",
    405: "method_not_allowed",
    406: "not_acceptable",
    415: "unsupported_media_type",
    429: "throttled",
}


def error_body(message: str, code: str, *, retryable: bool = False, details=None) -> dict:
    body = {"error": message, "code": code, "retryable": retryable}
    if details is not None:
        body["details"] = details
    return body


def _first_message(data) -> str:
    if isinstance(data, dict):
        if "detail" in data:
            return _first_message(data["detail"])
        for key, value in data.items():
            msg = _first_message(value)
            if key == "non_field_errors":
                return msg
            return f"{key}: {msg}"
        return "invalid request"
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else "invalid request"
    return str(data)


def _service_error_response(exc: ServiceError) -> Response:
    response = Response(
        error_body(exc.message, exc.code, retryable=exc.retryable, details=exc.details),
        status=exc.status_code,
    )
    if exc.retryable:
        response["Retry-After"] = RETRY_AFTER_SECONDS
    return response


def api_exception_handler(exc, context):
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else None

    if isinstance(exc, ServiceError):
        set_rollback()
        log = logger.error if exc.status_code >= 500 and not exc.retryable else logger.info
        log(
            "api.service_error",
            extra={"view": view_name, "code": exc.code, "error": exc.message},
        )
        return _service_error_response(exc)

    if isinstance(exc, (OperationalError, InterfaceError)):
        set_rollback()
        logger.warning("api.datastore_unavailable", extra={"view": view_name, "error": str(exc)})
        response = Response(
            error_body("datastore temporarily unavailable", "transient", retryable=True),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
        response["Retry-After"] = RETRY_AFTER_SECONDS
        return response

    if isinstance(exc, ProtectedError):
        set_rollback()
        return Response(
            error_body("record is referenced by other records", "protected"),
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, IntegrityError):
        set_rollback()
        logger.info("api.integrity_error", extra={"view": view_name, "error": str(exc)})
        return Response(
            error_body("conflicting record", "duplicate"),
            status=status.HTTP_409_CONFLICT,
        )

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.exception("api.unhandled_error", extra={"view": view_name})
        return Response(
            error_body("internal server error", "internal_error"),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    data = response.data
    code = _STATUS_CODES.get(response.status_code)
    if code is None:
        code = getattr(exc, "default_code", None) or "error"

    details = None
    if isinstance(exc, drf_exceptions.ValidationError):
        details = data

    retryable = response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    response.data = error_body(_first_message(data), code, retryable=retryable, details=details)
    return response
