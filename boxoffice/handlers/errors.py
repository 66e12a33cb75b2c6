"""Mapping of domain errors to HTTP responses.

Response body is always ``{"error": {"code": ..., "message": ...}}`` with the
user-safe message of the error. Internal details are never exposed.
"""

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from boxoffice.domain.errors import DomainError, ErrorCode

INVALID_REQUEST = "INVALID_REQUEST"

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.SHOW_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SEAT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_SHOW_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ORDER_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SEAT_CODE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SHOW_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RECEIPT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SESSION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_USER_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NO_SEATS_HELD: status.HTTP_409_CONFLICT,
    ErrorCode.NO_PENDING_SELECTION: status.HTTP_409_CONFLICT,
    ErrorCode.SEATS_NOT_HELD: status.HTTP_409_CONFLICT,
    ErrorCode.STORAGE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(http_status: int, code: str, message: str) -> Response:
    return Response({"error": {"code": code, "message": message}}, status=http_status)


def domain_error_response(exc: DomainError) -> Response:
    http_status = STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)
    return error_response(http_status, exc.code.value, exc.message)


def validation_error_response(exc: ValidationError) -> Response:
    if isinstance(exc.detail, dict) and exc.detail:
        message = "Invalid fields: " + ", ".join(sorted(str(field) for field in exc.detail))
    else:
        message = "Invalid request body"
    return error_response(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST, message)
