# backend/checklist_core/common/api/exceptions.py

from __future__ import annotations

import logging
import uuid
from typing import Any

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, NotFound, PermissionDenied, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


def ensure_request_id(request) -> str:
    """
    Ensures request has a stable request_id attribute and returns it.
    Safe to call from middleware and DRF exception handler.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid and request is not None:
        meta = getattr(request, "META", None) or {}
        rid = (meta.get("HTTP_X_REQUEST_ID") or "").strip()[:64]
        if rid:
            setattr(request, "request_id", rid)
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    """
    Canonical error envelope for the checklist API.
    Reusable from Django middleware (JsonResponse) and DRF (Response).
    """
    rid = ensure_request_id(request)
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": rid,
        }
    }


class ConflictError(APIException):
    """
    409 Conflict: a uniqueness rule blocks the write (duplicate hospital code,
    area code within a hospital, task code within a hospital, user email) or the
    row is still referenced and can only be deactivated.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


class InvariantViolation(APIException):
    """
    Rejected attempt to break a catalog invariant (e.g. deleting, deactivating or
    un-defaulting the default hospital). Never auto-corrected.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Operation would violate a catalog invariant."
    default_code = "invariant_violation"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


class NoDataError(APIException):
    """
    Export found zero rows for the requested scope/date(s).
    Distinct code from not_found so clients can say "no data for this range".
    """
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "No data available for export"
    default_code = "no_data"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


def _code_for(exc: Exception, http_status: int) -> str:
    if isinstance(exc, ValidationError):
        return "validation_error"
    if isinstance(exc, NotAuthenticated):
        return "not_authenticated"
    if isinstance(exc, PermissionDenied):
        return "permission_denied"
    if isinstance(exc, (Http404, NotFound)):
        return "not_found"
    if isinstance(exc, APIException):
        return getattr(exc, "default_code", "api_error") or "api_error"
    if http_status >= 500:
        return "server_error"
    return "error"


def _split_detail(data: Any) -> tuple[str, Any]:
    # 1) {"detail": "..."} only -> message=detail, details=None
    # 2) {"detail": "...", ...} -> message=detail, details={...without detail}
    # 3) otherwise -> message="Request failed.", details=data
    if isinstance(data, dict) and "detail" in data:
        rest = {k: v for k, v in data.items() if k != "detail"}
        return str(data.get("detail")), (rest or None)
    return "Request failed.", data


def error_payload(exc: APIException) -> dict[str, Any]:
    """
    {code, message, details} for an APIException raised outside a response
    cycle, e.g. one failed item of a best-effort batch.
    """
    data = exc.detail if isinstance(exc.detail, (dict, list)) else {"detail": exc.detail}
    message, details = _split_detail(data)
    return {
        "code": _code_for(exc, exc.status_code),
        "message": message,
        "details": details,
    }


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")
    response = drf_exception_handler(exc, context)

    # Truly unhandled error
    if response is None:
        logger.exception(
            "Unhandled API error request_id=%s",
            ensure_request_id(request),
            exc_info=exc,
        )
        return Response(
            build_error_envelope(
                request=request,
                code="server_error",
                message="Unexpected server error.",
                details=None,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    http_status = response.status_code
    code = _code_for(exc, http_status)

    message, details = _split_detail(response.data)

    return Response(
        build_error_envelope(
            request=request,
            code=code,
            message=message,
            details=details,
        ),
        status=http_status,
        headers=response.headers,
    )
