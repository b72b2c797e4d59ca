# backend/checklist_core/common/api/listing.py
from __future__ import annotations

from uuid import UUID

from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

TRUTHY = {"1", "true", "yes", "y", "on"}


class DefaultPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 200


def paginate(request, queryset, serializer_class, *, paginator: PageNumberPagination | None = None) -> Response:
    """
    Shared pagination helper to enforce a stable contract:
      { count, next, previous, results }
    """
    p = paginator or DefaultPagination()
    page = p.paginate_queryset(queryset, request)
    if page is not None:
        ser = serializer_class(page, many=True)
        return p.get_paginated_response(ser.data)

    ser = serializer_class(queryset, many=True)
    return Response(ser.data)


def query_flag(params, name: str, default: bool = False) -> bool:
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    return str(raw).strip().lower() in TRUTHY


def parse_uuid(value, field_name: str) -> UUID:
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError({field_name: "Invalid UUID"})


def optional_uuid(params, name: str) -> UUID | None:
    raw = params.get(name)
    if raw is None or raw == "":
        return None
    return parse_uuid(raw, name)


def pk_or_404(pk, label: str) -> UUID:
    try:
        return UUID(str(pk))
    except (TypeError, ValueError, AttributeError):
        raise NotFound(f"{label} not found")
