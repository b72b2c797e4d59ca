# backend/checklist_core/checklists/api/views.py
from __future__ import annotations

from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from checklist_core.checklists.api.serializers import (
    BulkSaveResponseSerializer,
    BulkSaveSerializer,
    ChecklistEntrySerializer,
    ChecklistResponseSerializer,
    ChecklistRowSerializer,
    EntryWriteSerializer,
    ReportResponseSerializer,
    ReportRowSerializer,
    StatisticsSerializer,
)
from checklist_core.checklists.exports import export_day, export_format, export_range
from checklist_core.checklists.selectors import entries_by_creation_range, reconcile
from checklist_core.checklists.services import ChecklistEntryService
from checklist_core.checklists.statistics import checklist_statistics, report_statistics
from checklist_core.common.api.listing import optional_uuid
from checklist_core.common.dates import parse_day, range_bounds
from checklist_core.common.permissions import ChecklistPermission
from checklist_core.iam.caller import get_caller
from checklist_core.iam.scope import entry_hospital_for_request, read_scope_for_request

DAY_PARAMS = [
    OpenApiParameter("date", OpenApiTypes.DATE, required=True),
    OpenApiParameter("area_id", OpenApiTypes.UUID),
    OpenApiParameter("hospital_id", OpenApiTypes.UUID),
]
RANGE_PARAMS = [
    OpenApiParameter("start_date", OpenApiTypes.DATE, required=True),
    OpenApiParameter("end_date", OpenApiTypes.DATE, required=True),
    OpenApiParameter("area_id", OpenApiTypes.UUID),
    OpenApiParameter("hospital_id", OpenApiTypes.UUID),
]


def _date_range(params):
    start = parse_day(params.get("start_date"), "start_date")
    end = parse_day(params.get("end_date"), "end_date")
    # range_bounds checks this again; here it fails before the scope is resolved
    range_bounds(start, end)
    return start, end


@extend_schema_view(
    list=extend_schema(tags=["Checklist"], parameters=DAY_PARAMS, responses={200: ChecklistResponseSerializer}),
)
class ChecklistViewSet(viewsets.ViewSet):
    """
    Daily checklist endpoints.

    Reads go through the hospital read scope, entry writes through the write
    rule. Inputs are validated before any query runs.
    """
    permission_classes = [ChecklistPermission]

    def list(self, request):
        params = request.query_params
        day = parse_day(params.get("date"))
        area_id = optional_uuid(params, "area_id")
        scope = read_scope_for_request(request)

        rows = reconcile(day=day, scope=scope, area_id=area_id)
        return Response(
            {
                "date": day.isoformat(),
                "hospital_id": str(scope.hospital_id) if scope.hospital_id else None,
                "rows": ChecklistRowSerializer(rows, many=True).data,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Checklist"], request=EntryWriteSerializer, responses={200: ChecklistEntrySerializer})
    @action(detail=False, methods=["put"], url_path="entry")
    def entry(self, request):
        s = EntryWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data
        day = parse_day(d["date"])

        obj = ChecklistEntryService.upsert_entry(
            task_id=d["task_id"],
            day=day,
            status=d["status"],
            staff_name=(d.get("staff_name") or "").strip(),
            notes=d.get("notes"),
            completed_by_id=get_caller(request).user_id,
            hospital_id=entry_hospital_for_request(request),
        )
        return Response(ChecklistEntrySerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Checklist"], request=BulkSaveSerializer, responses={200: BulkSaveResponseSerializer})
    @action(detail=False, methods=["post"], url_path="save")
    def save(self, request):
        s = BulkSaveSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data
        day = parse_day(d["date"])

        result = ChecklistEntryService.bulk_upsert_entries(
            day=day,
            items=d["entries"],
            completed_by_id=get_caller(request).user_id,
            hospital_id=entry_hospital_for_request(request),
        )
        return Response(result, status=status.HTTP_200_OK)

    @extend_schema(tags=["Checklist"], parameters=DAY_PARAMS, responses={200: StatisticsSerializer})
    @action(detail=False, methods=["get"], url_path="statistics")
    def statistics(self, request):
        params = request.query_params
        day = parse_day(params.get("date"))
        area_id = optional_uuid(params, "area_id")

        stats = checklist_statistics(day=day, scope=read_scope_for_request(request), area_id=area_id)
        return Response(stats, status=status.HTTP_200_OK)

    @extend_schema(tags=["Checklist"], parameters=RANGE_PARAMS, responses={200: ReportResponseSerializer})
    @action(detail=False, methods=["get"], url_path="reports")
    def reports(self, request):
        params = request.query_params
        start, end = _date_range(params)
        area_id = optional_uuid(params, "area_id")

        rows = entries_by_creation_range(
            start=start,
            end=end,
            scope=read_scope_for_request(request),
            area_id=area_id,
        )
        return Response(
            {
                "entries": ReportRowSerializer(rows, many=True).data,
                "statistics": report_statistics(rows),
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        tags=["Checklist"],
        parameters=[
            OpenApiParameter("date", OpenApiTypes.DATE),
            OpenApiParameter("start_date", OpenApiTypes.DATE),
            OpenApiParameter("end_date", OpenApiTypes.DATE),
            OpenApiParameter("area_id", OpenApiTypes.UUID),
            OpenApiParameter("hospital_id", OpenApiTypes.UUID),
            OpenApiParameter("format", OpenApiTypes.STR, enum=["csv", "pdf", "docx"]),
        ],
        responses={(200, "application/octet-stream"): OpenApiTypes.BINARY},
    )
    @action(detail=False, methods=["get"], url_path="export")
    def export(self, request):
        params = request.query_params
        # unknown formats fail before the hospital scope is resolved
        fmt = export_format(params.get("format"))
        area_id = optional_uuid(params, "area_id")

        if params.get("date"):
            day = parse_day(params.get("date"))
            doc = export_day(day=day, scope=read_scope_for_request(request), area_id=area_id, fmt=fmt)
        elif params.get("start_date") or params.get("end_date"):
            start, end = _date_range(params)
            doc = export_range(
                start=start,
                end=end,
                scope=read_scope_for_request(request),
                area_id=area_id,
                fmt=fmt,
            )
        else:
            raise ValidationError({"date": "Provide date, or start_date and end_date."})

        res = HttpResponse(doc.content, content_type=doc.content_type)
        res["Content-Disposition"] = f'attachment; filename="{doc.filename}"'
        return res
