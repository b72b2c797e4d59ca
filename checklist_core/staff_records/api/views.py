# backend/checklist_core/staff_records/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from checklist_core.common.api.listing import paginate, pk_or_404, query_flag
from checklist_core.common.permissions import StaffRecordPermission
from checklist_core.iam.caller import get_caller
from checklist_core.iam.scope import read_scope_for_request, write_hospital_for_request
from checklist_core.staff_records.api.serializers import (
    StaffRecordCreateSerializer,
    StaffRecordSerializer,
    StaffRecordStatsSerializer,
    StaffRecordUpdateSerializer,
)
from checklist_core.staff_records.selectors import record_by_id, record_list, record_stats
from checklist_core.staff_records.services import StaffRecordService, StaffRecordUpdate


@extend_schema_view(
    list=extend_schema(tags=["Staff records"]),
    retrieve=extend_schema(tags=["Staff records"]),
    create=extend_schema(
        tags=["Staff records"], request=StaffRecordCreateSerializer, responses={201: StaffRecordSerializer}
    ),
    partial_update=extend_schema(
        tags=["Staff records"], request=StaffRecordUpdateSerializer, responses={200: StaffRecordSerializer}
    ),
    destroy=extend_schema(tags=["Staff records"]),
)
class StaffRecordViewSet(viewsets.ViewSet):
    permission_classes = [StaffRecordPermission]

    def list(self, request):
        params = request.query_params
        caller = get_caller(request)
        qs = record_list(
            scope=read_scope_for_request(request),
            category=params.get("category") or None,
            status=params.get("status") or None,
            priority=params.get("priority") or None,
            created_by_id=caller.user_id if query_flag(params, "mine") else None,
        )
        return paginate(request, qs, StaffRecordSerializer)

    def retrieve(self, request, pk=None):
        obj = record_by_id(record_id=pk_or_404(pk, "Record"), scope=read_scope_for_request(request))
        return Response(StaffRecordSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        s = StaffRecordCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = StaffRecordService.create(
            title=d["title"],
            description=d["description"],
            category=d.get("category"),
            priority=d.get("priority"),
            notes=d.get("notes") or "",
            area_id=d.get("area_id"),
            hospital_id=write_hospital_for_request(request),
            created_by_id=get_caller(request).user_id,
        )
        return Response(StaffRecordSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        s = StaffRecordUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = StaffRecordService.update(
            record_id=pk_or_404(pk, "Record"),
            patch=StaffRecordUpdate(
                title=d.get("title"),
                description=d.get("description"),
                category=d.get("category"),
                priority=d.get("priority"),
                status=d.get("status"),
                notes=d.get("notes"),
                area_id=d.get("area_id"),
            ),
            caller=get_caller(request),
            scope=read_scope_for_request(request),
        )
        return Response(StaffRecordSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        StaffRecordService.delete(
            record_id=pk_or_404(pk, "Record"),
            caller=get_caller(request),
            scope=read_scope_for_request(request),
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(tags=["Staff records"], responses={200: StaffRecordStatsSerializer})
    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request):
        caller = get_caller(request)
        data = record_stats(
            scope=read_scope_for_request(request),
            created_by_id=None if caller.is_admin else caller.user_id,
        )
        return Response(data, status=status.HTTP_200_OK)
