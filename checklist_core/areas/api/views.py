# backend/checklist_core/areas/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from checklist_core.areas.api.serializers import AreaCreateSerializer, AreaSerializer, AreaUpdateSerializer
from checklist_core.areas.selectors import active_areas, area_by_id, area_list
from checklist_core.areas.services import AreaService, AreaUpdate
from checklist_core.common.api.listing import paginate, pk_or_404, query_flag
from checklist_core.common.permissions import CatalogPermission
from checklist_core.iam.caller import get_caller
from checklist_core.iam.scope import read_scope_for_request, write_hospital_for_request


@extend_schema_view(
    list=extend_schema(tags=["Areas"]),
    retrieve=extend_schema(tags=["Areas"]),
    create=extend_schema(tags=["Areas"], request=AreaCreateSerializer, responses={201: AreaSerializer}),
    partial_update=extend_schema(tags=["Areas"], request=AreaUpdateSerializer, responses={200: AreaSerializer}),
    destroy=extend_schema(tags=["Areas"]),
)
class AreaViewSet(viewsets.ViewSet):
    permission_classes = [CatalogPermission]

    def list(self, request):
        params = request.query_params
        qs = area_list(
            scope=read_scope_for_request(request),
            search=(params.get("search") or "").strip() or None,
            include_inactive=query_flag(params, "include_inactive", default=True),
        )
        return paginate(request, qs, AreaSerializer)

    def retrieve(self, request, pk=None):
        obj = area_by_id(area_id=pk_or_404(pk, "Area"), scope=read_scope_for_request(request))
        return Response(AreaSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        s = AreaCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = AreaService.create(
            name=d["name"],
            code=d["code"],
            hospital_id=write_hospital_for_request(request),
            description=d.get("description") or "",
            is_active=d.get("is_active", True),
            created_by_id=get_caller(request).user_id,
        )
        return Response(AreaSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        s = AreaUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = AreaService.update(
            area_id=pk_or_404(pk, "Area"),
            patch=AreaUpdate(
                name=d.get("name"),
                code=d.get("code"),
                description=d.get("description"),
                is_active=d.get("is_active"),
                hospital_id=d.get("hospital_id"),
            ),
        )
        return Response(AreaSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        AreaService.delete(area_id=pk_or_404(pk, "Area"))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(tags=["Areas"], request=None, responses={200: AreaSerializer})
    @action(detail=True, methods=["post"], url_path="toggle-status")
    def toggle_status(self, request, pk=None):
        obj = AreaService.toggle_status(area_id=pk_or_404(pk, "Area"))
        return Response(AreaSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Areas"], responses={200: AreaSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="active")
    def active(self, request):
        qs = active_areas(scope=read_scope_for_request(request))
        return Response(AreaSerializer(qs, many=True).data, status=status.HTTP_200_OK)
