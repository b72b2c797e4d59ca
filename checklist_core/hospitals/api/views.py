# backend/checklist_core/hospitals/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from checklist_core.common.api.listing import optional_uuid, paginate, pk_or_404, query_flag
from checklist_core.common.permissions import CatalogPermission
from checklist_core.hospitals.api.serializers import (
    HospitalBrandingSerializer,
    HospitalCreateSerializer,
    HospitalLogoSerializer,
    HospitalSerializer,
    HospitalUpdateSerializer,
)
from checklist_core.hospitals.selectors import hospital_by_id, hospital_list
from checklist_core.hospitals.services import HospitalService, HospitalUpdate


@extend_schema_view(
    list=extend_schema(tags=["Hospitals"]),
    retrieve=extend_schema(tags=["Hospitals"]),
    create=extend_schema(tags=["Hospitals"], request=HospitalCreateSerializer, responses={201: HospitalSerializer}),
    partial_update=extend_schema(tags=["Hospitals"], request=HospitalUpdateSerializer, responses={200: HospitalSerializer}),
    destroy=extend_schema(tags=["Hospitals"]),
)
class HospitalViewSet(viewsets.ViewSet):
    """
    Hospital catalog. Reads are open to every authenticated user (the client
    needs the list for its hospital switcher); writes are ADMIN only.
    """

    permission_classes = [CatalogPermission]

    def list(self, request):
        params = request.query_params
        qs = hospital_list(
            search=(params.get("search") or "").strip() or None,
            include_inactive=query_flag(params, "include_inactive"),
        )
        return paginate(request, qs, HospitalSerializer)

    def retrieve(self, request, pk=None):
        obj = hospital_by_id(hospital_id=pk_or_404(pk, "Hospital"))
        return Response(HospitalSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        s = HospitalCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = HospitalService.create(
            name=d["name"],
            code=d["code"],
            logo_url=d.get("logo_url") or "",
            address=d.get("address") or "",
            phone=d.get("phone") or "",
            email=d.get("email") or "",
            is_active=d.get("is_active", True),
            is_default=d.get("is_default", False),
        )
        return Response(HospitalSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        s = HospitalUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        obj = HospitalService.update(
            hospital_id=pk_or_404(pk, "Hospital"),
            patch=HospitalUpdate(
                name=d.get("name"),
                code=d.get("code"),
                logo_url=d.get("logo_url"),
                address=d.get("address"),
                phone=d.get("phone"),
                email=d.get("email"),
                is_active=d.get("is_active"),
                is_default=d.get("is_default"),
            ),
        )
        return Response(HospitalSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        HospitalService.delete(hospital_id=pk_or_404(pk, "Hospital"))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(tags=["Hospitals"], request=None, responses={200: HospitalSerializer})
    @action(detail=True, methods=["post"], url_path="set-default")
    def set_default(self, request, pk=None):
        obj = HospitalService.set_default(hospital_id=pk_or_404(pk, "Hospital"))
        return Response(HospitalSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Hospitals"], request=None, responses={200: HospitalSerializer})
    @action(detail=True, methods=["post"], url_path="toggle-status")
    def toggle_status(self, request, pk=None):
        obj = HospitalService.toggle_status(hospital_id=pk_or_404(pk, "Hospital"))
        return Response(HospitalSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Hospitals"], request=HospitalLogoSerializer, responses={200: HospitalSerializer})
    @action(detail=True, methods=["post"], url_path="logo")
    def logo(self, request, pk=None):
        s = HospitalLogoSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        obj = HospitalService.update_logo(hospital_id=pk_or_404(pk, "Hospital"), logo_url=s.validated_data["logo_url"])
        return Response(HospitalSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Hospitals"], responses={200: HospitalSerializer})
    @action(detail=False, methods=["get"], url_path="default")
    def default(self, request):
        obj = HospitalService.get_default()
        return Response(HospitalSerializer(obj).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Hospitals"], responses={200: HospitalBrandingSerializer})
    @action(detail=False, methods=["get"], url_path="branding")
    def branding(self, request):
        data = HospitalService.branding(hospital_id=optional_uuid(request.query_params, "hospital_id"))
        return Response(HospitalBrandingSerializer(data).data, status=status.HTTP_200_OK)
