# backend/checklist_core/iam/api/users.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from checklist_core.common.api.listing import optional_uuid, paginate
from checklist_core.common.permissions import UserAdminPermission
from checklist_core.iam.api.serializers import UserCreateSerializer, UserSerializer, UserUpdateSerializer
from checklist_core.iam.caller import get_caller
from checklist_core.iam.selectors import user_by_id, user_list
from checklist_core.iam.services.users import UserService, UserUpdate


def _user_pk(pk) -> int:
    try:
        return int(pk)
    except (TypeError, ValueError):
        raise NotFound("User not found")


@extend_schema_view(
    list=extend_schema(tags=["Users"]),
    retrieve=extend_schema(tags=["Users"]),
    create=extend_schema(tags=["Users"], request=UserCreateSerializer, responses={201: UserSerializer}),
    partial_update=extend_schema(tags=["Users"], request=UserUpdateSerializer, responses={200: UserSerializer}),
    destroy=extend_schema(tags=["Users"]),
)
class UserViewSet(viewsets.ViewSet):
    permission_classes = [UserAdminPermission]

    def list(self, request):
        params = request.query_params
        qs = user_list(
            search=(params.get("search") or "").strip() or None,
            role=(params.get("role") or "").strip() or None,
            hospital_id=optional_uuid(params, "hospital_id"),
        )
        return paginate(request, qs, UserSerializer)

    def retrieve(self, request, pk=None):
        return Response(UserSerializer(user_by_id(user_id=_user_pk(pk))).data, status=status.HTTP_200_OK)

    def create(self, request):
        s = UserCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        user = UserService.create(
            email=d["email"],
            password=d["password"],
            first_name=d.get("first_name") or "",
            last_name=d.get("last_name") or "",
            role=d.get("role"),
            hospital_id=d.get("hospital_id"),
            is_active=d.get("is_active", True),
        )
        return Response(UserSerializer(user_by_id(user_id=user.id)).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        s = UserUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        user = UserService.update(
            user_id=_user_pk(pk),
            patch=UserUpdate(
                email=d.get("email"),
                first_name=d.get("first_name"),
                last_name=d.get("last_name"),
                role=d.get("role"),
                hospital_id=d.get("hospital_id"),
                is_active=d.get("is_active"),
                password=d.get("password"),
            ),
        )
        return Response(UserSerializer(user_by_id(user_id=user.id)).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        UserService.delete(user_id=_user_pk(pk), actor_id=get_caller(request).user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(tags=["Users"], request=None, responses={200: UserSerializer})
    @action(detail=True, methods=["post"], url_path="toggle-status")
    def toggle_status(self, request, pk=None):
        user = UserService.toggle_status(user_id=_user_pk(pk), actor_id=get_caller(request).user_id)
        return Response(UserSerializer(user_by_id(user_id=user.id)).data, status=status.HTTP_200_OK)
