# backend/checklist_core/iam/api/me.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from checklist_core.iam.api.serializers import (
    ChangePasswordSerializer,
    DetailResponseSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
)
from checklist_core.iam.selectors import user_by_id
from checklist_core.iam.services.users import UserService


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserSerializer}, tags=["Auth"])
    def get(self, request):
        user = user_by_id(user_id=request.user.id)
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)

    @extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer}, tags=["Auth"])
    def patch(self, request):
        s = ProfileUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        UserService.update_profile(
            user=request.user,
            first_name=d.get("first_name"),
            last_name=d.get("last_name"),
            email=d.get("email"),
        )
        user = user_by_id(user_id=request.user.id)
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)


class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=ChangePasswordSerializer, responses={200: DetailResponseSerializer}, tags=["Auth"])
    def post(self, request):
        s = ChangePasswordSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        UserService.change_password(
            user=request.user,
            current_password=s.validated_data["current_password"],
            new_password=s.validated_data["new_password"],
        )
        return Response({"detail": "password changed"}, status=status.HTTP_200_OK)
