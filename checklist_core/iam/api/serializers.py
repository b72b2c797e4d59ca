# backend/checklist_core/iam/api/serializers.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from checklist_core.iam.models import UserRole


class LoginRequestSerializer(serializers.Serializer):
    # username is the account email; either key is accepted
    username = serializers.CharField(required=False)
    email = serializers.EmailField(required=False)
    password = serializers.CharField()


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class UserSerializer(serializers.ModelSerializer):
    role = serializers.SerializerMethodField()
    hospital_id = serializers.SerializerMethodField()
    hospital_name = serializers.SerializerMethodField()

    class Meta:
        model = get_user_model()
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "role",
            "hospital_id",
            "hospital_name",
            "is_active",
            "is_superuser",
            "last_login",
            "date_joined",
        ]
        read_only_fields = fields

    @staticmethod
    def _profile(obj):
        return getattr(obj, "checklist_profile", None)

    def get_role(self, obj) -> str:
        if obj.is_superuser:
            return UserRole.ADMIN
        profile = self._profile(obj)
        return profile.role if profile is not None else UserRole.STAFF

    def get_hospital_id(self, obj) -> str | None:
        profile = self._profile(obj)
        if profile is None or profile.hospital_id is None:
            return None
        return str(profile.hospital_id)

    def get_hospital_name(self, obj) -> str | None:
        profile = self._profile(obj)
        if profile is None or profile.hospital is None:
            return None
        return profile.hospital.name


class UserCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    role = serializers.ChoiceField(choices=UserRole.choices, required=False, default=UserRole.STAFF)
    hospital_id = serializers.UUIDField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False, default=True)


class UserUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False)
    password = serializers.CharField(min_length=8, required=False, write_only=True)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
    hospital_id = serializers.UUIDField(required=False)
    is_active = serializers.BooleanField(required=False)


class ProfileUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField()
    new_password = serializers.CharField(min_length=8)
