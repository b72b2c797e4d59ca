from __future__ import annotations

from rest_framework import serializers

from checklist_core.areas.models import Area


class AreaSerializer(serializers.ModelSerializer):
    hospital_id = serializers.UUIDField(read_only=True, allow_null=True)
    hospital_name = serializers.CharField(source="hospital.name", read_only=True, default=None)

    class Meta:
        model = Area
        fields = [
            "id",
            "hospital_id",
            "hospital_name",
            "name",
            "code",
            "description",
            "is_active",
            "created_by_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AreaCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    code = serializers.CharField(max_length=10)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    is_active = serializers.BooleanField(required=False, default=True)
    hospital_id = serializers.UUIDField(required=False, allow_null=True)


class AreaUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    code = serializers.CharField(max_length=10, required=False)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)
    hospital_id = serializers.UUIDField(required=False)
