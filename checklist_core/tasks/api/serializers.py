# backend/checklist_core/tasks/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from checklist_core.tasks.models import Task


class TaskSerializer(serializers.ModelSerializer):
    area_id = serializers.UUIDField(read_only=True)
    area_name = serializers.CharField(source="area.name", read_only=True)
    area_code = serializers.CharField(source="area.code", read_only=True)
    hospital_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Task
        fields = [
            "id",
            "code",
            "name",
            "description",
            "area_id",
            "area_name",
            "area_code",
            "hospital_id",
            "order",
            "is_active",
            "created_by_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class TaskCreateSerializer(serializers.Serializer):
    area_id = serializers.UUIDField()
    code = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=1000)
    order = serializers.IntegerField(required=False, default=0)
    is_active = serializers.BooleanField(required=False, default=True)


class TaskUpdateSerializer(serializers.Serializer):
    area_id = serializers.UUIDField(required=False)
    code = serializers.CharField(max_length=20, required=False)
    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(max_length=1000, required=False)
    order = serializers.IntegerField(required=False)
    is_active = serializers.BooleanField(required=False)
