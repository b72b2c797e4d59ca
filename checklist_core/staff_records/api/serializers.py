from __future__ import annotations

from rest_framework import serializers

from checklist_core.staff_records.models import RecordCategory, RecordPriority, RecordStatus, StaffRecord


class StaffRecordSerializer(serializers.ModelSerializer):
    hospital_id = serializers.UUIDField(read_only=True, allow_null=True)
    area_id = serializers.UUIDField(read_only=True, allow_null=True)
    area_name = serializers.CharField(source="area.name", read_only=True, default=None)
    created_by_id = serializers.IntegerField(read_only=True, allow_null=True)
    created_by_email = serializers.CharField(source="created_by.email", read_only=True, default=None)
    resolved_by_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = StaffRecord
        fields = [
            "id",
            "hospital_id",
            "area_id",
            "area_name",
            "title",
            "category",
            "description",
            "priority",
            "status",
            "notes",
            "created_by_id",
            "created_by_email",
            "resolved_by_id",
            "resolved_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class StaffRecordCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=2000)
    category = serializers.ChoiceField(choices=RecordCategory.choices, required=False, default=RecordCategory.GENERAL)
    priority = serializers.ChoiceField(choices=RecordPriority.choices, required=False, default=RecordPriority.MEDIUM)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")
    area_id = serializers.UUIDField(required=False, allow_null=True)
    hospital_id = serializers.UUIDField(required=False, allow_null=True)


class StaffRecordUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(max_length=2000, required=False)
    category = serializers.ChoiceField(choices=RecordCategory.choices, required=False)
    priority = serializers.ChoiceField(choices=RecordPriority.choices, required=False)
    status = serializers.ChoiceField(choices=RecordStatus.choices, required=False)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)
    area_id = serializers.UUIDField(required=False)


class StaffRecordStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    by_status = serializers.DictField(child=serializers.IntegerField())
    by_category = serializers.DictField(child=serializers.IntegerField())
