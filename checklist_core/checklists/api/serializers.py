from __future__ import annotations

from rest_framework import serializers

from checklist_core.checklists.models import ChecklistEntry
from checklist_core.tasks.api.serializers import TaskSerializer


class ChecklistEntrySerializer(serializers.ModelSerializer):
    task_id = serializers.UUIDField(read_only=True)
    hospital_id = serializers.UUIDField(read_only=True, allow_null=True)
    completed_by_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = ChecklistEntry
        fields = [
            "id",
            "task_id",
            "date",
            "status",
            "staff_name",
            "notes",
            "completed_by_id",
            "completed_at",
            "hospital_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ChecklistRowSerializer(serializers.Serializer):
    task = TaskSerializer()
    entry = ChecklistEntrySerializer(allow_null=True)


class ChecklistResponseSerializer(serializers.Serializer):
    date = serializers.DateField()
    hospital_id = serializers.UUIDField(allow_null=True)
    rows = ChecklistRowSerializer(many=True)


class EntryWriteSerializer(serializers.Serializer):
    task_id = serializers.UUIDField()
    # parsed with parse_day so full ISO datetimes are accepted too
    date = serializers.CharField()
    status = serializers.BooleanField()
    staff_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    hospital_id = serializers.UUIDField(required=False, allow_null=True)


class BulkSaveSerializer(serializers.Serializer):
    date = serializers.CharField()
    # items are validated one by one in the service so that one bad item
    # does not reject the whole batch
    entries = serializers.ListField(child=serializers.JSONField(), allow_empty=True)
    hospital_id = serializers.UUIDField(required=False, allow_null=True)


class BulkItemErrorSerializer(serializers.Serializer):
    code = serializers.CharField()
    message = serializers.CharField()
    details = serializers.JSONField(required=False)


class BulkItemResultSerializer(serializers.Serializer):
    task_id = serializers.CharField(allow_null=True)
    ok = serializers.BooleanField()
    entry_id = serializers.CharField(allow_null=True)
    error = BulkItemErrorSerializer(allow_null=True)


class BulkSaveResponseSerializer(serializers.Serializer):
    date = serializers.DateField()
    saved = serializers.IntegerField()
    failed = serializers.IntegerField()
    results = BulkItemResultSerializer(many=True)


class StatisticsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    pending = serializers.IntegerField()
    completion_rate = serializers.IntegerField()


class AreaBucketSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    completed = serializers.IntegerField()


class ReportStatisticsSerializer(StatisticsSerializer):
    by_area = serializers.DictField(child=AreaBucketSerializer())


class ReportRowSerializer(serializers.Serializer):
    entry_id = serializers.UUIDField()
    date = serializers.DateField()
    task_code = serializers.CharField()
    area = serializers.CharField()
    hospital = serializers.CharField(allow_blank=True)
    task_name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    status = serializers.BooleanField()
    staff_name = serializers.CharField(allow_blank=True)
    created_at = serializers.DateTimeField()
    completed_at = serializers.DateTimeField(allow_null=True)


class ReportResponseSerializer(serializers.Serializer):
    entries = ReportRowSerializer(many=True)
    statistics = ReportStatisticsSerializer()
