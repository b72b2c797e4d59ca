from django.contrib import admin

from checklist_core.staff_records.models import StaffRecord


@admin.register(StaffRecord)
class StaffRecordAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "priority", "status", "hospital", "area", "created_by", "created_at")
    list_filter = ("category", "priority", "status", "hospital")
    search_fields = ("title", "description", "notes")
    readonly_fields = ("id", "created_by", "resolved_by", "resolved_at", "created_at", "updated_at")
    ordering = ("-created_at",)
