from django.contrib import admin

from checklist_core.checklists.models import ChecklistEntry


@admin.register(ChecklistEntry)
class ChecklistEntryAdmin(admin.ModelAdmin):
    list_display = ("task", "date", "status", "staff_name", "completed_at", "hospital", "created_at")
    list_filter = ("status", "hospital", "date")
    search_fields = ("task__code", "task__name", "staff_name", "notes")
    date_hierarchy = "date"
    readonly_fields = ("id", "task", "date", "hospital", "completed_by", "completed_at", "created_at", "updated_at")
    ordering = ("-date", "task__code")
