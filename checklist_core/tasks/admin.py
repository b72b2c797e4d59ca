from django.contrib import admin

from checklist_core.tasks.models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "area", "hospital", "order", "is_active", "updated_at")
    list_filter = ("is_active", "hospital", "area")
    search_fields = ("code", "name", "description", "area__name", "area__code")
    # hospital mirrors area.hospital; edit the area instead
    readonly_fields = ("id", "hospital", "created_by", "created_at", "updated_at")
    ordering = ("area__name", "order", "code")
