# backend/checklist_core/areas/admin.py
from __future__ import annotations

from django.contrib import admin

from checklist_core.areas.models import Area


@admin.register(Area)
class AreaAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "hospital", "is_active", "updated_at")
    list_filter = ("is_active", "hospital")
    search_fields = ("name", "code", "hospital__name", "hospital__code")
    readonly_fields = ("id", "created_by", "created_at", "updated_at")
    ordering = ("hospital", "name")
