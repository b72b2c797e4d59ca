# backend/checklist_core/hospitals/admin.py
from __future__ import annotations

from django.contrib import admin

from checklist_core.hospitals.models import Hospital


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "is_default", "is_active", "phone", "email", "updated_at")
    list_filter = ("is_active", "is_default")
    search_fields = ("name", "code", "email")
    # the default flag is moved through HospitalService.set_default only
    readonly_fields = ("id", "is_default", "created_at", "updated_at")
    ordering = ("-is_default", "name")
