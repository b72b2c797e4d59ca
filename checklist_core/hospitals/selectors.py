# backend/checklist_core/hospitals/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet
from rest_framework.exceptions import NotFound

from checklist_core.hospitals.models import Hospital


def hospital_list(*, search: str | None = None, include_inactive: bool = False) -> QuerySet[Hospital]:
    qs = Hospital.objects.all()
    if not include_inactive:
        qs = qs.filter(is_active=True)
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(code__icontains=search))
    return qs.order_by("-is_default", "name")


def active_hospitals() -> QuerySet[Hospital]:
    return Hospital.objects.filter(is_active=True).order_by("-is_default", "name")


def hospital_by_id(*, hospital_id: UUID) -> Hospital:
    try:
        return Hospital.objects.get(id=hospital_id)
    except Hospital.DoesNotExist:
        raise NotFound("Hospital not found")
