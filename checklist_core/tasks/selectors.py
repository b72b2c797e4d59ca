# backend/checklist_core/tasks/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet
from rest_framework.exceptions import NotFound

from checklist_core.iam.scope import HospitalScope
from checklist_core.tasks.models import Task

TASK_ORDERING = ("area__name", "order", "code")


def _scoped(scope: HospitalScope) -> QuerySet[Task]:
    qs = Task.objects.select_related("area", "area__hospital")
    if not scope.is_all:
        qs = qs.filter(area__hospital_id=scope.hospital_id)
    return qs


def task_list(
    *,
    scope: HospitalScope,
    area_id: UUID | None = None,
    search: str | None = None,
    include_inactive: bool = True,
) -> QuerySet[Task]:
    qs = _scoped(scope)
    if area_id is not None:
        qs = qs.filter(area_id=area_id)
    if not include_inactive:
        qs = qs.filter(is_active=True)
    if search:
        qs = qs.filter(
            Q(code__icontains=search) | Q(name__icontains=search) | Q(description__icontains=search)
        )
    return qs.order_by(*TASK_ORDERING)


def task_by_id(*, task_id: UUID, scope: HospitalScope) -> Task:
    try:
        return _scoped(scope).get(id=task_id)
    except Task.DoesNotExist:
        raise NotFound("Task not found")
