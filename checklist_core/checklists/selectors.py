# backend/checklist_core/checklists/selectors.py
"""
Read model for checklists.

Two distinct paths:
- reconcile(): starts from the active task catalog for a day and pairs each
  task with its entry (or None). Row count depends on tasks only.
- entries_by_creation_range(): starts from entries saved (created_at) inside
  a day range. Never touched tasks don't appear; one task can appear several
  times for different checklist days.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from django.db.models import QuerySet

from checklist_core.areas.selectors import area_ids_for_hospital
from checklist_core.checklists.models import ChecklistEntry
from checklist_core.common.dates import range_bounds
from checklist_core.iam.scope import HospitalScope
from checklist_core.tasks.models import Task
from checklist_core.tasks.selectors import TASK_ORDERING


@dataclass(frozen=True)
class ChecklistRow:
    task: Task
    entry: Optional[ChecklistEntry]

    @property
    def is_completed(self) -> bool:
        return self.entry is not None and self.entry.status is True


@dataclass(frozen=True)
class ReportRow:
    entry_id: UUID
    date: date
    task_code: str
    area: str
    hospital: str
    task_name: str
    description: str
    status: bool
    staff_name: str
    created_at: datetime
    completed_at: Optional[datetime]


def active_tasks_in_scope(*, scope: HospitalScope, area_id: UUID | None = None) -> QuerySet[Task]:
    """
    Active tasks visible in `scope`, optionally narrowed to one area.

    A hospital scope is applied through the hospital's area allowlist. An
    area outside that allowlist (or a hospital with no areas) yields nothing
    rather than an error.
    """
    qs = Task.objects.filter(is_active=True).select_related("area", "area__hospital")

    if area_id is not None:
        qs = qs.filter(area_id=area_id)

    if not scope.is_all:
        allowed = area_ids_for_hospital(hospital_id=scope.hospital_id)
        if not allowed:
            return Task.objects.none()
        if area_id is not None and area_id not in allowed:
            return Task.objects.none()
        qs = qs.filter(area_id__in=allowed)

    return qs.order_by(*TASK_ORDERING)


def reconcile(*, day: date, scope: HospitalScope, area_id: UUID | None = None) -> list[ChecklistRow]:
    tasks = list(active_tasks_in_scope(scope=scope, area_id=area_id))
    if not tasks:
        return []

    entries = ChecklistEntry.objects.filter(date=day, task_id__in=[t.id for t in tasks])
    by_task = {e.task_id: e for e in entries}

    return [ChecklistRow(task=t, entry=by_task.get(t.id)) for t in tasks]


def _hospital_label(entry: ChecklistEntry) -> str:
    area_hospital = entry.task.area.hospital
    if area_hospital is not None:
        return area_hospital.name
    return entry.hospital.name if entry.hospital is not None else ""


def entries_by_creation_range(
    *,
    start: date,
    end: date,
    scope: HospitalScope,
    area_id: UUID | None = None,
) -> list[ReportRow]:
    lower, upper = range_bounds(start, end)

    # inner join on task: an entry whose task can't be resolved never shows up
    qs = ChecklistEntry.objects.filter(
        created_at__gte=lower,
        created_at__lt=upper,
        task__isnull=False,
    ).select_related("task", "task__area", "task__area__hospital", "hospital")

    if not scope.is_all:
        allowed = area_ids_for_hospital(hospital_id=scope.hospital_id)
        if not allowed:
            return []
        qs = qs.filter(task__area_id__in=allowed)

    if area_id is not None:
        qs = qs.filter(task__area_id=area_id)

    return [
        ReportRow(
            entry_id=e.id,
            date=e.date,
            task_code=e.task.code,
            area=e.task.area.name,
            hospital=_hospital_label(e),
            task_name=e.task.name,
            description=e.task.description,
            status=e.status,
            staff_name=e.staff_name,
            created_at=e.created_at,
            completed_at=e.completed_at,
        )
        for e in qs.order_by("-created_at")
    ]
