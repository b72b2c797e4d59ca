# backend/checklist_core/staff_records/selectors.py
from __future__ import annotations

from typing import Any
from uuid import UUID

from django.db.models import Count, QuerySet
from rest_framework.exceptions import NotFound

from checklist_core.iam.scope import HospitalScope
from checklist_core.staff_records.models import RecordCategory, RecordStatus, StaffRecord


def _scoped(scope: HospitalScope) -> QuerySet[StaffRecord]:
    qs = StaffRecord.objects.select_related("area", "hospital", "created_by", "resolved_by")
    if not scope.is_all:
        qs = qs.filter(hospital_id=scope.hospital_id)
    return qs


def record_list(
    *,
    scope: HospitalScope,
    category: str | None = None,
    status: str | None = None,
    priority: str | None = None,
    created_by_id: int | None = None,
) -> QuerySet[StaffRecord]:
    qs = _scoped(scope)
    if category:
        qs = qs.filter(category=category)
    if status:
        qs = qs.filter(status=status)
    if priority:
        qs = qs.filter(priority=priority)
    if created_by_id is not None:
        qs = qs.filter(created_by_id=created_by_id)
    return qs.order_by("-created_at")


def record_by_id(*, record_id: UUID, scope: HospitalScope) -> StaffRecord:
    try:
        return _scoped(scope).get(id=record_id)
    except StaffRecord.DoesNotExist:
        raise NotFound("Record not found")


def record_stats(*, scope: HospitalScope, created_by_id: int | None = None) -> dict[str, Any]:
    """
    {total, by_status, by_category}; every known status/category is present,
    zero-filled. created_by_id narrows the numbers to one author.
    """
    qs = _scoped(scope)
    if created_by_id is not None:
        qs = qs.filter(created_by_id=created_by_id)

    by_status = {value: 0 for value in RecordStatus.values}
    for row in qs.values("status").annotate(n=Count("id")).order_by():
        by_status[row["status"]] = row["n"]

    by_category = {value: 0 for value in RecordCategory.values}
    for row in qs.values("category").annotate(n=Count("id")).order_by():
        by_category[row["category"]] = row["n"]

    return {
        "total": sum(by_status.values()),
        "by_status": by_status,
        "by_category": by_category,
    }
