# backend/checklist_core/checklists/statistics.py
from __future__ import annotations

from datetime import date
from typing import Any, Iterable
from uuid import UUID

from checklist_core.checklists.selectors import ChecklistRow, ReportRow, reconcile
from checklist_core.iam.scope import HospitalScope

UNKNOWN_AREA = "Unknown"


def completion_rate(completed: int, total: int) -> int:
    # round half up, 0 for an empty set
    if total <= 0:
        return 0
    return int((100 * completed / total) + 0.5)


def statistics(rows: Iterable[ChecklistRow]) -> dict[str, int]:
    rows = list(rows)
    total = len(rows)
    completed = sum(1 for r in rows if r.is_completed)
    return {
        "total": total,
        "completed": completed,
        "pending": total - completed,
        "completion_rate": completion_rate(completed, total),
    }


def checklist_statistics(*, day: date, scope: HospitalScope, area_id: UUID | None = None) -> dict[str, int]:
    return statistics(reconcile(day=day, scope=scope, area_id=area_id))


def report_statistics(rows: Iterable[ReportRow]) -> dict[str, Any]:
    rows = list(rows)
    total = len(rows)
    completed = 0
    by_area: dict[str, dict[str, int]] = {}

    for row in rows:
        bucket = by_area.setdefault(row.area or UNKNOWN_AREA, {"total": 0, "completed": 0})
        bucket["total"] += 1
        if row.status:
            bucket["completed"] += 1
            completed += 1

    return {
        "total": total,
        "completed": completed,
        "pending": total - completed,
        "completion_rate": completion_rate(completed, total),
        "by_area": by_area,
    }
