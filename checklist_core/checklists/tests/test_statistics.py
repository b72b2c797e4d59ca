from datetime import date

import pytest

from checklist_core.checklists.selectors import ChecklistRow
from checklist_core.checklists.services import ChecklistEntryService
from checklist_core.checklists.statistics import checklist_statistics, completion_rate, statistics
from checklist_core.hospitals.models import Hospital
from checklist_core.iam.scope import HospitalScope


@pytest.mark.parametrize(
    "completed,total,expected",
    [(0, 0, 0), (1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (3, 3, 100)],
)
def test_completion_rate_rounds_half_up(completed, total, expected):
    assert completion_rate(completed, total) == expected


def test_empty_rows_are_all_zero():
    assert statistics([]) == {"total": 0, "completed": 0, "pending": 0, "completion_rate": 0}


def test_entry_with_false_status_counts_as_pending():
    class _E:
        status = False

    rows = [ChecklistRow(task=None, entry=_E()), ChecklistRow(task=None, entry=None)]
    assert statistics(rows)["pending"] == 2


@pytest.mark.django_db
def test_statistics_for_day_match_reconciled_rows(hospital, task, task2):
    day = date(2024, 6, 1)
    ChecklistEntryService.upsert_entry(task_id=task.id, day=day, status=True)
    ChecklistEntryService.upsert_entry(task_id=task2.id, day=day, status=False)

    stats = checklist_statistics(day=day, scope=HospitalScope.single(hospital.id))
    assert stats == {"total": 2, "completed": 1, "pending": 1, "completion_rate": 50}


@pytest.mark.django_db
def test_hospital_without_tasks_has_zero_rate(task):
    empty = Hospital.objects.create(name="Empty", code="EMPTY")
    stats = checklist_statistics(day=date(2024, 6, 1), scope=HospitalScope.single(empty.id))
    assert stats["total"] == 0
    assert stats["completion_rate"] == 0
