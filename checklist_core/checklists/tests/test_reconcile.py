from datetime import date

import pytest

from checklist_core.areas.models import Area
from checklist_core.checklists.selectors import reconcile
from checklist_core.checklists.services import ChecklistEntryService
from checklist_core.checklists.statistics import checklist_statistics
from checklist_core.hospitals.models import Hospital
from checklist_core.iam.scope import HospitalScope
from checklist_core.tasks.models import Task

pytestmark = pytest.mark.django_db

DAY = date(2024, 6, 1)


@pytest.fixture
def task3(area):
    return Task.objects.create(
        area=area, hospital=area.hospital, code="ICU3", name="Log fridge temp", description="Vaccine fridge", order=3
    )


def test_three_untouched_tasks_then_one_completion(hospital, task, task2, task3):
    scope = HospitalScope.single(hospital.id)

    rows = reconcile(day=DAY, scope=scope)
    assert len(rows) == 3
    assert all(r.entry is None for r in rows)

    ChecklistEntryService.upsert_entry(task_id=task.id, day="2024-06-01", status=True, staff_name="Jane")

    rows = reconcile(day=DAY, scope=scope)
    assert len(rows) == 3
    done = [r for r in rows if r.entry is not None]
    assert len(done) == 1
    assert done[0].task.id == task.id
    assert done[0].entry.status is True
    assert done[0].entry.completed_at is not None

    assert checklist_statistics(day=DAY, scope=scope) == {
        "total": 3,
        "completed": 1,
        "pending": 2,
        "completion_rate": 33,
    }


def test_row_count_depends_on_tasks_not_entries(hospital, task, task2):
    scope = HospitalScope.single(hospital.id)
    ChecklistEntryService.upsert_entry(task_id=task.id, day=DAY, status=True)
    ChecklistEntryService.upsert_entry(task_id=task2.id, day=DAY, status=False)
    # entries on other days don't matter
    ChecklistEntryService.upsert_entry(task_id=task.id, day=date(2024, 6, 2), status=True)

    assert len(reconcile(day=DAY, scope=scope)) == 2
    assert len(reconcile(day=date(2024, 6, 3), scope=scope)) == 2


def test_inactive_tasks_are_excluded(hospital, task, task2):
    task2.is_active = False
    task2.save()

    rows = reconcile(day=DAY, scope=HospitalScope.single(hospital.id))
    assert [r.task.code for r in rows] == ["ICU1"]


def test_area_from_other_hospital_yields_empty_list(area, task, other_hospital, other_task):
    rows = reconcile(day=DAY, scope=HospitalScope.single(other_hospital.id), area_id=area.id)
    assert rows == []


def test_hospital_without_areas_yields_empty_list(task):
    empty = Hospital.objects.create(name="Empty", code="EMPTY")
    assert reconcile(day=DAY, scope=HospitalScope.single(empty.id)) == []


def test_all_scope_spans_hospitals_in_catalog_order(hospital, task, task2, other_task):
    b_area = Area.objects.create(hospital=hospital, name="Burns Unit", code="BU")
    Task.objects.create(area=b_area, hospital=hospital, code="BU1", name="Dressings", description="Stock", order=5)

    rows = reconcile(day=DAY, scope=HospitalScope.all())
    # area name, then order, then code
    assert [r.task.code for r in rows] == ["BU1", "ICU1", "ICU2", "OPD1"]


def test_area_filter_within_hospital(hospital, task, area):
    ward = Area.objects.create(hospital=hospital, name="Ward", code="W")
    Task.objects.create(area=ward, hospital=hospital, code="W1", name="Beds", description="Make beds")

    rows = reconcile(day=DAY, scope=HospitalScope.single(hospital.id), area_id=ward.id)
    assert [r.task.code for r in rows] == ["W1"]
