import pytest

from checklist_core.checklists.services import ChecklistEntryService
from checklist_core.common.api.exceptions import ConflictError
from checklist_core.tasks.models import Task
from checklist_core.tasks.services import TaskService, TaskUpdate

pytestmark = pytest.mark.django_db


def test_create_copies_hospital_from_area(area):
    t = TaskService.create(area_id=area.id, name="Count beds", description="Count free beds")
    assert t.hospital_id == area.hospital_id


def test_generated_code_uses_area_code_and_skips_taken(area, task):
    # ICU1 exists; next free number is 2
    t = TaskService.create(area_id=area.id, name="A", description="a")
    assert t.code == "ICU2"

    Task.objects.create(area=area, hospital=area.hospital, code="ICU4", name="x", description="y")
    t = TaskService.create(area_id=area.id, name="B", description="b")
    # three tasks in the area, ICU4 is taken
    assert t.code == "ICU5"


def test_duplicate_code_within_hospital_is_conflict(area, task):
    with pytest.raises(ConflictError):
        TaskService.create(area_id=area.id, code="icu1", name="dup", description="dup")


def test_same_code_allowed_in_other_hospital(task, other_area):
    t = TaskService.create(area_id=other_area.id, code="ICU1", name="same", description="same")
    assert t.hospital_id == other_area.hospital_id


def test_area_change_rederives_hospital(task, other_area):
    t = TaskService.update(task_id=task.id, patch=TaskUpdate(area_id=other_area.id))
    assert t.area_id == other_area.id
    assert t.hospital_id == other_area.hospital_id


def test_delete_task_with_entries_is_conflict(task):
    ChecklistEntryService.upsert_entry(task_id=task.id, day="2024-06-01", status=True, staff_name="Jane")
    with pytest.raises(ConflictError):
        TaskService.delete(task_id=task.id)
    assert Task.objects.filter(id=task.id).exists()


def test_delete_untouched_task(task):
    TaskService.delete(task_id=task.id)
    assert not Task.objects.filter(id=task.id).exists()
