import pytest

from checklist_core.areas.models import Area
from checklist_core.areas.services import AreaService, AreaUpdate
from checklist_core.common.api.exceptions import ConflictError
from checklist_core.tasks.models import Task

pytestmark = pytest.mark.django_db


def test_area_code_unique_per_hospital_only(hospital, other_hospital):
    AreaService.create(name="ICU", code="icu", hospital_id=hospital.id)
    with pytest.raises(ConflictError):
        AreaService.create(name="ICU again", code="ICU", hospital_id=hospital.id)

    # same code in another hospital is fine
    other = AreaService.create(name="ICU", code="ICU", hospital_id=other_hospital.id)
    assert other.code == "ICU"


def test_moving_area_rederives_task_hospital(area, task, task2, other_hospital):
    AreaService.update(area_id=area.id, patch=AreaUpdate(hospital_id=other_hospital.id))

    task.refresh_from_db()
    task2.refresh_from_db()
    assert task.hospital_id == other_hospital.id
    assert task2.hospital_id == other_hospital.id


def test_moving_area_with_clashing_task_codes_is_rolled_back(area, task, other_area, other_hospital, hospital):
    Task.objects.create(area=other_area, hospital=other_hospital, code="ICU1", name="x", description="y")

    with pytest.raises(ConflictError):
        AreaService.update(area_id=area.id, patch=AreaUpdate(hospital_id=other_hospital.id))

    area.refresh_from_db()
    task.refresh_from_db()
    assert area.hospital_id == hospital.id
    assert task.hospital_id == hospital.id


def test_delete_area_with_tasks_is_conflict(area, task):
    with pytest.raises(ConflictError):
        AreaService.delete(area_id=area.id)
    assert Area.objects.filter(id=area.id).exists()


def test_toggle_status(area):
    assert AreaService.toggle_status(area_id=area.id).is_active is False
    assert AreaService.toggle_status(area_id=area.id).is_active is True
