import pytest
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from checklist_core.conftest import make_user
from checklist_core.iam.caller import caller_for_user
from checklist_core.iam.models import UserRole
from checklist_core.iam.scope import HospitalScope
from checklist_core.staff_records.models import RecordStatus, StaffRecord
from checklist_core.staff_records.selectors import record_list, record_stats
from checklist_core.staff_records.services import StaffRecordService, StaffRecordUpdate

pytestmark = pytest.mark.django_db


@pytest.fixture
def record(hospital, area, staff_user):
    return StaffRecordService.create(
        title=" Leaking tap ",
        description="Sink in the sluice room",
        category="maintenance",
        priority="high",
        area_id=area.id,
        hospital_id=hospital.id,
        created_by_id=staff_user.id,
    )


def test_create_trims_and_defaults(record, area):
    assert record.title == "Leaking tap"
    assert record.status == RecordStatus.OPEN
    assert record.area_id == area.id


def test_area_from_another_hospital_is_rejected(hospital, other_area, staff_user):
    with pytest.raises(ValidationError):
        StaffRecordService.create(
            title="x", description="y", area_id=other_area.id, hospital_id=hospital.id, created_by_id=staff_user.id
        )


def test_only_owner_or_admin_may_edit(record, hospital, admin_user):
    colleague = make_user("colleague", UserRole.STAFF, hospital=hospital)
    scope = HospitalScope.single(hospital.id)

    with pytest.raises(PermissionDenied):
        StaffRecordService.update(
            record_id=record.id, patch=StaffRecordUpdate(notes="mine now"), caller=caller_for_user(colleague), scope=scope
        )
    with pytest.raises(PermissionDenied):
        StaffRecordService.delete(record_id=record.id, caller=caller_for_user(colleague), scope=scope)

    obj = StaffRecordService.update(
        record_id=record.id, patch=StaffRecordUpdate(priority="urgent"), caller=caller_for_user(admin_user), scope=scope
    )
    assert obj.priority == "urgent"


def test_resolving_stamps_who_and_when(record, hospital, staff_user):
    obj = StaffRecordService.update(
        record_id=record.id,
        patch=StaffRecordUpdate(status=RecordStatus.RESOLVED),
        caller=caller_for_user(staff_user),
        scope=HospitalScope.single(hospital.id),
    )
    assert obj.status == RecordStatus.RESOLVED
    assert obj.resolved_by_id == staff_user.id
    assert obj.resolved_at is not None


def test_record_outside_scope_is_not_found(record, other_hospital, admin_user):
    with pytest.raises(NotFound):
        StaffRecordService.delete(
            record_id=record.id, caller=caller_for_user(admin_user), scope=HospitalScope.single(other_hospital.id)
        )
    assert StaffRecord.objects.filter(id=record.id).exists()


def test_stats_are_zero_filled_and_per_author(record, hospital, staff_user):
    colleague = make_user("colleague", UserRole.STAFF, hospital=hospital)
    StaffRecordService.create(
        title="Gloves",
        description="Size M",
        category="supply_request",
        hospital_id=hospital.id,
        created_by_id=colleague.id,
    )
    scope = HospitalScope.single(hospital.id)

    everyone = record_stats(scope=scope)
    assert everyone["total"] == 2
    assert everyone["by_status"] == {"open": 2, "in_progress": 0, "resolved": 0, "closed": 0}
    assert everyone["by_category"]["supply_request"] == 1
    assert everyone["by_category"]["incident"] == 0

    mine = record_stats(scope=scope, created_by_id=staff_user.id)
    assert mine["total"] == 1
    assert mine["by_category"]["maintenance"] == 1

    assert [r.title for r in record_list(scope=scope, category="supply_request")] == ["Gloves"]
