import pytest
from django.test import override_settings

from checklist_core.areas.models import Area
from checklist_core.common.api.exceptions import ConflictError, InvariantViolation
from checklist_core.hospitals.models import Hospital
from checklist_core.hospitals.services import HospitalService, HospitalUpdate

pytestmark = pytest.mark.django_db


def _defaults():
    return list(Hospital.objects.filter(is_default=True).values_list("code", flat=True))


def test_get_default_creates_lazily_once():
    assert Hospital.objects.count() == 0

    h1 = HospitalService.get_default()
    h2 = HospitalService.get_default()

    assert h1.id == h2.id
    assert h1.code == "DEFAULT"
    assert h1.name == "Sugar & Heart Clinic"
    assert h1.is_default and h1.is_active
    assert Hospital.objects.count() == 1


@override_settings(CHECKLIST={"DEFAULT_HOSPITAL_NAME": "Test Clinic", "DEFAULT_HOSPITAL_CODE": "tc"})
def test_get_default_uses_configured_name_and_code():
    h = HospitalService.get_default()
    assert h.name == "Test Clinic"
    assert h.code == "TC"


def test_get_default_promotes_existing_default_code():
    existing = Hospital.objects.create(name="Legacy", code="DEFAULT", is_default=False, is_active=False)

    h = HospitalService.get_default()

    assert h.id == existing.id
    existing.refresh_from_db()
    assert existing.is_default and existing.is_active


def test_first_hospital_becomes_default():
    h = HospitalService.create(name="First", code="first")
    assert h.code == "FIRST"
    assert h.is_default


def test_create_rejects_duplicate_code_case_insensitively(hospital):
    with pytest.raises(ConflictError):
        HospitalService.create(name="Again", code="main")


def test_single_default_after_create_and_set_default_sequence(hospital):
    b = HospitalService.create(name="B", code="B")
    c = HospitalService.create(name="C", code="C", is_default=True)
    assert _defaults() == ["C"]

    HospitalService.set_default(hospital_id=b.id)
    assert _defaults() == ["B"]

    HospitalService.set_default(hospital_id=hospital.id)
    HospitalService.update(hospital_id=c.id, patch=HospitalUpdate(is_default=True))
    assert _defaults() == ["C"]


def test_cannot_unset_default_flag_directly(hospital):
    with pytest.raises(InvariantViolation):
        HospitalService.update(hospital_id=hospital.id, patch=HospitalUpdate(is_default=False))
    hospital.refresh_from_db()
    assert hospital.is_default


def test_cannot_deactivate_or_delete_default(hospital):
    with pytest.raises(InvariantViolation):
        HospitalService.toggle_status(hospital_id=hospital.id)
    with pytest.raises(InvariantViolation):
        HospitalService.update(hospital_id=hospital.id, patch=HospitalUpdate(is_active=False))
    with pytest.raises(InvariantViolation):
        HospitalService.delete(hospital_id=hospital.id)


def test_cannot_make_inactive_hospital_default(hospital, other_hospital):
    HospitalService.toggle_status(hospital_id=other_hospital.id)
    with pytest.raises(InvariantViolation):
        HospitalService.set_default(hospital_id=other_hospital.id)


def test_delete_referenced_hospital_is_conflict(hospital, other_hospital):
    Area.objects.create(hospital=other_hospital, name="Ward", code="W1")
    with pytest.raises(ConflictError):
        HospitalService.delete(hospital_id=other_hospital.id)
    assert Hospital.objects.filter(id=other_hospital.id).exists()


def test_update_code_duplicate_is_conflict(hospital, other_hospital):
    with pytest.raises(ConflictError):
        HospitalService.update(hospital_id=other_hospital.id, patch=HospitalUpdate(code="Main"))


def test_branding_falls_back_to_default(hospital, other_hospital):
    assert HospitalService.branding()["code"] == "MAIN"
    assert HospitalService.branding(hospital_id=other_hospital.id)["code"] == "CITY-01"

    b = HospitalService.branding(hospital_id=other_hospital.id)
    assert b["email"] == "front@city.example"
    assert b["address"] == "12 Park Road"
