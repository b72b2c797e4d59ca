import pytest

from checklist_core.conftest import client_for, make_user
from checklist_core.iam.models import UserRole

pytestmark = pytest.mark.django_db

URL = "/api/v1/staff-records/"


def _create(client, **extra):
    payload = {"title": "Broken bed rail", "description": "Bed 4", "category": "incident"}
    payload.update(extra)
    res = client.post(URL, payload, format="json")
    assert res.status_code == 201, res.data
    return res.data


def test_staff_creates_record_in_own_hospital(staff_client, staff_user, hospital):
    data = _create(staff_client, priority="urgent")
    assert data["hospital_id"] == str(hospital.id)
    assert data["created_by_id"] == staff_user.id
    assert data["status"] == "open"


def test_invalid_category_is_rejected(staff_client, hospital):
    res = staff_client.post(URL, {"title": "t", "description": "d", "category": "gossip"}, format="json")
    assert res.status_code == 400
    assert "category" in res.data["error"]["details"]


def test_other_staff_cannot_edit_or_delete(staff_client, hospital):
    record = _create(staff_client)
    colleague = client_for(make_user("colleague", UserRole.STAFF, hospital=hospital))

    res = colleague.patch(f"{URL}{record['id']}/", {"notes": "hijack"}, format="json")
    assert res.status_code == 403
    assert res.data["error"]["message"] == "You can only edit your own records"

    res = colleague.delete(f"{URL}{record['id']}/")
    assert res.status_code == 403


def test_admin_may_edit_and_delete_any_record(staff_client, admin_client, hospital):
    record = _create(staff_client)

    res = admin_client.patch(f"{URL}{record['id']}/", {"status": "resolved"}, format="json")
    assert res.status_code == 200
    assert res.data["resolved_by_id"] is not None

    res = admin_client.delete(f"{URL}{record['id']}/")
    assert res.status_code == 204


def test_mine_filter_and_stats(staff_client, staff_user, hospital):
    _create(staff_client)
    colleague = client_for(make_user("colleague", UserRole.STAFF, hospital=hospital))
    _create(colleague, title="Supply", category="supply_request")

    res = staff_client.get(URL)
    assert res.data["count"] == 2

    res = staff_client.get(URL, {"mine": "true"})
    assert [r["title"] for r in res.data["results"]] == ["Broken bed rail"]

    res = staff_client.get(f"{URL}stats/")
    assert res.status_code == 200
    assert res.data["total"] == 1


def test_records_of_other_hospitals_are_hidden(staff_client, other_staff_client, hospital, other_hospital):
    record = _create(other_staff_client)

    assert staff_client.get(URL).data["count"] == 0
    assert staff_client.get(f"{URL}{record['id']}/").status_code == 404


def test_unknown_record_id(staff_client, hospital):
    assert staff_client.get(f"{URL}not-a-uuid/").status_code == 404
