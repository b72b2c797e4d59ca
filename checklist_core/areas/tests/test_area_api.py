import pytest

pytestmark = pytest.mark.django_db


def test_staff_sees_only_own_hospital_areas(staff_client, area, other_area):
    res = staff_client.get("/api/v1/areas/")
    assert res.status_code == 200
    codes = [a["code"] for a in res.data["results"]]
    assert codes == ["ICU"]


def test_staff_cannot_request_other_hospital(staff_client, area, other_hospital):
    res = staff_client.get("/api/v1/areas/", {"hospital_id": str(other_hospital.id)})
    assert res.status_code == 403
    assert res.data["error"]["message"] == "You do not have access to the requested hospital."


def test_unassigned_admin_sees_all_areas(admin_client, area, other_area):
    res = admin_client.get("/api/v1/areas/")
    assert res.status_code == 200
    assert {a["code"] for a in res.data["results"]} == {"ICU", "OPD"}


def test_admin_create_lands_in_requested_hospital(admin_client, hospital, other_hospital):
    res = admin_client.post(
        "/api/v1/areas/",
        {"name": "Emergency", "code": "er", "hospital_id": str(other_hospital.id)},
        format="json",
    )
    assert res.status_code == 201, res.data
    assert res.data["code"] == "ER"
    assert res.data["hospital_id"] == str(other_hospital.id)


def test_admin_create_without_hospital_lands_in_default(admin_client, hospital):
    res = admin_client.post("/api/v1/areas/", {"name": "Lab", "code": "LAB"}, format="json")
    assert res.status_code == 201, res.data
    assert res.data["hospital_id"] == str(hospital.id)


def test_staff_cannot_create_area(staff_client, hospital):
    res = staff_client.post("/api/v1/areas/", {"name": "Lab", "code": "LAB"}, format="json")
    assert res.status_code == 403


def test_active_areas_endpoint(staff_client, area):
    Area = area.__class__
    Area.objects.create(hospital=area.hospital, name="Closed Ward", code="CW", is_active=False)

    res = staff_client.get("/api/v1/areas/active/")
    assert res.status_code == 200
    assert [a["code"] for a in res.data] == ["ICU"]
