import pytest

pytestmark = pytest.mark.django_db


def test_task_list_scoped_and_ordered(staff_client, task, task2, other_task):
    res = staff_client.get("/api/v1/tasks/")
    assert res.status_code == 200
    assert [t["code"] for t in res.data["results"]] == ["ICU1", "ICU2"]


def test_task_search(admin_client, task, task2):
    res = admin_client.get("/api/v1/tasks/", {"search": "monitor"})
    assert res.status_code == 200
    assert [t["code"] for t in res.data["results"]] == ["ICU2"]


def test_admin_creates_task_with_generated_code(admin_client, area):
    res = admin_client.post(
        "/api/v1/tasks/",
        {"area_id": str(area.id), "name": "Fire check", "description": "Extinguisher pressure"},
        format="json",
    )
    assert res.status_code == 201, res.data
    assert res.data["code"] == "ICU1"
    assert res.data["hospital_id"] == str(area.hospital_id)


def test_create_task_requires_description(admin_client, area):
    res = admin_client.post("/api/v1/tasks/", {"area_id": str(area.id), "name": "No desc"}, format="json")
    assert res.status_code == 400
    assert "description" in res.data["error"]["details"]


def test_toggle_status(admin_client, task):
    res = admin_client.post(f"/api/v1/tasks/{task.id}/toggle-status/")
    assert res.status_code == 200
    assert res.data["is_active"] is False
