import pytest
from django.contrib.auth import get_user_model
from rest_framework.exceptions import ValidationError

from checklist_core.iam.models import UserProfile
from checklist_core.iam.services.users import UserService, UserUpdate

pytestmark = pytest.mark.django_db


def test_staff_cannot_manage_users(staff_client):
    assert staff_client.get("/api/v1/users/").status_code == 403


def test_admin_creates_user_in_default_hospital(admin_client, hospital):
    res = admin_client.post(
        "/api/v1/users/",
        {"email": "Nurse@Example.com", "password": "secret-pass", "first_name": "Nia"},
        format="json",
    )
    assert res.status_code == 201, res.data
    assert res.data["email"] == "nurse@example.com"
    assert res.data["role"] == "STAFF"
    assert res.data["hospital_id"] == str(hospital.id)

    user = get_user_model().objects.get(email="nurse@example.com")
    assert user.groups.filter(name="STAFF").exists()


def test_duplicate_email_is_conflict(admin_client, staff_user):
    res = admin_client.post(
        "/api/v1/users/",
        {"email": "staff@example.com", "password": "secret-pass"},
        format="json",
    )
    assert res.status_code == 409
    assert res.data["error"]["message"] == "User with this email already exists"


def test_role_change_mirrors_group(admin_client, staff_user):
    res = admin_client.patch(f"/api/v1/users/{staff_user.id}/", {"role": "ADMIN"}, format="json")
    assert res.status_code == 200, res.data
    assert res.data["role"] == "ADMIN"

    staff_user.refresh_from_db()
    assert set(staff_user.groups.values_list("name", flat=True)) == {"ADMIN"}
    assert UserProfile.objects.get(user=staff_user).role == "ADMIN"


def test_admin_cannot_delete_or_deactivate_self(admin_client, admin_user):
    res = admin_client.delete(f"/api/v1/users/{admin_user.id}/")
    assert res.status_code == 400

    res = admin_client.post(f"/api/v1/users/{admin_user.id}/toggle-status/")
    assert res.status_code == 400


def test_toggle_and_delete_other_user(admin_client, staff_user):
    res = admin_client.post(f"/api/v1/users/{staff_user.id}/toggle-status/")
    assert res.status_code == 200
    assert res.data["is_active"] is False

    res = admin_client.delete(f"/api/v1/users/{staff_user.id}/")
    assert res.status_code == 204
    assert not get_user_model().objects.filter(id=staff_user.id).exists()


def test_list_filters_by_role(admin_client, staff_user, admin_user):
    res = admin_client.get("/api/v1/users/", {"role": "staff"})
    assert res.status_code == 200
    assert [u["id"] for u in res.data["results"]] == [staff_user.id]


def test_unknown_user_is_404(admin_client):
    assert admin_client.get("/api/v1/users/999999/").status_code == 404
    assert admin_client.get("/api/v1/users/abc/").status_code == 404


def test_service_creates_profile_and_group(hospital, other_hospital):
    user = UserService.create(
        email="lead@example.com",
        password="secret-pass",
        role="ADMIN",
        hospital_id=other_hospital.id,
    )
    assert user.checklist_profile.hospital_id == other_hospital.id
    assert user.groups.filter(name="ADMIN").exists()


def test_service_role_is_stored_upper_case_on_profile_and_group(hospital):
    user = UserService.create(email="night@example.com", password="secret-pass", role="admin")
    profile = UserProfile.objects.get(user=user)
    assert profile.role == "ADMIN"
    assert list(user.groups.values_list("name", flat=True)) == ["ADMIN"]

    UserService.update(user_id=user.id, patch=UserUpdate(role=" staff "))
    profile.refresh_from_db()
    assert profile.role == "STAFF"
    assert list(user.groups.values_list("name", flat=True)) == ["STAFF"]


def test_service_rejects_unknown_role_before_creating_the_user(hospital):
    with pytest.raises(ValidationError):
        UserService.create(email="ghost@example.com", password="secret-pass", role="nurse")
    assert not get_user_model().objects.filter(email="ghost@example.com").exists()
