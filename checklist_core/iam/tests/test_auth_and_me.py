# backend/checklist_core/iam/tests/test_auth_and_me.py
import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from checklist_core.iam.services.users import UserService

pytestmark = pytest.mark.django_db


def test_me_requires_auth():
    """
    Fresh APIClient: the *_client fixtures are already authenticated.
    """
    res = APIClient().get("/api/v1/me/")
    assert res.status_code in (401, 403)
    assert "error" in res.json()


def test_login_by_email_sets_cookies(hospital, settings):
    UserService.create(email="Login@Example.com", password="pass12345")

    c = APIClient()
    res = c.post("/api/v1/auth/login/", {"email": "LOGIN@example.com", "password": "pass12345"}, format="json")
    assert res.status_code == 200, res.data

    access_cookie = settings.SIMPLE_JWT["AUTH_COOKIE"]
    refresh_cookie = settings.SIMPLE_JWT["AUTH_COOKIE_REFRESH"]
    assert access_cookie in res.cookies
    assert refresh_cookie in res.cookies
    assert res.cookies[access_cookie]["httponly"]


def test_login_with_wrong_password_is_rejected(staff_user):
    res = APIClient().post("/api/v1/auth/login/", {"username": "staff", "password": "nope"}, format="json")
    assert res.status_code == 401
    assert res.data["error"]["code"] == "authentication_failed"


def test_bearer_token_authenticates_and_attaches_scope(staff_user, hospital, other_hospital):
    """
    No force_authenticate: the JWT authentication class must run so request.caller
    is built from the real profile.
    """
    client = APIClient()
    access = str(RefreshToken.for_user(staff_user).access_token)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

    res = client.get("/api/v1/areas/", {"hospital_id": str(other_hospital.id)})
    assert res.status_code == 403

    res = client.get("/api/v1/areas/")
    assert res.status_code == 200


def test_refresh_without_cookie_is_rejected():
    res = APIClient().post("/api/v1/auth/refresh/")
    assert res.status_code == 400
    assert res.data["error"]["code"] == "validation_error"


def test_logout_clears_cookies(staff_client, settings):
    res = staff_client.post("/api/v1/auth/logout/")
    assert res.status_code == 200
    assert res.cookies[settings.SIMPLE_JWT["AUTH_COOKIE"]].value == ""


def test_me_returns_role_and_hospital(staff_client, staff_user, hospital):
    res = staff_client.get("/api/v1/me/")
    assert res.status_code == 200
    assert res.data["id"] == staff_user.id
    assert res.data["role"] == "STAFF"
    assert res.data["hospital_id"] == str(hospital.id)
    assert res.data["hospital_name"] == "Main Hospital"


def test_me_patch_updates_names_only(staff_client, staff_user):
    res = staff_client.patch("/api/v1/me/", {"first_name": "Jane", "role": "ADMIN"}, format="json")
    assert res.status_code == 200
    assert res.data["first_name"] == "Jane"
    assert res.data["role"] == "STAFF"


def test_change_password(staff_client, staff_user):
    res = staff_client.post(
        "/api/v1/me/change-password/",
        {"current_password": "wrong-one", "new_password": "brand-new-pass"},
        format="json",
    )
    assert res.status_code == 400
    assert "current_password" in res.data["error"]["details"]

    res = staff_client.post(
        "/api/v1/me/change-password/",
        {"current_password": "pass12345", "new_password": "brand-new-pass"},
        format="json",
    )
    assert res.status_code == 200
    staff_user.refresh_from_db()
    assert staff_user.check_password("brand-new-pass")
