import pytest
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.test import APIClient

from checklist_core.common.api.exceptions import ConflictError, InvariantViolation, NoDataError, error_payload

pytestmark = pytest.mark.django_db


def test_unauthenticated_request_uses_error_envelope():
    res = APIClient().get("/api/v1/areas/")
    assert res.status_code in (401, 403)

    body = res.json()
    assert "error" in body
    assert body["error"]["code"] in ("not_authenticated", "permission_denied")
    assert body["error"]["request_id"]
    assert res["X-Request-Id"] == body["error"]["request_id"]


def test_validation_error_envelope_carries_field_details(admin_client):
    res = admin_client.get("/api/v1/checklist/", {"date": "not-a-date"})
    assert res.status_code == 400

    err = res.data["error"]
    assert err["code"] == "validation_error"
    assert err["message"] == "Request failed."
    assert "date" in err["details"]


def test_not_found_envelope(admin_client):
    res = admin_client.get("/api/v1/hospitals/00000000-0000-0000-0000-000000000000/")
    assert res.status_code == 404
    assert res.data["error"]["code"] == "not_found"
    assert res.data["error"]["message"] == "Hospital not found"


def test_incoming_request_id_is_echoed(admin_client):
    res = admin_client.get("/api/v1/areas/", HTTP_X_REQUEST_ID="req-123")
    assert res.status_code == 200
    assert res["X-Request-Id"] == "req-123"


@pytest.mark.parametrize(
    "exc, code, status_code",
    [
        (ConflictError("dup"), "conflict", 409),
        (InvariantViolation("nope"), "invariant_violation", 400),
        (NoDataError(), "no_data", 404),
        (NotFound("Task not found"), "not_found", 404),
    ],
)
def test_domain_errors_map_to_codes(exc, code, status_code):
    assert exc.status_code == status_code
    payload = error_payload(exc)
    assert payload["code"] == code
    assert payload["message"]


def test_error_payload_for_field_errors():
    payload = error_payload(ValidationError({"task_id": "Invalid UUID"}))
    assert payload["code"] == "validation_error"
    assert payload["message"] == "Request failed."
    assert "task_id" in payload["details"]
