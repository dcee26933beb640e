import json
from unittest.mock import Mock

import pytest
import requests

from Model.assignment_errors import BackendError
from Model.Backend.api_client import TransportApiClient

BASE_URL = "http://backend.test/api"


def make_response(status_code, payload=None):
    response = requests.Response()
    response.status_code = status_code
    response.url = BASE_URL
    response._content = json.dumps(payload).encode() if payload is not None else b""
    return response


@pytest.fixture
def session():
    fake = Mock()
    fake.headers = {}
    return fake


@pytest.fixture
def api(session):
    return TransportApiClient(base_url=BASE_URL + "/", token="", timeout=5, session=session)


def test_get_all_requests_passes_filters(api, session):
    session.request.return_value = make_response(200, {"requests": []})

    assert api.get_all_requests(status="pending") == {"requests": []}
    session.request.assert_called_once_with(
        "GET", f"{BASE_URL}/requests", timeout=5, params={"status": "pending"})


def test_assign_request_sends_porter_and_equipment(api, session):
    session.request.return_value = make_response(200, {"success": True})

    api.assign_request("R1", "porter-7", "eq-3")

    session.request.assert_called_once_with(
        "PUT", f"{BASE_URL}/requests/R1/assign", timeout=5,
        json={"porter_id": "porter-7", "equipment_id": "eq-3"})


def test_cancel_request_uses_delete(api, session):
    session.request.return_value = make_response(204)

    assert api.cancel_request("R1") is None
    assert session.request.call_args[0] == ("DELETE", f"{BASE_URL}/requests/R1")


def test_available_porters_filters_staff(api, session):
    session.request.return_value = make_response(200, [])

    api.get_available_porters()

    session.request.assert_called_once_with(
        "GET", f"{BASE_URL}/workload/staff", timeout=5, params={"role": "porter", "status": "available"})


def test_login_stores_bearer_token(api, session):
    session.request.return_value = make_response(200, {"token": "abc123"})

    api.login("porter@hospital.test", "secret")

    assert api.token == "abc123"
    assert session.headers["Authorization"] == "Bearer abc123"


def test_http_error_raises_backend_error_with_message(api, session):
    session.request.return_value = make_response(404, {"message": "Request not found"})

    with pytest.raises(BackendError) as excinfo:
        api.get_request_by_id("missing")

    assert excinfo.value.message == "Request not found"
    assert excinfo.value.status_code == 404


def test_http_error_without_body_uses_fallback_message(api, session):
    session.request.return_value = make_response(500)

    with pytest.raises(BackendError) as excinfo:
        api.get_all_equipment()

    assert excinfo.value.message == "Request to transport backend failed"
    assert excinfo.value.status_code == 500


def test_timeout_raises_backend_error(api, session):
    session.request.side_effect = requests.Timeout("read timed out")

    with pytest.raises(BackendError) as excinfo:
        api.get_all_staff()

    assert excinfo.value.message == "Transport backend unreachable"
    assert excinfo.value.status_code is None


@pytest.mark.parametrize("method, args, path, extra", [
    ("get_active_requests", (), "/requests/active", {}),
    ("get_my_requests", (), "/requests/my-requests", {}),
    ("get_assigned_requests", (), "/requests/assigned", {}),
    ("get_request_by_id", ("R1",), "/requests/R1", {}),
    ("get_staff_by_id", ("porter-7",), "/workload/staff/porter-7", {}),
    ("get_available_equipment", (), "/equipment", {"params": {"status": "available"}}),
    ("get_nearby_equipment", (), "/equipment/nearby", {}),
    ("search_equipment", ("wheel",), "/equipment/search", {"params": {"q": "wheel"}}),
    ("get_equipment_by_id", ("eq-3",), "/equipment/eq-3", {}),
])
def test_read_endpoints(api, session, method, args, path, extra):
    session.request.return_value = make_response(200, {"ok": True})

    assert getattr(api, method)(*args) == {"ok": True}
    session.request.assert_called_once_with("GET", f"{BASE_URL}{path}", timeout=5, **extra)


def test_create_equipment_posts_type_location_and_status(api, session):
    session.request.return_value = make_response(201, {"_id": "eq-9"})

    assert api.create_equipment("wheelchair", "ICU") == {"_id": "eq-9"}
    session.request.assert_called_once_with(
        "POST", f"{BASE_URL}/equipment", timeout=5,
        json={"type": "wheelchair", "current_location": "ICU", "status": "available"})


def test_update_equipment_status_uses_put(api, session):
    session.request.return_value = make_response(200, {"success": True})

    api.update_equipment_status("eq-3", "maintenance")

    session.request.assert_called_once_with(
        "PUT", f"{BASE_URL}/equipment/eq-3/status", timeout=5, json={"status": "maintenance"})


def test_register_sends_optional_name(api, session):
    session.request.return_value = make_response(201, {"id": "u1"})

    api.register("nurse@hospital.test", "secret", name="Kim")

    session.request.assert_called_once_with(
        "POST", f"{BASE_URL}/api/v1/users/register", timeout=5,
        json={"email": "nurse@hospital.test", "password": "secret", "name": "Kim"})
