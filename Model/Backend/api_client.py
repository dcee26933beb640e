import requests

import settings
from Model.assignment_errors import BackendError
from Model.log_setup import setup_logger


class TransportApiClient:
    """
    Thin wrapper over the hospital transport REST API.

    Responses are returned as decoded JSON without interpretation. Any
    transport failure (timeout, connection error, non-2xx status) raises
    ``BackendError``; nothing is retried.
    """

    def __init__(self, base_url=None, token=None, timeout=None, session=None):
        self.base_url = (base_url or settings.TRANSPORT_API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.TRANSPORT_API_TIMEOUT
        self.session = session or requests.Session()
        self.logger = setup_logger("TransportApiClient")
        self.set_token(token if token is not None else settings.TRANSPORT_API_TOKEN)

    def set_token(self, token):
        self.token = token
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        else:
            self.session.headers.pop("Authorization", None)

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            self.logger.error(f"{method} {path} failed with status {status}")
            raise BackendError(self._error_message(exc.response, "Request to transport backend failed"),
                               status_code=status) from exc
        except requests.RequestException as exc:
            self.logger.error(f"{method} {path} failed: {exc}")
            raise BackendError("Transport backend unreachable") from exc

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_message(response, fallback):
        if response is None:
            return fallback
        try:
            return response.json().get("message") or fallback
        except ValueError:
            return fallback

    # -----------------------------
    # 🔹 Auth
    # -----------------------------

    def login(self, email, password):
        data = self._request("POST", "/api/v1/users/login", json={"email": email, "password": password})
        if data and data.get("token"):
            self.set_token(data["token"])
        return data

    def register(self, email, password, name=None):
        payload = {"email": email, "password": password}
        if name:
            payload["name"] = name
        return self._request("POST", "/api/v1/users/register", json=payload)

    # -----------------------------
    # 🔹 Requests
    # -----------------------------

    def get_all_requests(self, **filters):
        """Lists requests, optionally filtered by status, priority or equipment_type."""
        return self._request("GET", "/requests", params=filters or None)

    def get_active_requests(self):
        return self._request("GET", "/requests/active")

    def get_my_requests(self):
        return self._request("GET", "/requests/my-requests")

    def get_assigned_requests(self):
        return self._request("GET", "/requests/assigned")

    def get_request_by_id(self, request_id):
        return self._request("GET", f"/requests/{request_id}")

    def create_request(self, payload):
        return self._request("POST", "/requests", json=payload)

    def update_request_status(self, request_id, status):
        return self._request("PUT", f"/requests/{request_id}/status", json={"status": status})

    def assign_request(self, request_id, porter_id, equipment_id):
        return self._request("PUT", f"/requests/{request_id}/assign",
                             json={"porter_id": porter_id, "equipment_id": equipment_id})

    def cancel_request(self, request_id):
        return self._request("DELETE", f"/requests/{request_id}")

    # -----------------------------
    # 🔹 Staff
    # -----------------------------

    def get_all_staff(self, role=None, status=None):
        params = {k: v for k, v in (("role", role), ("status", status)) if v}
        return self._request("GET", "/workload/staff", params=params or None)

    def get_available_porters(self):
        return self.get_all_staff(role="porter", status="available")

    def get_staff_by_id(self, staff_id):
        return self._request("GET", f"/workload/staff/{staff_id}")

    # -----------------------------
    # 🔹 Equipment
    # -----------------------------

    def get_all_equipment(self):
        return self._request("GET", "/equipment")

    def get_available_equipment(self):
        return self._request("GET", "/equipment", params={"status": "available"})

    def get_nearby_equipment(self):
        return self._request("GET", "/equipment/nearby")

    def search_equipment(self, query):
        return self._request("GET", "/equipment/search", params={"q": query})

    def get_equipment_by_id(self, equipment_id):
        return self._request("GET", f"/equipment/{equipment_id}")

    def create_equipment(self, equipment_type, current_location, status="available"):
        return self._request("POST", "/equipment", json={
            "type": equipment_type,
            "current_location": current_location,
            "status": status,
        })

    def update_equipment_status(self, equipment_id, status):
        return self._request("PUT", f"/equipment/{equipment_id}/status", json={"status": status})
