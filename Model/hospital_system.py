import settings
from Model.assignment_errors import AssignmentError, BackendError
from Model.Backend.api_adapter import (
    request_from_api, request_to_api, staff_from_api, equipment_from_api, unwrap_list,
)
from Model.Backend.api_client import TransportApiClient
from Model.Data_processor.transport_analytics import TransportAnalytics
from Model.hospital_model import Hospital, FloorConfig
from Model.log_setup import setup_logger
from Model.mock_data import seed_equipment, seed_staff, seed_requests, seed_access_points
from Model.model_transport_manager import TransportManager
from Model.placement_advisor import generate_placement_suggestions
from Model.simulation import Simulation


class HospitalSystem:
    def __init__(self, socketio, hospital=None, api_client=None, mode=None):
        self.hospital = hospital or Hospital()
        self.socketio = socketio
        self.transport_manager = TransportManager(self.hospital, self.socketio)
        self.simulation = Simulation(self, socketio, interval=settings.MOTION_INTERVAL)
        self.mode = mode or settings.TRANSPORT_DATA_MODE
        self.api_client = api_client
        if self.api_mode and self.api_client is None:
            self.api_client = TransportApiClient()
        self.logger = setup_logger("HospitalSystem")

    @property
    def api_mode(self):
        return self.mode == "api"

    def initialize(self):
        if self.api_mode:
            self.logger.info(f"API mode: mirroring {self.api_client.base_url}")
            self.sync_from_backend()
        else:
            self._add_initial_data()

    # -----------------------------
    # 🔹 Setup
    # -----------------------------

    def _add_initial_data(self):
        self.transport_manager.load(
            requests=seed_requests(),
            staff=seed_staff(),
            equipment=seed_equipment(),
            access_points=seed_access_points(),
        )
        self.logger.info("Loaded mock staff, equipment, requests and access points")

    def sync_from_backend(self):
        """Replaces the local snapshot with the backend's requests, staff and equipment."""
        requests = self._adapt(unwrap_list(self.api_client.get_all_requests(), "requests"), request_from_api)
        staff = self._adapt(unwrap_list(self.api_client.get_all_staff(), "staff"), staff_from_api)
        equipment = self._adapt(unwrap_list(self.api_client.get_all_equipment(), "equipment"), equipment_from_api)

        access_points = list(self.transport_manager.state.access_points.values())
        self.transport_manager.load(requests, staff, equipment, access_points)
        self.logger.info(f"Synced {len(requests)} requests, {len(staff)} staff, {len(equipment)} equipment")
        return self.transport_manager.state

    def refresh_from_backend(self):
        return self._run(lambda: self.sync_from_backend().version)

    def _adapt(self, records, adapter):
        adapted = []
        for record in records:
            try:
                adapted.append(adapter(record))
            except ValueError as exc:
                self.logger.warning(f"Skipping backend record {record.get('_id') or record.get('id')}: {exc}")
        return adapted

    # -----------------------------
    # 🔹 Core Interface
    # -----------------------------

    def get_state(self):
        return self.transport_manager.state.to_dict()

    def get_transport_requests(self):
        return self.transport_manager.get_transport_requests()

    def get_request_queue(self, status=None):
        return self._analytics().request_queue(status)

    def create_transport_request(self, data):
        if self.api_mode:
            return self._run(self._remote_create_request, data)
        return self._run(lambda: self.transport_manager.create_request(data).to_dict())

    def _remote_create_request(self, data):
        created = self.api_client.create_request(request_to_api(data))
        self.sync_from_backend()
        self.transport_manager.notifier.success("New transport request created")
        return created

    def assign_request(self, request_id, staff_id, equipment_id):
        if self.api_mode:
            return self._run(self._remote_assign, request_id, staff_id, equipment_id)
        return self._run(lambda: self.transport_manager.assign(request_id, staff_id, equipment_id).to_dict())

    def _remote_assign(self, request_id, staff_id, equipment_id):
        self.api_client.assign_request(request_id, staff_id, equipment_id)
        self.sync_from_backend()
        self.transport_manager.notifier.success(f"Request {request_id} assigned")
        return self._request_dict(request_id)

    def cancel_request(self, request_id):
        if self.api_mode:
            return self._run(self._remote_status_change, request_id, None)
        return self._run(lambda: self.transport_manager.cancel_request(request_id).to_dict())

    def start_transport(self, request_id):
        if self.api_mode:
            return self._run(self._remote_status_change, request_id, "in-progress")
        return self._run(lambda: self.transport_manager.start_transport(request_id).to_dict())

    def complete_request(self, request_id):
        if self.api_mode:
            return self._run(self._remote_status_change, request_id, "completed")
        return self._run(lambda: self.transport_manager.complete_request(request_id).to_dict())

    def _remote_status_change(self, request_id, status):
        if status is None:
            self.api_client.cancel_request(request_id)
        else:
            self.api_client.update_request_status(request_id, status)
        self.sync_from_backend()
        self.transport_manager.notifier.info(f"Request {request_id} is now {status or 'cancelled'}")
        return self._request_dict(request_id)

    def _request_dict(self, request_id):
        request = self.transport_manager.get_request(request_id)
        return request.to_dict() if request else {"id": request_id}

    def release_assignment(self, request_id):
        if self.api_mode:
            return self._mock_only("Releasing an assignment")
        return self._run(lambda: self.transport_manager.release_assignment(request_id).to_dict())

    # -----------------------------
    # 🔹 Staff and equipment
    # -----------------------------

    def get_staff(self, status=None):
        return self.transport_manager.get_staff(status)

    def get_staff_workload(self):
        return self._analytics().staff_workload()

    def add_staff(self, data):
        if self.api_mode:
            return self._mock_only("Adding staff")
        return self._run(lambda: self.transport_manager.add_staff(data).to_dict())

    def update_staff(self, staff_id, updates):
        if self.api_mode:
            return self._mock_only("Editing staff")
        return self._run(lambda: self.transport_manager.update_staff(staff_id, updates).to_dict())

    def delete_staff(self, staff_id):
        if self.api_mode:
            return self._mock_only("Deleting staff")
        return self._run(lambda: self.transport_manager.delete_staff(staff_id).to_dict())

    def get_equipment(self, status=None, equipment_type=None):
        return self.transport_manager.get_equipment(status, equipment_type)

    def add_equipment(self, data):
        if self.api_mode:
            return self._run(self._remote_add_equipment, data)
        return self._run(lambda: self.transport_manager.add_equipment(data).to_dict())

    def _remote_add_equipment(self, data):
        equipment = self.transport_manager.check_new_equipment(data)
        created = self.api_client.create_equipment(equipment.type, equipment.location.zone, equipment.status)
        self.sync_from_backend()
        self.transport_manager.notifier.success("New equipment added")
        return created

    def update_equipment(self, equipment_id, updates):
        if self.api_mode:
            if not isinstance(updates, dict) or set(updates) != {"status"}:
                return self._mock_only("Editing equipment fields other than status")
            return self._run(self._remote_equipment_status, equipment_id, updates["status"])
        return self._run(lambda: self.transport_manager.update_equipment(equipment_id, updates).to_dict())

    def _remote_equipment_status(self, equipment_id, status):
        self.transport_manager.check_equipment_update(equipment_id, {"status": status})
        self.api_client.update_equipment_status(equipment_id, status)
        self.sync_from_backend()
        self.transport_manager.notifier.success("Equipment updated")
        equipment = self.transport_manager.get_equipment_unit(equipment_id)
        return equipment.to_dict() if equipment else {"id": equipment_id, "status": status}

    def delete_equipment(self, equipment_id):
        if self.api_mode:
            return self._mock_only("Deleting equipment")
        return self._run(lambda: self.transport_manager.delete_equipment(equipment_id).to_dict())

    def assign_equipment_location(self, equipment_id, floor, zone):
        if self.api_mode:
            return self._mock_only("Relocating equipment")
        return self._run(
            lambda: self.transport_manager.assign_equipment_location(equipment_id, floor, zone).to_dict())

    # -----------------------------
    # 🔹 Layout and access points
    # -----------------------------

    def get_floor_config(self):
        return self.hospital.to_dict()

    def update_floor_config(self, floors):
        return self._run(
            lambda: self.transport_manager.update_floor_config([FloorConfig.from_dict(f) for f in floors]))

    def get_zone_center(self, floor, zone):
        return self.hospital.zone_center(floor, zone)

    def get_access_points(self, floor=None):
        return self.transport_manager.get_access_points(floor)

    def add_access_point(self, data):
        return self._run(lambda: self.transport_manager.add_access_point(data).to_dict())

    # -----------------------------
    # 🔹 Suggestions and analytics
    # -----------------------------

    def get_placement_suggestions(self):
        state = self.transport_manager.state
        suggestions = generate_placement_suggestions(state.equipment.values(), state.requests.values())
        return [s.to_dict() for s in sorted(suggestions, key=lambda s: s.priority, reverse=True)]

    def apply_suggestion(self, equipment_id, zone, floor=None):
        """Applying a suggestion is an ordinary manual relocation."""
        if floor is None:
            floor = next((s["suggested_location"]["floor"] for s in self.get_placement_suggestions()
                          if s["equipment_id"] == equipment_id and s["suggested_zone"] == zone), None)
        if floor is None:
            return self._error(f"No suggestion for {equipment_id} to {zone}")
        return self.assign_equipment_location(equipment_id, floor, zone)

    def get_analytics(self):
        return self._analytics().summary()

    def get_zone_statistics(self, floor):
        return self._analytics().zone_statistics(floor)

    def _analytics(self):
        return TransportAnalytics(self.transport_manager.state, self.hospital)

    # -----------------------------
    # 🔹 Simulation and auth
    # -----------------------------

    def toggle_simulation(self, running: bool):
        if running:
            self.simulation.start()
            return {"status": "Simulation started"}, 200
        else:
            self.simulation.stop()
            return {"status": "Simulation stopped"}, 200

    def login(self, email, password):
        if not self.api_client:
            return self._error("Login requires API mode")
        return self._run(self.api_client.login, email, password)

    # -----------------------------
    # 🔹 Helpers
    # -----------------------------

    def _run(self, operation, *args):
        try:
            return self._success(operation(*args))
        except AssignmentError as exc:
            return self._error(exc.message, exc.http_status, exc.kind)
        except BackendError as exc:
            self.transport_manager.notifier.error(exc.message)
            return self._error(exc.message, 502, "BackendError")
        except ValueError as exc:
            return self._error(str(exc))

    def _success(self, data):
        return {"success": True, "data": data}, 200

    def _error(self, message, status=400, kind=None):
        payload = {"success": False, "error": message}
        if kind:
            payload["kind"] = kind
        return payload, status

    def _mock_only(self, action):
        """Writes the backend has no endpoint for."""
        return self._error(f"{action} requires mock mode")
