from flask import request, jsonify
from flask_socketio import SocketIO


class HospitalTransportViewer:
    def __init__(self, app, socketio: SocketIO, hospital_system):
        self.app = app
        self.socketio = socketio
        self.system = hospital_system  # 🧠 injected by HospitalController
        self._register_routes()

    def _register_routes(self):
        self.app.add_url_rule("/", "index", self.index)
        self.app.add_url_rule("/get_state", "get_state", self.get_state)

        # Requests
        self.app.add_url_rule("/get_transport_requests", "get_transport_requests", self.get_transport_requests)
        self.app.add_url_rule("/get_request_queue", "get_request_queue", self.get_request_queue)
        self.app.add_url_rule("/frontend_transport_request", "frontend_transport_request",
                              self.frontend_transport_request, methods=["POST"])
        self.app.add_url_rule("/assign_request", "assign_request", self.assign_request, methods=["POST"])
        self.app.add_url_rule("/cancel_request", "cancel_request", self.cancel_request, methods=["POST"])
        self.app.add_url_rule("/start_transport", "start_transport", self.start_transport, methods=["POST"])
        self.app.add_url_rule("/complete_request", "complete_request", self.complete_request, methods=["POST"])
        self.app.add_url_rule("/release_assignment", "release_assignment", self.release_assignment,
                              methods=["POST"])

        # Staff
        self.app.add_url_rule("/get_staff", "get_staff", self.get_staff)
        self.app.add_url_rule("/get_staff_workload", "get_staff_workload", self.get_staff_workload)
        self.app.add_url_rule("/add_staff", "add_staff", self.add_staff, methods=["POST"])
        self.app.add_url_rule("/update_staff", "update_staff", self.update_staff, methods=["POST"])
        self.app.add_url_rule("/delete_staff", "delete_staff", self.delete_staff, methods=["POST"])

        # Equipment
        self.app.add_url_rule("/get_equipment", "get_equipment", self.get_equipment)
        self.app.add_url_rule("/add_equipment", "add_equipment", self.add_equipment, methods=["POST"])
        self.app.add_url_rule("/update_equipment", "update_equipment", self.update_equipment, methods=["POST"])
        self.app.add_url_rule("/delete_equipment", "delete_equipment", self.delete_equipment, methods=["POST"])
        self.app.add_url_rule("/assign_equipment_location", "assign_equipment_location",
                              self.assign_equipment_location, methods=["POST"])

        # Layout and access points
        self.app.add_url_rule("/get_floor_config", "get_floor_config", self.get_floor_config)
        self.app.add_url_rule("/update_floor_config", "update_floor_config", self.update_floor_config,
                              methods=["POST"])
        self.app.add_url_rule("/get_zone_center", "get_zone_center", self.get_zone_center)
        self.app.add_url_rule("/get_access_points", "get_access_points", self.get_access_points)
        self.app.add_url_rule("/add_access_point", "add_access_point", self.add_access_point, methods=["POST"])

        # 🆕 Suggestions and analytics
        self.app.add_url_rule("/get_placement_suggestions", "get_placement_suggestions",
                              self.get_placement_suggestions)
        self.app.add_url_rule("/apply_suggestion", "apply_suggestion", self.apply_suggestion, methods=["POST"])
        self.app.add_url_rule("/get_analytics", "get_analytics", self.get_analytics)
        self.app.add_url_rule("/get_zone_statistics", "get_zone_statistics", self.get_zone_statistics)

        self.app.add_url_rule("/toggle_simulation", "toggle_simulation", self.toggle_simulation, methods=["POST"])
        self.app.add_url_rule("/sync_backend", "sync_backend", self.sync_backend, methods=["POST"])
        self.app.add_url_rule("/login", "login", self.login, methods=["POST"])

    # 👇 Views / Endpoints

    @staticmethod
    def _payload():
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _respond(result):
        body, status = result
        return jsonify(body), status

    @staticmethod
    def _missing(*fields):
        return jsonify({"success": False, "error": f"Missing {', '.join(fields)}"}), 400

    @staticmethod
    def _unset(data, *fields):
        """Required fields that are absent or not a plain id string."""
        return [name for name in fields if not data.get(name) or not isinstance(data[name], str)]

    def _with_id(self, field, operation):
        entity_id = self._payload().get(field)
        if not entity_id or not isinstance(entity_id, str):
            return self._missing(field)
        return self._respond(operation(entity_id))

    @staticmethod
    def _invalid(message):
        return jsonify({"success": False, "error": message}), 400

    @staticmethod
    def _floor_number(value):
        """Floor as int, or None when it is not a whole number."""
        if isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    def index(self):
        return jsonify({"service": "patient-transport", "mode": self.system.mode,
                        "version": self.system.transport_manager.state.version})

    def get_state(self):
        return jsonify(self.system.get_state())

    def get_transport_requests(self):
        return jsonify(self.system.get_transport_requests())

    def get_request_queue(self):
        return jsonify(self.system.get_request_queue(request.args.get("status")))

    def frontend_transport_request(self):
        data = self._payload()
        if not data.get("origin") or not data.get("destination"):
            return self._missing("origin", "destination")
        return self._respond(self.system.create_transport_request(data))

    def assign_request(self):
        data = self._payload()
        missing = self._unset(data, "request_id", "staff_id", "equipment_id")
        if missing:
            return self._missing(*missing)
        return self._respond(self.system.assign_request(data["request_id"], data["staff_id"], data["equipment_id"]))

    def cancel_request(self):
        return self._with_id("request_id", self.system.cancel_request)

    def start_transport(self):
        return self._with_id("request_id", self.system.start_transport)

    def complete_request(self):
        return self._with_id("request_id", self.system.complete_request)

    def release_assignment(self):
        return self._with_id("request_id", self.system.release_assignment)

    def get_staff(self):
        return jsonify(self.system.get_staff(request.args.get("status")))

    def get_staff_workload(self):
        return jsonify(self.system.get_staff_workload())

    def add_staff(self):
        return self._respond(self.system.add_staff(self._payload()))

    def update_staff(self):
        data = self._payload()
        if self._unset(data, "staff_id"):
            return self._missing("staff_id")
        return self._respond(self.system.update_staff(data["staff_id"], data.get("updates") or {}))

    def delete_staff(self):
        return self._with_id("staff_id", self.system.delete_staff)

    def get_equipment(self):
        return jsonify(self.system.get_equipment(request.args.get("status"), request.args.get("type")))

    def add_equipment(self):
        return self._respond(self.system.add_equipment(self._payload()))

    def update_equipment(self):
        data = self._payload()
        if self._unset(data, "equipment_id"):
            return self._missing("equipment_id")
        return self._respond(self.system.update_equipment(data["equipment_id"], data.get("updates") or {}))

    def delete_equipment(self):
        return self._with_id("equipment_id", self.system.delete_equipment)

    def assign_equipment_location(self):
        data = self._payload()
        missing = self._unset(data, "equipment_id", "zone")
        if missing or data.get("floor") is None:
            return self._missing("equipment_id", "floor", "zone")
        floor = self._floor_number(data["floor"])
        if floor is None:
            return self._invalid(f"Floor must be a number, got {data['floor']!r}")
        return self._respond(self.system.assign_equipment_location(data["equipment_id"], floor, data["zone"]))

    def get_floor_config(self):
        return jsonify(self.system.get_floor_config())

    def update_floor_config(self):
        floors = self._payload().get("floors")
        if not floors:
            return self._missing("floors")
        if not isinstance(floors, list):
            return self._invalid("floors must be a list")
        return self._respond(self.system.update_floor_config(floors))

    def get_zone_center(self):
        floor = request.args.get("floor", type=int)
        zone = request.args.get("zone")
        if floor is None or not zone:
            return self._missing("floor", "zone")
        return jsonify({"floor": floor, "zone": zone, "center": self.system.get_zone_center(floor, zone)})

    def get_access_points(self):
        return jsonify(self.system.get_access_points(request.args.get("floor", type=int)))

    def add_access_point(self):
        return self._respond(self.system.add_access_point(self._payload()))

    def get_placement_suggestions(self):
        return jsonify(self.system.get_placement_suggestions())

    def apply_suggestion(self):
        data = self._payload()
        missing = self._unset(data, "equipment_id", "zone")
        if missing:
            return self._missing(*missing)
        floor = data.get("floor")
        if floor is not None:
            floor = self._floor_number(floor)
            if floor is None:
                return self._invalid(f"Floor must be a number, got {data['floor']!r}")
        return self._respond(self.system.apply_suggestion(data["equipment_id"], data["zone"], floor))

    def get_analytics(self):
        return jsonify(self.system.get_analytics())

    def get_zone_statistics(self):
        return jsonify(self.system.get_zone_statistics(request.args.get("floor", default=1, type=int)))

    def toggle_simulation(self):
        running = self._payload().get("running", False)
        return self._respond(self.system.toggle_simulation(running))

    def sync_backend(self):
        if not self.system.api_mode:
            return jsonify({"success": False, "error": "Backend sync requires API mode"}), 400
        return self._respond(self.system.refresh_from_backend())

    def login(self):
        data = self._payload()
        if not data.get("email") or not data.get("password"):
            return self._missing("email", "password")
        return self._respond(self.system.login(data["email"], data["password"]))
