import functools
import itertools
from dataclasses import replace

from eventlet.semaphore import Semaphore

import settings
from Model.application_state import ApplicationState
from Model.assignment_errors import (
    AssignmentError, NotFound, StaffUnavailable, EquipmentUnavailable,
    TypeMismatch, InvalidTransition, ResourceInUse,
)
from Model.log_setup import setup_logger
from Model.model_access_point import AccessPoint
from Model.model_location import Location
from Model.model_staff_member import StaffMember
from Model.model_transport_equipment import TransportEquipment, MOVING_STATUSES
from Model.model_transportation_request import (
    TransportationRequest, CANCELLABLE_STATUSES, ACTIVE_STATUSES,
)
from Model.notifier import Notifier

# Clamp box for simulated motion, in floor plan pixels
MOTION_MIN_X, MOTION_MAX_X = 50, 850
MOTION_MIN_Y, MOTION_MAX_Y = 50, 550
EQUIPMENT_JITTER = 20
STAFF_JITTER = 15

# Fields only assign, complete and release may write
STAFF_ASSIGNMENT_FIELDS = ("current_workload", "assigned_equipment")
EQUIPMENT_ASSIGNMENT_FIELDS = ("assigned_staff", "current_request")

# Statuses an operator may set by hand on a resource without an assignment
STAFF_MANUAL_STATUSES = ("available", "off-duty")
EQUIPMENT_MANUAL_STATUSES = ("available", "maintenance", "requested")


def notify_errors(method):
    """Pushes an error notification for every rejected operation before re-raising it."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except AssignmentError as exc:
            self.notifier.error(exc.message)
            raise
        except ValueError as exc:
            self.notifier.error(str(exc))
            raise
    return wrapper


class TransportManager:
    def __init__(self, hospital, socketio, release_on_cancel=None):
        """
        Owns the requests, staff, equipment and access point collections.

        Every write goes through one of the methods below: each validates
        against the current snapshot and commits a complete new snapshot
        while holding ``transport_lock``.
        """
        self.hospital = hospital
        self.socketio = socketio
        self.notifier = Notifier(socketio)
        self.logger = setup_logger("TransportManager")
        self.transport_lock = Semaphore()  # Serializes assignments and motion ticks
        self.release_on_cancel = settings.RELEASE_ON_CANCEL if release_on_cancel is None else release_on_cancel
        self._state = ApplicationState()
        self._ids = itertools.count(1)

    # -----------------------------
    # 🔹 Snapshot access
    # -----------------------------

    @property
    def state(self):
        return self._state

    def load(self, requests=(), staff=(), equipment=(), access_points=()):
        """Replaces every collection at once (seeding or a refresh from the backend)."""
        with self.transport_lock:
            fresh = ApplicationState.build(requests, staff, equipment, access_points)
            self._commit(replace(fresh, version=self._state.version + 1))

    def get_request(self, request_id):
        return self._state.requests.get(request_id)

    def get_staff_member(self, staff_id):
        return self._state.staff.get(staff_id)

    def get_equipment_unit(self, equipment_id):
        return self._state.equipment.get(equipment_id)

    def get_transport_requests(self):
        """Returns all transport requests grouped by status."""
        grouped = {status: [] for status in ("pending", "assigned", "in-progress", "completed", "cancelled")}
        for request in self._state.requests.values():
            grouped[request.status].append(request.to_dict())
        return grouped

    def get_staff(self, status=None):
        return [s.to_dict() for s in self._state.staff.values() if status is None or s.status == status]

    def get_equipment(self, status=None, equipment_type=None):
        return [
            e.to_dict() for e in self._state.equipment.values()
            if (status is None or e.status == status) and (equipment_type is None or e.type == equipment_type)
        ]

    def get_access_points(self, floor=None):
        return [a.to_dict() for a in self._state.access_points.values()
                if floor is None or a.location.floor == floor]

    # -----------------------------
    # 🔹 Request lifecycle
    # -----------------------------

    @notify_errors
    def assign(self, request_id, staff_id, equipment_id):
        """
        Links a pending request to one available staff member and one available
        equipment unit of the requested type.

        Preconditions are checked in order (existence, staff availability,
        equipment availability, type match, request still pending) and the
        first violation raises without touching any collection. On success
        the request, staff member and equipment unit are committed together.
        """
        with self.transport_lock:
            state = self._state
            request, staff, equipment = self._validate_assignment(state, request_id, staff_id, equipment_id)

            assigned = request.mark_as_assigned(staff_id, equipment_id)
            busy_staff = staff.take_assignment(equipment_id, self._origin_location(request, staff.location))
            used_equipment = equipment.mark_in_use(
                staff_id, request_id, self._origin_location(request, equipment.location))

            self._commit(state.evolve(requests=[assigned], staff=[busy_staff], equipment=[used_equipment]))

        self.notifier.success(f"Request {request_id} assigned to {staff.name}")
        return assigned

    def _validate_assignment(self, state, request_id, staff_id, equipment_id):
        request = state.requests.get(request_id)
        staff = state.staff.get(staff_id)
        equipment = state.equipment.get(equipment_id)

        if not request or not staff or not equipment:
            missing = [label for label, entity in
                       (("request", request), ("staff", staff), ("equipment", equipment)) if not entity]
            raise NotFound(f"Invalid assignment: {', '.join(missing)} not found")

        if not staff.is_available:
            raise StaffUnavailable(f"Selected staff {staff.name} is not available ({staff.status})")

        if not equipment.is_available:
            raise EquipmentUnavailable(f"Selected equipment {equipment.name} is not available ({equipment.status})")

        if equipment.type != request.equipment_type:
            raise TypeMismatch(
                f"Selected equipment type {equipment.type} does not match request ({request.equipment_type})")

        if request.status != "pending":
            raise InvalidTransition(f"Request {request_id} is {request.status}, only pending requests can be assigned")

        return request, staff, equipment

    def _origin_location(self, request, current):
        """Location snapshot at the request origin; coordinates stay put when the zone has no bounds."""
        origin = request.origin
        if origin is None:
            return current

        center = self.hospital.zone_center(origin.floor or 1, origin.zone or "")
        return Location(
            floor=origin.floor or current.floor,
            zone=origin.zone or current.zone,
            x=center["x"] if center else current.x,
            y=center["y"] if center else current.y,
        )

    @notify_errors
    def create_request(self, data):
        """New requests always start pending and unlinked; only ``assign`` links them."""
        fields = self._fields(data)
        fields.update(status="pending", assigned_staff=None, assigned_equipment=None)
        with self.transport_lock:
            state = self._state
            request = TransportationRequest.create(self._next_id("REQ", state.requests), fields)
            self._commit(state.evolve(requests=[request]))

        self.logger.info(f"New transport request {request.id}: {request.equipment_type}, priority {request.priority}")
        self.notifier.success("New transport request created")
        return request

    @notify_errors
    def cancel_request(self, request_id):
        """
        Marks a pending or assigned request as cancelled.

        Staff and equipment stay as they are unless ``release_on_cancel`` is
        set; ``release_assignment`` frees them by hand.
        """
        with self.transport_lock:
            state = self._state
            request = self._require(state.requests, request_id, "Request")
            if request.status not in CANCELLABLE_STATUSES:
                raise InvalidTransition(f"Request {request_id} is {request.status} and cannot be cancelled")

            cancelled = request.mark_as_cancelled()
            if self.release_on_cancel and request.status == "assigned":
                self._commit(self._released(state, cancelled, completed=False))
            else:
                self._commit(state.evolve(requests=[cancelled]))

        self.notifier.info("Request cancelled")
        return cancelled

    @notify_errors
    def release_assignment(self, request_id):
        """Returns the staff member and equipment still held by a cancelled request to service."""
        with self.transport_lock:
            state = self._state
            request = self._require(state.requests, request_id, "Request")
            equipment = state.equipment.get(request.assigned_equipment)
            if request.status != "cancelled" or not equipment or equipment.current_request != request_id:
                raise InvalidTransition(f"Request {request_id} holds no resources to release")

            self._commit(self._released(state, request, completed=False))

        self.notifier.success(f"Resources of request {request_id} released")
        return request

    @notify_errors
    def start_transport(self, request_id):
        with self.transport_lock:
            state = self._state
            request = self._require(state.requests, request_id, "Request")
            if request.status != "assigned":
                raise InvalidTransition(f"Request {request_id} is {request.status}, expected assigned")

            started = request.mark_as_in_progress()
            self._commit(state.evolve(requests=[started]))

        self.notifier.info(f"Transport {request_id} in progress")
        return started

    @notify_errors
    def complete_request(self, request_id):
        with self.transport_lock:
            state = self._state
            request = self._require(state.requests, request_id, "Request")
            if request.status not in ACTIVE_STATUSES:
                raise InvalidTransition(f"Request {request_id} is {request.status} and cannot be completed")

            completed = request.mark_as_completed()
            self._commit(self._released(state, completed, completed=True))

        self.notifier.success(f"Transport {request_id} completed")
        return completed

    def _released(self, state, request, completed):
        """
        Frees the staff member and equipment unit held by ``request``.

        Nothing is touched unless the equipment still points back at the
        request and the staff member still carries that equipment.
        """
        staff_updates, equipment_updates = [], []

        equipment = state.equipment.get(request.assigned_equipment)
        if equipment and equipment.current_request == request.id:
            equipment_updates.append(equipment.release())

            staff = state.staff.get(request.assigned_staff)
            if staff and equipment.assigned_staff == staff.id and equipment.id in staff.assigned_equipment:
                staff_updates.append(staff.finish_assignment(equipment.id, completed=completed))

        return state.evolve(requests=[request], staff=staff_updates, equipment=equipment_updates)

    # -----------------------------
    # 🔹 Equipment
    # -----------------------------

    @notify_errors
    def add_equipment(self, data):
        data = self._fields(data)
        self._check_new_resource(data, EQUIPMENT_ASSIGNMENT_FIELDS, EQUIPMENT_MANUAL_STATUSES, "equipment")
        with self.transport_lock:
            state = self._state
            equipment = TransportEquipment.create(self._next_id("EQ", state.equipment), data)
            self._commit(state.evolve(equipment=[equipment]))

        self.notifier.success("New equipment added")
        return equipment

    @notify_errors
    def update_equipment(self, equipment_id, updates):
        with self.transport_lock:
            state = self._state
            current = self._require(state.equipment, equipment_id, "Equipment")
            self._check_manual_update(current, updates, EQUIPMENT_ASSIGNMENT_FIELDS, EQUIPMENT_MANUAL_STATUSES)
            updated = TransportEquipment.create(equipment_id, self._merged(current.to_dict(), updates))
            self._commit(state.evolve(equipment=[updated]))

        self.notifier.success("Equipment updated")
        return updated

    @notify_errors
    def check_new_equipment(self, data):
        """Validates an equipment submission without storing it; used before forwarding to the backend."""
        data = self._fields(data)
        self._check_new_resource(data, EQUIPMENT_ASSIGNMENT_FIELDS, EQUIPMENT_MANUAL_STATUSES, "equipment")
        return TransportEquipment.create("EQ-NEW", data)

    @notify_errors
    def check_equipment_update(self, equipment_id, updates):
        current = self._require(self._state.equipment, equipment_id, "Equipment")
        self._check_manual_update(current, updates, EQUIPMENT_ASSIGNMENT_FIELDS, EQUIPMENT_MANUAL_STATUSES)
        return current

    @notify_errors
    def delete_equipment(self, equipment_id):
        with self.transport_lock:
            state = self._state
            equipment = self._require(state.equipment, equipment_id, "Equipment")
            if equipment.has_assignment:
                raise ResourceInUse(
                    f"Equipment {equipment.name} is held by request {equipment.current_request} and cannot be deleted")
            self._commit(state.evolve(drop_equipment=[equipment_id]))

        self.notifier.success("Equipment deleted")
        return equipment

    @notify_errors
    def assign_equipment_location(self, equipment_id, floor, zone):
        """Moves an equipment unit to the centre of a zone (coordinates unchanged when the zone has no bounds)."""
        with self.transport_lock:
            state = self._state
            equipment = self._require(state.equipment, equipment_id, "Equipment")
            center = self.hospital.zone_center(floor, zone)
            location = Location(
                floor=floor,
                zone=zone,
                x=center["x"] if center else equipment.location.x,
                y=center["y"] if center else equipment.location.y,
            )
            moved = equipment.move_to(location)
            self._commit(state.evolve(equipment=[moved]))

        self.notifier.success("Equipment location assigned")
        return moved

    # -----------------------------
    # 🔹 Staff
    # -----------------------------

    @notify_errors
    def add_staff(self, data):
        data = self._fields(data)
        self._check_new_resource(data, STAFF_ASSIGNMENT_FIELDS, STAFF_MANUAL_STATUSES, "staff")
        with self.transport_lock:
            state = self._state
            member = StaffMember.create(self._next_id("STAFF", state.staff), data)
            self._commit(state.evolve(staff=[member]))

        self.notifier.success("New staff added")
        return member

    @notify_errors
    def update_staff(self, staff_id, updates):
        with self.transport_lock:
            state = self._state
            current = self._require(state.staff, staff_id, "Staff member")
            self._check_manual_update(current, updates, STAFF_ASSIGNMENT_FIELDS, STAFF_MANUAL_STATUSES)
            updated = StaffMember.create(staff_id, self._merged(current.to_dict(), updates))
            self._commit(state.evolve(staff=[updated]))

        self.notifier.success("Staff updated")
        return updated

    @notify_errors
    def delete_staff(self, staff_id):
        with self.transport_lock:
            state = self._state
            member = self._require(state.staff, staff_id, "Staff member")
            if member.has_assignment:
                raise ResourceInUse(f"{member.name} still has {member.current_workload} active assignment(s)")
            self._commit(state.evolve(drop_staff=[staff_id]))

        self.notifier.success("Staff deleted")
        return member

    # -----------------------------
    # 🔹 Access points and layout
    # -----------------------------

    def add_access_point(self, data):
        data = self._fields(data)
        with self.transport_lock:
            state = self._state
            access_point = AccessPoint.create(self._next_id("AP", state.access_points), data)
            self._commit(state.evolve(access_points=[access_point]))

        self.notifier.success("New access point added")
        return access_point

    def update_floor_config(self, floors):
        with self.transport_lock:
            self.hospital.set_floors(floors)
            self._commit(self._state.evolve())

        self.notifier.success("Floor configuration updated")
        return self.hospital.to_dict()

    # -----------------------------
    # 🔹 Motion simulation
    # -----------------------------

    def apply_motion(self, rng):
        """
        Drifts moving equipment and every staff member by a small random step.

        Runs under the same lock as assignments and starts from the committed
        snapshot, so a tick never overwrites a location written by ``assign``.
        """
        with self.transport_lock:
            state = self._state
            equipment = [
                e.move_to(self._jittered(e.location, rng, EQUIPMENT_JITTER))
                for e in state.equipment.values() if e.status in MOVING_STATUSES
            ]
            staff = [s.move_to(self._jittered(s.location, rng, STAFF_JITTER)) for s in state.staff.values()]
            self._commit(state.evolve(staff=staff, equipment=equipment))
            return self._state

    @staticmethod
    def _jittered(location, rng, spread):
        x = max(MOTION_MIN_X, min(MOTION_MAX_X, location.x + (rng.random() - 0.5) * spread))
        y = max(MOTION_MIN_Y, min(MOTION_MAX_Y, location.y + (rng.random() - 0.5) * spread))
        return replace(location, x=x, y=y)

    # -----------------------------
    # 🔹 Helpers
    # -----------------------------

    def _commit(self, new_state):
        self._state = new_state
        self.notifier.state_changed(new_state)

    def _next_id(self, prefix, existing):
        while True:
            candidate = f"{prefix}-{next(self._ids)}"
            if candidate not in existing:
                return candidate

    @staticmethod
    def _require(collection, entity_id, label):
        entity = collection.get(entity_id)
        if entity is None:
            raise NotFound(f"{label} {entity_id} not found")
        return entity

    @staticmethod
    def _merged(current, updates):
        updates = TransportManager._fields(updates)
        merged = {**current, **updates}
        if updates.get("location"):
            if not isinstance(updates["location"], dict):
                raise ValueError("location must be an object")
            merged["location"] = {**current["location"], **updates["location"]}
        return merged

    @staticmethod
    def _fields(data):
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        return dict(data)

    @staticmethod
    def _check_new_resource(data, assignment_fields, manual_statuses, label):
        """New staff and equipment start without assignments, in a status an operator may set."""
        linked = [name for name in assignment_fields if data.get(name)]
        if linked:
            raise InvalidTransition(f"New {label} cannot be created with {', '.join(linked)}")
        status = data.get("status") or "available"
        if status not in manual_statuses:
            raise InvalidTransition(f"New {label} cannot start as {status}")

    @staticmethod
    def _check_manual_update(entity, updates, assignment_fields, manual_statuses):
        """
        Rejects edits that would bypass assign, complete or release.

        Assignment back-references never change here, and the status only
        moves between hand-set statuses while nothing is assigned.
        """
        updates = TransportManager._fields(updates)
        current = entity.to_dict()
        changed = [name for name in assignment_fields if name in updates and updates[name] != current[name]]
        if changed:
            raise InvalidTransition(f"{', '.join(changed)} of {entity.name} can only change through assignments")

        status = updates.get("status", entity.status)
        if status == entity.status:
            return
        if entity.has_assignment:
            raise InvalidTransition(f"{entity.name} has an active assignment and stays {entity.status}")
        if status not in manual_statuses:
            raise InvalidTransition(f"{entity.name} cannot be set to {status} by hand")
