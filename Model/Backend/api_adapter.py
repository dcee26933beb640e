"""
Mapping between the REST backend DTOs and the internal entities.

The backend and the local mock data describe requests with two overlapping
field sets (``_id``/``id``, numeric/named priority, room ids/room objects,
``porter_id``/``assignedStaff`` ...). Everything is normalized here so the
coordinator only ever sees one representation.
"""
from datetime import datetime

from Model.model_location import Location, RoomRef
from Model.model_staff_member import StaffMember
from Model.model_transport_equipment import TransportEquipment
from Model.model_transportation_request import TransportationRequest, PRIORITY_ORDER

API_PRIORITIES = {1: "emergency", 2: "urgent", 3: "routine", 4: "routine"}
PRIORITY_CODES = {"emergency": 1, "urgent": 2, "routine": 3}


def _ref_id(value):
    """Backend references are either bare ids or populated documents."""
    if isinstance(value, dict):
        return value.get("_id") or value.get("id")
    return value


def _entity_id(dto):
    entity_id = dto.get("id") or dto.get("_id")
    if not entity_id:
        raise ValueError("Backend record without id")
    return str(entity_id)


def _status(value, default):
    return value.replace("_", "-").lower() if value else default


def _timestamp(value):
    if not value or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def normalize_priority(value):
    if value in PRIORITY_ORDER:
        return value
    try:
        return API_PRIORITIES[int(value)]
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"Unknown priority: {value!r}")


def _room(room, room_id):
    if isinstance(room, dict):
        return RoomRef(
            floor=room.get("floor", 1),
            zone=room.get("zone", ""),
            room=str(room.get("room") or room.get("room_number") or room_id or ""),
        )
    if isinstance(room_id, dict):
        return _room(room_id, _ref_id(room_id))
    if room_id:
        return RoomRef(floor=1, zone="", room=str(room_id))
    return None


def request_from_api(dto):
    patient = dto.get("patientInfo") or {}
    return TransportationRequest.create(_entity_id(dto), {
        "priority": normalize_priority(dto.get("priority", "routine")),
        "status": _status(dto.get("status"), "pending"),
        "equipment_type": dto.get("equipment_type") or dto.get("equipmentType") or "stretcher",
        "origin": _room(dto.get("origin"), dto.get("pickup_room_id")),
        "destination": _room(dto.get("destination"), dto.get("destination_room_id")),
        "patient_name": dto.get("patient_name") or patient.get("name"),
        "patient_id": patient.get("id"),
        "patient_age": patient.get("age"),
        "room_number": patient.get("roomNumber"),
        "requested_by": dto.get("requestedBy") or dto.get("requested_by"),
        "requested_at": _timestamp(dto.get("requestedAt") or dto.get("created_at") or dto.get("createdAt")),
        "notes": dto.get("notes"),
        "estimated_duration": dto.get("estimatedDuration") or dto.get("estimated_duration"),
        "assigned_staff": _ref_id(dto.get("porter_id") or dto.get("assignedStaff")),
        "assigned_equipment": _ref_id(dto.get("equipment_id") or dto.get("assignedEquipment")),
    })


def request_to_api(data):
    """Builds the create payload the backend expects from a partial request submission."""
    origin = RoomRef.from_dict(data.get("origin"))
    destination = RoomRef.from_dict(data.get("destination"))
    payload = {
        "patient_name": data.get("patient_name") or "",
        "priority": PRIORITY_CODES[normalize_priority(data.get("priority", "routine"))],
        "pickup_room_id": origin.room if origin else "",
        "destination_room_id": destination.room if destination else "",
        "equipment_type": data.get("equipment_type", "stretcher"),
    }
    if data.get("notes"):
        payload["notes"] = data["notes"]
    return payload


def _location(dto):
    location = dto.get("location")
    if isinstance(location, dict):
        return Location.from_dict(location)
    current = dto.get("current_location")
    if isinstance(current, str) and current:
        return Location(floor=1, zone=current, x=200, y=200)
    return Location.from_dict({})


def staff_from_api(dto):
    return StaffMember.create(_entity_id(dto), {
        "name": dto.get("name"),
        "role": dto.get("role"),
        "status": _status(dto.get("status"), "available"),
        "location": _location(dto).to_dict(),
        "current_workload": dto.get("currentWorkload", dto.get("current_workload", dto.get("workload", 0))),
        "completed_today": dto.get("completedToday", dto.get("completed_today", 0)),
        "assigned_equipment": [_ref_id(e) for e in dto.get("assignedEquipment") or dto.get("assigned_equipment") or []],
    })


def equipment_from_api(dto):
    return TransportEquipment.create(_entity_id(dto), {
        "type": dto.get("type", "stretcher"),
        "name": dto.get("name"),
        "model": dto.get("model"),
        "status": _status(dto.get("status"), "available"),
        "location": _location(dto).to_dict(),
        "battery_level": dto.get("batteryLevel", dto.get("battery_level")),
        "last_maintenance": dto.get("lastMaintenance") or dto.get("last_maintenance"),
        "last_used": dto.get("lastUsed") or dto.get("last_used"),
        "maintenance_note": dto.get("maintenanceNote") or dto.get("maintenance_note"),
        "assigned_staff": _ref_id(dto.get("assignedStaff") or dto.get("assigned_staff")),
        "current_request": _ref_id(dto.get("currentRequest") or dto.get("current_request")),
    })


def unwrap_list(payload, key):
    """The backend answers either with a bare list or with ``{key: [...]}``/``{"data": [...]}``."""
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    return payload.get(key) or payload.get("data") or []
