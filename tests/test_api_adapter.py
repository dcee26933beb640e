from datetime import date

import pytest

from Model.Backend.api_adapter import (
    request_from_api, request_to_api, staff_from_api, equipment_from_api,
    normalize_priority, unwrap_list,
)


@pytest.mark.parametrize("value, expected", [
    (1, "emergency"),
    (2, "urgent"),
    (3, "routine"),
    (4, "routine"),
    ("2", "urgent"),
    ("urgent", "urgent"),
])
def test_normalize_priority(value, expected):
    assert normalize_priority(value) == expected


@pytest.mark.parametrize("value", [0, 7, "asap", None])
def test_normalize_priority_rejects_unknown(value):
    with pytest.raises(ValueError):
        normalize_priority(value)


def test_request_from_backend_document():
    dto = {
        "_id": "665f1c",
        "patient_name": "Maria Lopez",
        "priority": 1,
        "status": "in_progress",
        "equipment_type": "wheelchair",
        "pickup_room_id": {"_id": "room-1", "floor": 2, "zone": "Radiology", "room_number": "RAD-2"},
        "destination_room_id": "room-9",
        "porter_id": {"_id": "porter-7", "name": "Sam"},
        "equipment_id": "eq-3",
        "created_at": "2024-05-01T08:00:00Z",
    }

    request = request_from_api(dto)

    assert request.id == "665f1c"
    assert request.priority == "emergency"
    assert request.status == "in-progress"
    assert request.equipment_type == "wheelchair"
    assert request.origin.floor == 2
    assert request.origin.zone == "Radiology"
    assert request.origin.room == "RAD-2"
    assert request.destination.room == "room-9"
    assert request.assigned_staff == "porter-7"
    assert request.assigned_equipment == "eq-3"
    assert request.requested_at.year == 2024
    assert request.patient_name == "Maria Lopez"


def test_request_from_frontend_shape():
    dto = {
        "id": "REQ-9",
        "priority": "urgent",
        "origin": {"floor": 1, "zone": "Emergency", "room": "ER-1"},
        "destination": {"floor": 3, "zone": "ICU", "room": "ICU-4"},
        "equipmentType": "stretcher",
        "patientInfo": {"name": "Tom", "id": "P-1", "age": 71, "roomNumber": "ER-1"},
        "assignedStaff": "STAFF-1",
        "requestedAt": "2024-05-01T09:30:00",
    }

    request = request_from_api(dto)

    assert request.priority == "urgent"
    assert request.status == "pending"
    assert request.origin.zone == "Emergency"
    assert request.destination.room == "ICU-4"
    assert request.patient_age == 71
    assert request.room_number == "ER-1"
    assert request.assigned_staff == "STAFF-1"


def test_request_without_id_is_rejected():
    with pytest.raises(ValueError):
        request_from_api({"priority": 1})


def test_request_to_api_payload():
    payload = request_to_api({
        "patient_name": "Maria Lopez",
        "priority": "urgent",
        "origin": {"floor": 1, "zone": "Emergency", "room": "ER-1"},
        "destination": {"floor": 3, "zone": "ICU", "room": "ICU-4"},
        "equipment_type": "wheelchair",
        "notes": "oxygen",
    })

    assert payload == {
        "patient_name": "Maria Lopez",
        "priority": 2,
        "pickup_room_id": "ER-1",
        "destination_room_id": "ICU-4",
        "equipment_type": "wheelchair",
        "notes": "oxygen",
    }


def test_request_to_api_omits_empty_notes():
    payload = request_to_api({"origin": {"room": "A"}, "destination": {"room": "B"}})
    assert "notes" not in payload
    assert payload["priority"] == 3


def test_staff_from_backend():
    staff = staff_from_api({
        "_id": "porter-7",
        "name": "Sam",
        "role": "porter",
        "status": "busy",
        "current_location": "Surgery",
        "workload": 2,
    })

    assert staff.id == "porter-7"
    assert staff.status == "busy"
    assert staff.current_workload == 2
    assert staff.location.zone == "Surgery"
    assert (staff.location.x, staff.location.y) == (200, 200)


def test_equipment_from_backend():
    equipment = equipment_from_api({
        "_id": "eq-3",
        "type": "wheelchair",
        "status": "in_use",
        "current_location": "ICU",
        "lastMaintenance": "2024-04-02T00:00:00Z",
        "assignedStaff": {"_id": "porter-7"},
    })

    assert equipment.status == "in-use"
    assert equipment.location.zone == "ICU"
    assert equipment.last_maintenance == date(2024, 4, 2)
    assert equipment.assigned_staff == "porter-7"


def test_equipment_with_unknown_type_is_rejected():
    with pytest.raises(ValueError):
        equipment_from_api({"_id": "eq-4", "type": "bed"})


@pytest.mark.parametrize("payload, expected", [
    (None, []),
    ([{"id": 1}], [{"id": 1}]),
    ({"requests": [{"id": 2}]}, [{"id": 2}]),
    ({"data": [{"id": 3}]}, [{"id": 3}]),
    ({"message": "ok"}, []),
])
def test_unwrap_list(payload, expected):
    assert unwrap_list(payload, "requests") == expected
