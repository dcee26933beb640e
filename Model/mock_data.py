"""Seed collections for the in-memory mode."""
from datetime import date, datetime, timedelta

from Model.model_access_point import AccessPoint
from Model.model_location import Location, RoomRef
from Model.model_staff_member import StaffMember
from Model.model_transport_equipment import TransportEquipment
from Model.model_transportation_request import TransportationRequest


def seed_equipment():
    return [
        TransportEquipment(
            id="EQUIP-1", type="stretcher", name="Stretcher 1",
            location=Location(floor=1, zone="Emergency", x=100, y=150),
            battery_level=80, last_maintenance=date(2024, 5, 1),
        ),
        TransportEquipment(
            id="EQUIP-2", type="wheelchair", name="Wheelchair 1",
            location=Location(floor=2, zone="ICU", x=200, y=150),
            last_maintenance=date(2024, 5, 10),
        ),
        TransportEquipment(
            id="EQUIP-3", type="wheelchair", name="Wheelchair 2", status="in-use",
            location=Location(floor=2, zone="Surgery", x=400, y=300),
            last_maintenance=date(2024, 4, 22),
            assigned_staff="STAFF-2", current_request="REQ-SEED-3",
        ),
    ]


def seed_staff():
    return [
        StaffMember(
            id="STAFF-1", name="John Doe", role="Patient Transport",
            location=Location(floor=1, zone="Emergency", x=200, y=200),
        ),
        StaffMember(
            id="STAFF-2", name="Jane Smith", role="Patient Transport", status="busy",
            location=Location(floor=2, zone="Surgery", x=400, y=300),
            current_workload=1, completed_today=5, assigned_equipment=("EQUIP-3",),
        ),
    ]


def seed_requests(now=None):
    now = now or datetime.now()
    return [
        TransportationRequest(
            id="REQ-SEED-1",
            origin=RoomRef(floor=1, zone="Emergency", room="ER-12"),
            destination=RoomRef(floor=3, zone="ICU", room="ICU-4"),
            equipment_type="stretcher", priority="emergency",
            patient_name="Maria Lopez", requested_by="Dr. Patel",
            requested_at=now - timedelta(minutes=5), estimated_duration=15,
        ),
        TransportationRequest(
            id="REQ-SEED-2",
            origin=RoomRef(floor=2, zone="Radiology", room="RAD-2"),
            destination=RoomRef(floor=1, zone="General Ward", room="GW-21"),
            equipment_type="wheelchair", priority="routine",
            patient_name="Tom Becker", requested_by="Nurse Kim",
            requested_at=now - timedelta(minutes=20), estimated_duration=10,
        ),
        TransportationRequest(
            id="REQ-SEED-3",
            origin=RoomRef(floor=2, zone="Surgery", room="OR-3"),
            destination=RoomRef(floor=1, zone="Outpatient", room="OP-7"),
            equipment_type="wheelchair", priority="urgent", status="in-progress",
            patient_name="Ahmed Karimi", requested_by="Dr. Lind",
            requested_at=now - timedelta(minutes=12), estimated_duration=20,
            assigned_staff="STAFF-2", assigned_equipment="EQUIP-3",
        ),
    ]


def seed_access_points():
    return [
        AccessPoint(
            id="AP-1", name="ER Main", model="AP-535",
            location=Location(floor=1, zone="Emergency", x=200, y=200),
            ble_range=150, clients=42, signal_strength=95,
            ip_address="10.0.1.11", mac_address="00:1A:1E:00:01:11",
            firmware_version="8.10.0.6", last_seen="2024-05-01T08:00:00",
        ),
        AccessPoint(
            id="AP-2", name="ICU Room 4", model="AP-503H",
            location=Location(floor=1, zone="ICU", x=675, y=475),
            ble_range=120, clients=12, signal_strength=88,
            ip_address="10.0.1.12", mac_address="00:1A:1E:00:01:12",
            firmware_version="8.10.0.6", last_seen="2024-05-01T08:00:00",
        ),
    ]
