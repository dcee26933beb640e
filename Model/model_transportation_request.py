from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from Model.model_location import RoomRef
from Model.model_transport_equipment import EQUIPMENT_TYPES

PRIORITY_ORDER = {"emergency": 0, "urgent": 1, "routine": 2}
REQUEST_STATUSES = ("pending", "assigned", "in-progress", "completed", "cancelled")
ACTIVE_STATUSES = ("assigned", "in-progress")
CANCELLABLE_STATUSES = ("pending", "assigned")


@dataclass(frozen=True)
class TransportationRequest:
    """Represents a transport request for a patient between two rooms."""
    id: str
    origin: Optional[RoomRef]
    destination: Optional[RoomRef]
    equipment_type: str = "stretcher"
    priority: str = "routine"
    status: str = "pending"
    patient_name: Optional[str] = None
    patient_id: Optional[str] = None
    patient_age: Optional[int] = None
    room_number: Optional[str] = None
    requested_by: Optional[str] = None
    requested_at: Optional[datetime] = None
    notes: Optional[str] = None
    estimated_duration: Optional[int] = None
    assigned_staff: Optional[str] = None
    assigned_equipment: Optional[str] = None

    @property
    def is_active(self):
        return self.status in ACTIVE_STATUSES

    def mark_as_assigned(self, staff_id, equipment_id):
        return replace(self, status="assigned", assigned_staff=staff_id, assigned_equipment=equipment_id)

    def mark_as_in_progress(self):
        return replace(self, status="in-progress")

    def mark_as_completed(self):
        return replace(self, status="completed")

    def mark_as_cancelled(self):
        return replace(self, status="cancelled")

    def queue_key(self):
        """Sort key for the request queue: priority first, then oldest first."""
        requested = self.requested_at.timestamp() if self.requested_at else 0
        return PRIORITY_ORDER.get(self.priority, 99), requested

    def to_dict(self):
        """Convert request to JSON serializable format"""
        return {
            "id": self.id,
            "priority": self.priority,
            "status": self.status,
            "equipment_type": self.equipment_type,
            "origin": self.origin.to_dict() if self.origin else None,
            "destination": self.destination.to_dict() if self.destination else None,
            "patient_name": self.patient_name,
            "patient_id": self.patient_id,
            "patient_age": self.patient_age,
            "room_number": self.room_number,
            "requested_by": self.requested_by,
            "requested_at": self.requested_at.isoformat() if self.requested_at else None,
            "notes": self.notes,
            "estimated_duration": self.estimated_duration,
            "assigned_staff": self.assigned_staff,
            "assigned_equipment": self.assigned_equipment,
        }

    @classmethod
    def create(cls, request_id, data):
        """Builds a request from a partial submission; status defaults to pending."""
        priority = data.get("priority", "routine")
        if not isinstance(priority, str) or priority not in PRIORITY_ORDER:
            raise ValueError(f"Unknown priority: {priority}")
        equipment_type = data.get("equipment_type", "stretcher")
        if equipment_type not in EQUIPMENT_TYPES:
            raise ValueError(f"Unknown equipment type: {equipment_type}")
        status = data.get("status", "pending")
        if status not in REQUEST_STATUSES:
            raise ValueError(f"Unknown request status: {status}")

        requested_at = data.get("requested_at")
        if isinstance(requested_at, str):
            requested_at = datetime.fromisoformat(requested_at)

        return cls(
            id=request_id,
            origin=RoomRef.from_dict(data.get("origin")),
            destination=RoomRef.from_dict(data.get("destination")),
            equipment_type=equipment_type,
            priority=priority,
            status=status,
            patient_name=data.get("patient_name"),
            patient_id=data.get("patient_id"),
            patient_age=data.get("patient_age"),
            room_number=data.get("room_number"),
            requested_by=data.get("requested_by"),
            requested_at=requested_at or datetime.now(),
            notes=data.get("notes"),
            estimated_duration=data.get("estimated_duration"),
            assigned_staff=data.get("assigned_staff"),
            assigned_equipment=data.get("assigned_equipment"),
        )
