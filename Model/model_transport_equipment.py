from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from Model.model_location import Location

EQUIPMENT_TYPES = ("stretcher", "wheelchair")
EQUIPMENT_STATUSES = ("available", "in-use", "requested", "maintenance")

# Only equipment in these states drifts with the motion simulation
MOVING_STATUSES = ("in-use", "requested")


@dataclass(frozen=True)
class TransportEquipment:
    """A stretcher or wheelchair tracked on the floor plan."""
    id: str
    type: str
    name: str
    location: Location
    status: str = "available"
    model: Optional[str] = None
    battery_level: Optional[int] = None
    last_maintenance: Optional[date] = None
    last_used: Optional[str] = None
    maintenance_note: Optional[str] = None
    assigned_staff: Optional[str] = None
    current_request: Optional[str] = None

    @property
    def is_available(self):
        return self.status == "available"

    @property
    def has_assignment(self):
        return self.current_request is not None

    def mark_in_use(self, staff_id, request_id, location):
        return replace(self, status="in-use", assigned_staff=staff_id,
                       current_request=request_id, location=location)

    def release(self):
        return replace(self, status="available", assigned_staff=None, current_request=None,
                       last_used=datetime.now().isoformat(timespec="seconds"))

    def move_to(self, location):
        return replace(self, location=location)

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "model": self.model,
            "status": self.status,
            "location": self.location.to_dict(),
            "battery_level": self.battery_level,
            "last_maintenance": self.last_maintenance.isoformat() if self.last_maintenance else None,
            "last_used": self.last_used,
            "maintenance_note": self.maintenance_note,
            "assigned_staff": self.assigned_staff,
            "current_request": self.current_request,
        }

    @classmethod
    def create(cls, equipment_id, data):
        equipment_type = data.get("type", "stretcher")
        if equipment_type not in EQUIPMENT_TYPES:
            raise ValueError(f"Unknown equipment type: {equipment_type}")
        status = data.get("status", "available")
        if status not in EQUIPMENT_STATUSES:
            raise ValueError(f"Unknown equipment status: {status}")

        last_maintenance = data.get("last_maintenance")
        if isinstance(last_maintenance, str):
            last_maintenance = date.fromisoformat(last_maintenance[:10])

        return cls(
            id=equipment_id,
            type=equipment_type,
            name=data.get("name") or f"{equipment_type.title()} {equipment_id}",
            location=Location.from_dict(data.get("location") or {}),
            status=status,
            model=data.get("model"),
            battery_level=data.get("battery_level"),
            last_maintenance=last_maintenance or date.today(),
            last_used=data.get("last_used"),
            maintenance_note=data.get("maintenance_note"),
            assigned_staff=data.get("assigned_staff"),
            current_request=data.get("current_request"),
        )
