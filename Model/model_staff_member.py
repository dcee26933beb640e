from dataclasses import dataclass, field, replace
from typing import Tuple

from Model.model_location import Location

STAFF_STATUSES = ("available", "busy", "off-duty")
DEFAULT_STAFF_LOCATION = Location(floor=1, zone="Emergency", x=200, y=200)


@dataclass(frozen=True)
class StaffMember:
    """A patient transporter and the equipment currently checked out to them."""
    id: str
    name: str
    role: str
    location: Location
    status: str = "available"
    current_workload: int = 0
    completed_today: int = 0
    assigned_equipment: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_available(self):
        return self.status == "available"

    @property
    def has_assignment(self):
        return self.current_workload > 0 or bool(self.assigned_equipment)

    def take_assignment(self, equipment_id, location):
        """Returns the busy copy of this staff member carrying one more assignment."""
        return replace(
            self,
            status="busy",
            current_workload=self.current_workload + 1,
            assigned_equipment=self.assigned_equipment + (equipment_id,),
            location=location,
        )

    def finish_assignment(self, equipment_id, completed=True):
        workload = max(0, self.current_workload - 1)
        remaining = list(self.assigned_equipment)
        if equipment_id in remaining:
            remaining.remove(equipment_id)
        return replace(
            self,
            status="available" if workload == 0 and self.status == "busy" else self.status,
            current_workload=workload,
            completed_today=self.completed_today + (1 if completed else 0),
            assigned_equipment=tuple(remaining),
        )

    def move_to(self, location):
        return replace(self, location=location)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role,
            "status": self.status,
            "location": self.location.to_dict(),
            "current_workload": self.current_workload,
            "completed_today": self.completed_today,
            "assigned_equipment": list(self.assigned_equipment),
        }

    @classmethod
    def create(cls, staff_id, data):
        status = data.get("status") or "available"
        if status not in STAFF_STATUSES:
            raise ValueError(f"Unknown staff status: {status}")

        return cls(
            id=staff_id,
            name=data.get("name") or "New Staff",
            role=data.get("role") or "Patient Transport",
            location=Location.from_dict(data["location"]) if data.get("location") else DEFAULT_STAFF_LOCATION,
            status=status,
            current_workload=data.get("current_workload") or 0,
            completed_today=data.get("completed_today") or 0,
            assigned_equipment=tuple(data.get("assigned_equipment") or ()),
        )
