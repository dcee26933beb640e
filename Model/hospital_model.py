from dataclasses import dataclass, field, asdict
from typing import List, Optional


@dataclass(frozen=True)
class ZoneBounds:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Zone:
    id: str
    name: str
    color: str
    capacity: int
    bounds: Optional[ZoneBounds] = None

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError(f"Zone must be an object, got {data!r}")
        missing = [key for key in ("id", "name") if not data.get(key)]
        if missing:
            raise ValueError(f"Zone is missing {', '.join(missing)}")
        try:
            capacity = int(data.get("capacity", 0))
        except (TypeError, ValueError):
            raise ValueError(f"Zone {data['name']} capacity must be a number") from None

        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            color=data.get("color", "#6b7280"),
            capacity=capacity,
            bounds=_bounds(data["name"], data.get("bounds")),
        )


def _bounds(zone_name, bounds):
    """Zone bounds need exactly x, y, width and height as numbers; a zone may have none."""
    if not bounds:
        return None
    if not isinstance(bounds, dict):
        raise ValueError(f"Bounds of zone {zone_name} must be an object")
    keys = ("x", "y", "width", "height")
    wrong = sorted(set(bounds) ^ set(keys))
    if wrong:
        raise ValueError(f"Bounds of zone {zone_name} need exactly x, y, width, height (got {', '.join(wrong)})")
    for key in keys:
        value = bounds[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Bounds {key} of zone {zone_name} must be a number")
    return ZoneBounds(**bounds)


@dataclass(frozen=True)
class FloorConfig:
    id: str
    number: int
    name: str
    zones: List[Zone] = field(default_factory=list)
    width: int = 1000
    height: int = 600
    enabled: bool = True

    def get_zone(self, zone_name):
        return next((z for z in self.zones if z.name == zone_name), None)

    def to_dict(self):
        return {
            "id": self.id,
            "number": self.number,
            "name": self.name,
            "zones": [z.to_dict() for z in self.zones],
            "dimensions": {"width": self.width, "height": self.height},
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError(f"Floor must be an object, got {data!r}")
        if data.get("number") is None:
            raise ValueError("Floor is missing number")
        try:
            number = int(data["number"])
        except (TypeError, ValueError):
            raise ValueError(f"Floor number must be a number, got {data['number']!r}") from None
        zones = data.get("zones") or []
        if not isinstance(zones, list):
            raise ValueError(f"Zones of floor {number} must be a list")
        dimensions = data.get("dimensions") or {}
        if not isinstance(dimensions, dict):
            raise ValueError(f"Dimensions of floor {number} must be an object")

        return cls(
            id=data.get("id", f"floor-{number}"),
            number=number,
            name=data.get("name", f"Floor {number}"),
            zones=[Zone.from_dict(z) for z in zones],
            width=dimensions.get("width", 1000),
            height=dimensions.get("height", 600),
            enabled=data.get("enabled", True),
        )


DEFAULT_ZONES = [
    Zone("emergency", "Emergency", "#ef4444", 10, ZoneBounds(50, 100, 300, 200)),
    Zone("icu", "ICU", "#f59e0b", 8, ZoneBounds(550, 400, 250, 150)),
    Zone("surgery", "Surgery", "#8b5cf6", 6, ZoneBounds(300, 250, 250, 200)),
    Zone("radiology", "Radiology", "#06b6d4", 5, ZoneBounds(450, 200, 200, 150)),
    Zone("general", "General Ward", "#10b981", 15, ZoneBounds(100, 300, 180, 150)),
    Zone("pediatrics", "Pediatrics", "#ec4899", 8, ZoneBounds(700, 350, 200, 100)),
    Zone("maternity", "Maternity", "#f97316", 10, ZoneBounds(600, 150, 250, 200)),
    Zone("outpatient", "Outpatient", "#6366f1", 12, ZoneBounds(50, 450, 200, 100)),
]


def create_floor_zones(floor_number):
    """Copies the default zones with ids unique to one floor."""
    return [
        Zone(f"{z.id}-floor-{floor_number}", z.name, z.color, z.capacity, z.bounds)
        for z in DEFAULT_ZONES
    ]


def default_floor_config():
    return [
        FloorConfig("floor-1", 1, "Ground Floor", create_floor_zones(1)),
        FloorConfig("floor-2", 2, "First Floor", create_floor_zones(2)),
        FloorConfig("floor-3", 3, "Second Floor", create_floor_zones(3)),
    ]


class Hospital:
    def __init__(self, floors=None):
        """Holds the floor and zone layout consumed by the coordinator and the analytics."""
        self.floors = list(floors) if floors is not None else default_floor_config()

    def get_floor(self, number):
        return next((f for f in self.floors if f.number == number), None)

    def get_floors(self, enabled_only=False):
        return [f for f in self.floors if f.enabled or not enabled_only]

    def add_floor(self, floor):
        if self.get_floor(floor.number):
            raise ValueError(f"Floor {floor.number} already exists")
        self.floors.append(floor)
        self.floors.sort(key=lambda f: f.number)

    def set_floors(self, floors):
        numbers = [f.number for f in floors]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Floor numbers must be unique")
        self.floors = sorted(floors, key=lambda f: f.number)

    def zone_center(self, floor_number, zone_name):
        """
        Returns the midpoint of a zone's bounds as {"x", "y"}.

        None when the floor, the zone or its bounds are unknown; callers keep
        their previous coordinates in that case.
        """
        floor = self.get_floor(floor_number)
        zone = floor.get_zone(zone_name) if floor else None
        if not zone or not zone.bounds:
            return None

        return {
            "x": zone.bounds.x + zone.bounds.width / 2,
            "y": zone.bounds.y + zone.bounds.height / 2,
        }

    def to_dict(self):
        return [f.to_dict() for f in self.floors]
