from dataclasses import dataclass, asdict


def _floor(value):
    if isinstance(value, bool):
        raise ValueError(f"Floor must be a number, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Floor must be a number, got {value!r}") from None


def _coordinate(value, label):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Location {label} must be a number, got {value!r}")
    return value


def _text(value, label):
    if value is None:
        return ""
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise ValueError(f"{label} must be text, got {value!r}")
    return str(value)


def _object(data, label):
    if not isinstance(data, dict):
        raise ValueError(f"{label} must be an object, got {data!r}")
    return data


@dataclass(frozen=True)
class Location:
    """Position of a tracked staff member, equipment unit or access point on a floor plan."""
    floor: int
    zone: str
    x: float
    y: float

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data, default=None):
        default = default or Location(1, "Emergency", 200, 200)
        data = _object(data, "Location")
        return cls(
            floor=_floor(data.get("floor", default.floor)),
            zone=_text(data.get("zone", default.zone), "Zone"),
            x=_coordinate(data.get("x", default.x), "x"),
            y=_coordinate(data.get("y", default.y), "y"),
        )


@dataclass(frozen=True)
class RoomRef:
    """Origin or destination of a transport request."""
    floor: int
    zone: str
    room: str = ""

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        if data is None:
            return None
        if isinstance(data, RoomRef):
            return data
        data = _object(data, "Room reference")
        return cls(floor=_floor(data.get("floor", 1)), zone=_text(data.get("zone"), "Zone"),
                   room=_text(data.get("room"), "Room"))
