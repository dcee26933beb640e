from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _frozen(entities):
    return MappingProxyType({e.id: e for e in entities})


@dataclass(frozen=True)
class ApplicationState:
    """
    One immutable snapshot of every collection the coordinator owns.

    A new snapshot is built for each change; ``version`` increases by one on
    every commit so readers can tell two snapshots apart.
    """
    requests: Mapping = field(default_factory=lambda: MappingProxyType({}))
    staff: Mapping = field(default_factory=lambda: MappingProxyType({}))
    equipment: Mapping = field(default_factory=lambda: MappingProxyType({}))
    access_points: Mapping = field(default_factory=lambda: MappingProxyType({}))
    version: int = 0

    @classmethod
    def build(cls, requests=(), staff=(), equipment=(), access_points=()):
        return cls(_frozen(requests), _frozen(staff), _frozen(equipment), _frozen(access_points))

    def evolve(self, requests=(), staff=(), equipment=(), access_points=(),
               drop_staff=(), drop_equipment=()):
        """Returns the next snapshot with the given entities upserted and ids dropped."""
        def merged(current, updates, dropped=()):
            if not updates and not dropped:
                return current
            result = dict(current)
            for entity in updates:
                result[entity.id] = entity
            for entity_id in dropped:
                result.pop(entity_id, None)
            return MappingProxyType(result)

        return ApplicationState(
            requests=merged(self.requests, requests),
            staff=merged(self.staff, staff, drop_staff),
            equipment=merged(self.equipment, equipment, drop_equipment),
            access_points=merged(self.access_points, access_points),
            version=self.version + 1,
        )

    def to_dict(self):
        return {
            "version": self.version,
            "requests": [r.to_dict() for r in self.requests.values()],
            "staff": [s.to_dict() for s in self.staff.values()],
            "equipment": [e.to_dict() for e in self.equipment.values()],
            "access_points": [a.to_dict() for a in self.access_points.values()],
        }
