"""
Advisory equipment relocation suggestions derived from open request demand.

Nothing here mutates state: applying a suggestion is an explicit call to
``TransportManager.assign_equipment_location``.
"""
from collections import Counter
from dataclasses import dataclass, asdict

HIGH_DEMAND_THRESHOLD = 2
MAX_PRIORITY = 10
REDISTRIBUTION_PRIORITY = 6
DEMAND_STATUSES = ("pending", "assigned")

# Canonical display coordinates per zone
ZONE_POSITIONS = {
    "Emergency": {"x": 200, "y": 200, "floor": 1},
    "Surgery": {"x": 400, "y": 350, "floor": 2},
    "ICU": {"x": 650, "y": 450, "floor": 3},
    "Radiology": {"x": 550, "y": 275, "floor": 2},
    "Outpatient": {"x": 725, "y": 250, "floor": 1},
    "Cardiology": {"x": 800, "y": 375, "floor": 3},
}
DEFAULT_POSITION = {"x": 400, "y": 300, "floor": 2}


@dataclass(frozen=True)
class PlacementSuggestion:
    equipment_id: str
    suggested_zone: str
    suggested_location: dict
    reason: str
    priority: int

    def to_dict(self):
        return asdict(self)


def zone_demand(requests):
    """Counts every origin and destination zone of pending or assigned requests."""
    demand = Counter()
    for request in requests:
        if request.status not in DEMAND_STATUSES:
            continue
        for endpoint in (request.origin, request.destination):
            if endpoint is not None and endpoint.zone:
                demand[endpoint.zone] += 1
    return demand


def suggested_position(zone):
    return dict(ZONE_POSITIONS.get(zone, DEFAULT_POSITION))


def generate_placement_suggestions(equipment, requests):
    """
    Suggests moving available equipment towards zones with open demand.

    A zone with at least two open request endpoints and no available unit
    gets the first available unit (priority ``min(demand * 2, 10)``). A zone
    with no demand holding more than one available unit gives one of them
    to the busiest zone at priority 6.
    """
    suggestions = []
    demand = zone_demand(requests)

    high_demand_zones = sorted(
        ((zone, count) for zone, count in demand.items() if count >= HIGH_DEMAND_THRESHOLD),
        key=lambda item: item[1],
        reverse=True,
    )

    available = [e for e in equipment if e.status == "available"]

    for zone, count in high_demand_zones:
        in_zone = [e for e in available if e.location.zone == zone]
        if in_zone or not available:
            continue

        suggestions.append(PlacementSuggestion(
            equipment_id=available[0].id,
            suggested_zone=zone,
            suggested_location=suggested_position(zone),
            reason=(f"High demand detected in {zone} with {count} pending/active requests. "
                    f"Moving equipment here will reduce response time."),
            priority=min(count * 2, MAX_PRIORITY),
        ))

    if not high_demand_zones:
        return suggestions

    target_zone = high_demand_zones[0][0]
    idle_zones = []
    for unit in available:
        if demand[unit.location.zone] == 0 and unit.location.zone not in idle_zones:
            idle_zones.append(unit.location.zone)

    for zone in idle_zones:
        in_zone = [e for e in available if e.location.zone == zone]
        if len(in_zone) <= 1:
            continue

        suggestions.append(PlacementSuggestion(
            equipment_id=in_zone[0].id,
            suggested_zone=target_zone,
            suggested_location=suggested_position(target_zone),
            reason=(f"Low utilization in {zone}. Redistributing to {target_zone} "
                    f"will balance coverage and improve efficiency."),
            priority=REDISTRIBUTION_PRIORITY,
        ))

    return suggestions
