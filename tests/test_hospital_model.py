import pytest

from Model.hospital_model import Hospital, FloorConfig, default_floor_config


def test_default_layout_has_three_floors_with_all_zones():
    hospital = Hospital()

    assert [f.number for f in hospital.get_floors()] == [1, 2, 3]
    for floor in hospital.get_floors():
        assert len(floor.zones) == 8
        assert all(zone.id.endswith(f"-floor-{floor.number}") for zone in floor.zones)


@pytest.mark.parametrize("floor, zone, expected", [
    (1, "Emergency", {"x": 200, "y": 200}),
    (2, "ICU", {"x": 675, "y": 475}),
    (3, "Outpatient", {"x": 150, "y": 500}),
])
def test_zone_center_is_midpoint_of_bounds(floor, zone, expected):
    assert Hospital().zone_center(floor, zone) == expected


@pytest.mark.parametrize("floor, zone", [
    (1, "Cardiology"),
    (9, "Emergency"),
    (1, ""),
])
def test_zone_center_unknown_returns_none(floor, zone):
    assert Hospital().zone_center(floor, zone) is None


def test_zone_without_bounds_has_no_center():
    floor = FloorConfig.from_dict({
        "number": 4,
        "zones": [{"id": "lab", "name": "Lab", "capacity": 3}],
    })
    hospital = Hospital([floor])

    assert hospital.get_floor(4).get_zone("Lab").bounds is None
    assert hospital.zone_center(4, "Lab") is None


def test_floor_config_round_trip_keeps_dimensions():
    floor = default_floor_config()[0]
    data = floor.to_dict()

    assert data["dimensions"] == {"width": 1000, "height": 600}
    assert FloorConfig.from_dict(data) == floor


def test_set_floors_rejects_duplicate_numbers():
    hospital = Hospital()
    floors = [FloorConfig("a", 1, "A"), FloorConfig("b", 1, "B")]

    with pytest.raises(ValueError):
        hospital.set_floors(floors)
    assert len(hospital.get_floors()) == 3


def test_add_floor_keeps_floors_sorted():
    hospital = Hospital([FloorConfig("floor-3", 3, "Top")])
    hospital.add_floor(FloorConfig("floor-1", 1, "Ground"))

    assert [f.number for f in hospital.get_floors()] == [1, 3]
    with pytest.raises(ValueError):
        hospital.add_floor(FloorConfig("again", 1, "Again"))


def test_get_floors_enabled_only():
    hospital = Hospital([FloorConfig("floor-1", 1, "Ground"), FloorConfig("floor-2", 2, "Closed", enabled=False)])
    assert [f.number for f in hospital.get_floors(enabled_only=True)] == [1]


@pytest.mark.parametrize("data", [
    {"name": "Basement"},
    {"number": "minus one"},
    {"number": 4, "zones": {"id": "lab"}},
    {"number": 4, "dimensions": [1000, 600]},
    {"number": 4, "zones": [{"name": "Lab"}]},
    {"number": 4, "zones": [{"id": "lab", "name": "Lab", "capacity": "many"}]},
    {"number": 4, "zones": [{"id": "lab", "name": "Lab",
                             "bounds": {"x": 0, "y": 0, "width": 10, "height": 10, "depth": 3}}]},
    {"number": 4, "zones": [{"id": "lab", "name": "Lab", "bounds": {"x": 0, "y": 0, "width": 10}}]},
    {"number": 4, "zones": [{"id": "lab", "name": "Lab",
                             "bounds": {"x": "left", "y": 0, "width": 10, "height": 10}}]},
    "floor-4",
])
def test_malformed_floor_config_raises_value_error(data):
    with pytest.raises(ValueError):
        FloorConfig.from_dict(data)
