from types import SimpleNamespace

import pytest

from Model.simulation import Simulation


class FixedRandom:
    """Stand-in for random.Random that always returns the same draw."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def simulation_for(socketio):
    def build(manager, value):
        return Simulation(SimpleNamespace(transport_manager=manager), socketio, rng=FixedRandom(value))
    return build


def test_tick_moves_staff_and_in_use_equipment(seeded_manager, simulation_for):
    seeded_manager.assign("R1", "S1", "EQ1")
    simulation = simulation_for(seeded_manager, 1.0)

    state = simulation.tick()

    assert (state.equipment["EQ1"].location.x, state.equipment["EQ1"].location.y) == (210, 210)
    assert (state.staff["S1"].location.x, state.staff["S1"].location.y) == (207.5, 207.5)
    assert (state.staff["S2"].location.x, state.staff["S2"].location.y) == (157.5, 187.5)


def test_tick_leaves_available_equipment_in_place(seeded_manager, simulation_for):
    state = simulation_for(seeded_manager, 1.0).tick()

    assert (state.equipment["EQ2"].location.x, state.equipment["EQ2"].location.y) == (500, 250)
    assert (state.equipment["EQ3"].location.x, state.equipment["EQ3"].location.y) == (650, 450)


def test_tick_clamps_to_floor_plan(seeded_manager, simulation_for):
    seeded_manager.update_staff("S3", {"location": {"x": 850, "y": 550}})
    state = simulation_for(seeded_manager, 1.0).tick()
    assert (state.staff["S3"].location.x, state.staff["S3"].location.y) == (850, 550)

    seeded_manager.update_staff("S3", {"location": {"x": 50, "y": 50}})
    state = simulation_for(seeded_manager, 0.0).tick()
    assert (state.staff["S3"].location.x, state.staff["S3"].location.y) == (50, 50)


def test_tick_keeps_assignment_made_before_it(seeded_manager, simulation_for):
    simulation = simulation_for(seeded_manager, 0.5)
    seeded_manager.assign("R1", "S1", "EQ1")

    state = simulation.tick()

    assert state.requests["R1"].status == "assigned"
    assert state.staff["S1"].status == "busy"
    assert state.staff["S1"].location.zone == "Emergency"
    assert (state.staff["S1"].location.x, state.staff["S1"].location.y) == (200, 200)
    assert state.equipment["EQ1"].current_request == "R1"


def test_tick_commits_new_version_and_emits_event(seeded_manager, simulation_for, socketio):
    version = seeded_manager.state.version
    simulation = simulation_for(seeded_manager, 0.5)

    state = simulation.tick()

    assert state.version == version + 1
    assert seeded_manager.state is state
    assert ("simulation_event", {"type": "motion", "tick": 1, "version": state.version}) in socketio.events


def test_stop_before_start_is_harmless(seeded_manager, simulation_for):
    simulation = simulation_for(seeded_manager, 0.5)
    simulation.stop()
    assert not simulation.is_running()
