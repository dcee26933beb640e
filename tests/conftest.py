"""Pytest fixtures for the patient transport backend."""
from datetime import datetime, date

import pytest
from flask import Flask

from Model.hospital_model import Hospital
from Model.hospital_system import HospitalSystem
from Model.model_location import Location, RoomRef
from Model.model_staff_member import StaffMember
from Model.model_transport_equipment import TransportEquipment
from Model.model_transport_manager import TransportManager
from Model.model_transportation_request import TransportationRequest
from View.hospital_transport_viewer import HospitalTransportViewer


class FakeSocketIO:
    """Records every emit instead of pushing it to clients."""

    def __init__(self):
        self.events = []

    def emit(self, event, data=None, **kwargs):
        self.events.append((event, data))

    def notifications(self, level=None):
        return [data for event, data in self.events
                if event == "notification" and (level is None or data["level"] == level)]


@pytest.fixture
def socketio():
    return FakeSocketIO()


@pytest.fixture
def hospital():
    return Hospital()


@pytest.fixture
def manager(hospital, socketio):
    return TransportManager(hospital, socketio, release_on_cancel=False)


@pytest.fixture
def requests_data():
    return [
        TransportationRequest(
            id="R1",
            origin=RoomRef(floor=1, zone="Emergency", room="ER-1"),
            destination=RoomRef(floor=2, zone="Surgery", room="S-1"),
            equipment_type="stretcher", priority="urgent",
            requested_at=datetime(2024, 5, 1, 8, 0),
        ),
        TransportationRequest(
            id="R2",
            origin=RoomRef(floor=1, zone="Radiology", room="RAD-1"),
            destination=RoomRef(floor=1, zone="Emergency", room="ER-2"),
            equipment_type="wheelchair", priority="emergency",
            requested_at=datetime(2024, 5, 1, 8, 10),
        ),
    ]


@pytest.fixture
def staff_data():
    return [
        StaffMember(id="S1", name="John Doe", role="Patient Transport",
                    location=Location(floor=2, zone="Surgery", x=400, y=300)),
        StaffMember(id="S2", name="Jane Smith", role="Patient Transport", status="busy",
                    location=Location(floor=1, zone="Emergency", x=150, y=180),
                    current_workload=2, completed_today=5),
        StaffMember(id="S3", name="Sam Lee", role="Patient Transport", status="off-duty",
                    location=Location(floor=1, zone="ICU", x=600, y=450)),
    ]


@pytest.fixture
def equipment_data():
    return [
        TransportEquipment(id="EQ1", type="stretcher", name="Stretcher 1",
                           location=Location(floor=1, zone="Emergency", x=100, y=150),
                           last_maintenance=date(2024, 5, 1)),
        TransportEquipment(id="EQ2", type="wheelchair", name="Wheelchair 1",
                           location=Location(floor=1, zone="Radiology", x=500, y=250),
                           last_maintenance=date(2024, 5, 1)),
        TransportEquipment(id="EQ3", type="stretcher", name="Stretcher 2", status="maintenance",
                           location=Location(floor=1, zone="ICU", x=650, y=450),
                           last_maintenance=date(2024, 4, 1)),
    ]


@pytest.fixture
def seeded_manager(manager, requests_data, staff_data, equipment_data):
    manager.load(requests=requests_data, staff=staff_data, equipment=equipment_data)
    return manager


@pytest.fixture
def system(socketio):
    hospital_system = HospitalSystem(socketio, mode="mock")
    hospital_system.initialize()
    return hospital_system


@pytest.fixture
def client(system, socketio):
    app = Flask(__name__)
    app.testing = True
    HospitalTransportViewer(app, socketio, system)
    return app.test_client()
