import settings
from Model.hospital_system import HospitalSystem
from Model.log_setup import setup_logger


class HospitalController:
    def __init__(self, socketio, system=None):
        """Builds the hospital system and starts its background motion loop."""
        self.socketio = socketio
        self.system = system or HospitalSystem(socketio)
        self.logger = setup_logger("HospitalController")

    def start(self, with_motion=None):
        self.system.initialize()

        if settings.MOTION_ENABLED if with_motion is None else with_motion:
            self.system.simulation.start()

        self.logger.info(
            f"Loaded {len(self.system.get_staff())} staff and {len(self.system.get_equipment())} equipment units "
            f"({self.system.mode} mode)"
        )

    def stop(self):
        self.system.simulation.stop()
