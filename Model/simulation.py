import random

import eventlet

from Model.log_setup import setup_logger


class Simulation:
    def __init__(self, system, socketio, interval=3, rng=None):
        """Periodic motion tick that drifts staff and moving equipment on the floor plan."""
        self.system = system
        self.socketio = socketio
        self.interval = interval
        self.rng = rng or random.Random()
        self.running = False
        self.ticks = 0
        self.logger = setup_logger("Simulation")

    def start(self):
        """Starts the simulation in the background."""
        if self.running:
            return
        self.running = True
        self.logger.info(f"Motion simulation started (every {self.interval}s)")
        eventlet.spawn_n(self._run_loop)

    def stop(self):
        """Stops the simulation loop."""
        self.running = False
        self.logger.info("Motion simulation stopped")

    def is_running(self):
        return self.running

    def tick(self):
        """One motion step, funnelled through the coordinator lock."""
        state = self.system.transport_manager.apply_motion(self.rng)
        self.ticks += 1
        self.socketio.emit("simulation_event", {"type": "motion", "tick": self.ticks, "version": state.version})
        return state

    def _run_loop(self):
        """Main simulation loop."""
        while self.running:
            self.tick()
            eventlet.sleep(self.interval)
