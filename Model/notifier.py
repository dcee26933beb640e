from Model.log_setup import setup_logger


class Notifier:
    """Fire-and-forget user notifications pushed over Socket.IO and mirrored to the log."""

    def __init__(self, socketio):
        self.socketio = socketio
        self.logger = setup_logger("Notifier")

    def success(self, message):
        self._emit("success", message)

    def error(self, message):
        self._emit("error", message)

    def info(self, message):
        self._emit("info", message)

    def state_changed(self, state):
        self.socketio.emit("state_update", {"version": state.version})

    def _emit(self, level, message):
        if level == "error":
            self.logger.warning(message)
        else:
            self.logger.info(message)
        self.socketio.emit("notification", {"level": level, "message": message})
