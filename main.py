import eventlet
eventlet.monkey_patch()

from flask import Flask
from flask_socketio import SocketIO

import settings
from Controller.hospital_controller import HospitalController
from View.hospital_transport_viewer import HospitalTransportViewer

app = Flask(__name__)
socketio = SocketIO(app, async_mode="eventlet", cors_allowed_origins=settings.CORS_ALLOWED_ORIGINS)

controller = HospitalController(socketio)
viewer = HospitalTransportViewer(app, socketio, controller.system)

if __name__ == "__main__":
    controller.start()
    print(f"🚀 Patient transport backend running on http://{settings.HOST}:{settings.PORT}")
    socketio.run(app, host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)
