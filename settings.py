"""
Runtime settings for the patient transport backend.

Every value can be overridden with an environment variable of the same
name. Defaults run the in-memory mock mode on localhost.
"""
import os

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "5001"))
DEBUG = os.getenv("DEBUG", "0").lower() in {"1", "true", "yes"}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# "mock" keeps everything in local collections, "api" mirrors the REST backend
TRANSPORT_DATA_MODE = os.getenv("TRANSPORT_DATA_MODE", "mock").lower()

TRANSPORT_API_BASE_URL = os.getenv("TRANSPORT_API_BASE_URL", "http://127.0.0.1:8000")
TRANSPORT_API_TOKEN = os.getenv("TRANSPORT_API_TOKEN", "")
TRANSPORT_API_TIMEOUT = float(os.getenv("TRANSPORT_API_TIMEOUT", "10"))

MOTION_ENABLED = os.getenv("MOTION_ENABLED", "1").lower() in {"1", "true", "yes"}
MOTION_INTERVAL = float(os.getenv("MOTION_INTERVAL", "3"))

RELEASE_ON_CANCEL = os.getenv("RELEASE_ON_CANCEL", "0").lower() in {"1", "true", "yes"}

CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
