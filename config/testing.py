import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrms_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

OFFICE_LOCATION_RADIUS = 100.0
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
SELFIE_REQUIRED = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
