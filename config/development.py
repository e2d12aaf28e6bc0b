import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrms"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Meters; used when an organization has no radius of its own
OFFICE_LOCATION_RADIUS = float(os.getenv("OFFICE_LOCATION_RADIUS", "100"))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
SELFIE_REQUIRED = bool(int(os.getenv("SELFIE_REQUIRED", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
