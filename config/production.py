import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hrms"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

OFFICE_LOCATION_RADIUS = float(os.getenv("OFFICE_LOCATION_RADIUS", "100"))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
SELFIE_REQUIRED = bool(int(os.getenv("SELFIE_REQUIRED", "0")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
