import os

from .common import (
    CHECKIN_RESET_SECONDS,
    FACE_DESCRIPTOR_LENGTH,
    FACE_MATCH_THRESHOLD,
    admin_db_config_from_env,
    db_config_from_env,
)

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_user="root")
ADMIN_DB_CONFIG = admin_db_config_from_env()

SCHEDULE_TIMEZONE = "UTC"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
