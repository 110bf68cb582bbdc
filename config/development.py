import os

from .common import (
    CHECKIN_RESET_SECONDS,
    FACE_DESCRIPTOR_LENGTH,
    FACE_MATCH_THRESHOLD,
    SCHEDULE_TIMEZONE,
    admin_db_config_from_env,
    db_config_from_env,
)

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env(default_user="root")
ADMIN_DB_CONFIG = admin_db_config_from_env()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
