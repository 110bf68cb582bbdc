import os

from .common import (
    CHECKIN_RESET_SECONDS,
    FACE_DESCRIPTOR_LENGTH,
    FACE_MATCH_THRESHOLD,
    SCHEDULE_TIMEZONE,
    admin_db_config_from_env,
    db_config_from_env,
)

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()
ADMIN_DB_CONFIG = admin_db_config_from_env()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
