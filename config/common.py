import os


def db_config_from_env(prefix: str = "DB_", *, default_user: str = "kiosk") -> dict:
    """mysql-connector connection dict read from ``<prefix>HOST``, ``<prefix>PORT`` and friends."""
    return {
        "host": os.getenv(f"{prefix}HOST", os.getenv("DB_HOST", "localhost")),
        "port": int(os.getenv(f"{prefix}PORT", os.getenv("DB_PORT", "3306"))),
        "user": os.getenv(f"{prefix}USER", default_user),
        "password": os.getenv(f"{prefix}PASSWORD", ""),
        "database": os.getenv(f"{prefix}NAME", os.getenv("DB_NAME", "attendance_kiosk")),
    }


def admin_db_config_from_env() -> dict | None:
    # Without ADMIN_DB_USER the admin side reuses the kiosk credentials.
    if not os.getenv("ADMIN_DB_USER"):
        return None
    return db_config_from_env("ADMIN_DB_", default_user="root")


SCHEDULE_TIMEZONE = os.getenv("SCHEDULE_TIMEZONE", "UTC")
FACE_MATCH_THRESHOLD = float(os.getenv("FACE_MATCH_THRESHOLD", "0.6"))
FACE_DESCRIPTOR_LENGTH = int(os.getenv("FACE_DESCRIPTOR_LENGTH", "128"))
CHECKIN_RESET_SECONDS = int(os.getenv("CHECKIN_RESET_SECONDS", "4"))
