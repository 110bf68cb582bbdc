"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date

# Recurring sessions store only a time of day; the date part is this placeholder.
PLACEHOLDER_DATE = date(1970, 1, 1)

DEFAULT_SCHEDULE_TIMEZONE = "UTC"
DEFAULT_FACE_MATCH_THRESHOLD = 0.6
DEFAULT_FACE_DESCRIPTOR_LENGTH = 128
DEFAULT_CHECKIN_RESET_SECONDS = 4
DEFAULT_HISTORY_LIMIT = 50

DAYS_OF_WEEK = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
