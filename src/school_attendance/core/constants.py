"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

UNKNOWN_COURSE_NAME = "Unknown Course"
UNKNOWN_COURSE_CODE = "Unknown"

DEFAULT_STATUS_RESET_INTERVAL_SECONDS = 60
DEFAULT_QR_BOX_SIZE = 10

MAX_PERCENTAGE = 100
