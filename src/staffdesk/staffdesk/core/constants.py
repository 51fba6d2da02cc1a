"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_SESSION_DAYS = 30
DEFAULT_LIST_LIMIT = 500
MIN_PASSWORD_LENGTH = 6
DEFAULT_AUTO_PUNCH_OUT_TIME = time(23, 59)

# Python's weekday(): Monday == 0 ... Sunday == 6
SUNDAY = 6
