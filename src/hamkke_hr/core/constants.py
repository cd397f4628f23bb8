"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_REPORT_DAYS = 14

# Clock-outs past this time are capped when aggregating work hours.
WORKDAY_CUTOFF = time(18, 0)

# Clock-ins inside [start, end] (minute precision) are stored as NORMALIZED_CLOCK_IN.
GRACE_WINDOW_START = time(8, 0)
GRACE_WINDOW_END = time(9, 0)
NORMALIZED_CLOCK_IN = time(9, 0)

# A clock action before this time closes yesterday's open record.
MISSED_CLOCK_OUT_THRESHOLD = time(9, 0)
