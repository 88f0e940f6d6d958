"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE_SIZE = 10
DEFAULT_RECENT_LIMIT = 10
DEFAULT_TOKEN_MAX_AGE_SECONDS = 7 * 24 * 3600
STANDARD_DAY_HOURS = 8
SECONDS_PER_DAY = 24 * 3600
