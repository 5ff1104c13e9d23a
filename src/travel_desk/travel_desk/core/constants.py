"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 1
DEFAULT_LIST_LIMIT = 500
LANDING_ENDPOINT = "index"
DATE_FORMAT = "%Y-%m-%d"
