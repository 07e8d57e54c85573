"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_HOURS = 8
TOKEN_ALGORITHM = "HS256"
MIN_PASSWORD_LENGTH = 6
DATE_FORMAT = "%Y-%m-%d"
