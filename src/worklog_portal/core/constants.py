"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

HOURS_PER_DAY = 8

MAX_HOURS_PER_ENTRY = 24
DESCRIPTION_MIN_LENGTH = 10

DEFAULT_SESSION_COOKIE = "JSESSIONID"
PUBLIC_PATHS = ("/login", "/api/auth/login")
UNGUARDED_PREFIXES = ("/api/", "/static/")
UNGUARDED_PATHS = ("/favicon.ico",)

UTILIZATION_THRESHOLDS = (90, 70, 50)
COMPLIANCE_THRESHOLDS = (80, 60)
