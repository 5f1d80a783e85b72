"""Application constants."""

# Auth
MIN_PASSWORD_LENGTH = 8

# Pagination
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
RECENT_LOGS_LIMIT = 50
METRICS_HISTORY_DEFAULT = 30

# Catalog search
MIN_SEARCH_LENGTH = 2
SEARCH_RESULT_LIMIT = 20

# Progress stats windows (?period=)
STATS_PERIOD_DAYS = {"7d": 7, "30d": 30, "90d": 90}
DEFAULT_STATS_PERIOD = "30d"

# Workouts started before this hour (UTC) count towards "early bird"
EARLY_WORKOUT_HOUR = 8

# Subscription payments shown on /subscriptions/me
RECENT_PAYMENTS_LIMIT = 5
