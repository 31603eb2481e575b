import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timewage_test"),
}

TESTING = True
LOG_LEVEL = "WARNING"
LOG_JSON = False

WEEKLY_NORMAL_HOURS = 40
LATE_ROUNDING_MINUTES = 15
EARLY_CHECK_IN_HOURS = 3
LATE_CHECK_OUT_HOURS = 2
WEEK_START_WEEKDAY = 0

AUTO_INIT_DB = False
