import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timewage"),
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))

# Pay policy
WEEKLY_NORMAL_HOURS = float(os.getenv("WEEKLY_NORMAL_HOURS", "40"))
LATE_ROUNDING_MINUTES = int(os.getenv("LATE_ROUNDING_MINUTES", "15"))
EARLY_CHECK_IN_HOURS = float(os.getenv("EARLY_CHECK_IN_HOURS", "3"))
LATE_CHECK_OUT_HOURS = float(os.getenv("LATE_CHECK_OUT_HOURS", "2"))
# date.weekday() of the first day of a payroll week (0 = Monday)
WEEK_START_WEEKDAY = int(os.getenv("WEEK_START_WEEKDAY", "0"))

# If enabled, the bundled schema.sql is applied on startup (CREATE TABLE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
