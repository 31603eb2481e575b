"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WEEKLY_NORMAL_HOURS = 40
DEFAULT_LATE_ROUNDING_MINUTES = 15
DEFAULT_EARLY_CHECK_IN_HOURS = 3
DEFAULT_LATE_CHECK_OUT_HOURS = 2
DAYS_PER_WEEK = 7
# date.weekday() of the first day of a payroll week; 0 is Monday.
DEFAULT_WEEK_START_WEEKDAY = 0
