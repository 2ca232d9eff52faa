"""Policy constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_FLEX_ALLOWANCE_MINUTES = 15
DEFAULT_TOTAL_WORK_HOURS = 8.0
DEFAULT_HISTORY_LIMIT = 15

# Flexible days: above 105% of expected hours is overtime, below 95% is undertime.
OVERTIME_FACTOR = 1.05
UNDERTIME_FACTOR = 0.95

HALF_DAY_MAX_HOURS = 4
SHORT_DAY_FACTOR = 0.6
