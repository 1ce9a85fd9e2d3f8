"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

# Monday..Saturday, matching the default shift pattern.
DEFAULT_WORK_WEEKDAYS = frozenset({0, 1, 2, 3, 4, 5})

DEFAULT_LATE_CREDIT = Decimal("1")
DEFAULT_OVERTIME_HOURS_PER_DAY = 8

MONEY_PLACES = Decimal("0.01")
# DECIMAL(12,2) column limit
MAX_AMOUNT = Decimal("9999999999.99")
MAX_NOTE_LENGTH = 500

FLAG_ZERO_SALARY = "zero_salary"
FLAG_NO_WORK_DAYS = "no_work_days"
FLAG_DEFAULT_SCHEDULE = "default_schedule"
