"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TREND_WINDOW_MONTHS = 12
ALLOWED_TREND_WINDOWS = (6, 12)

ALL = "all"
UNASSIGNED_DEPARTMENT = "Unassigned"

# (label, inclusive upper bound); None means unbounded.
SALARY_BUCKETS = (
    ("0-1000", 1000),
    ("1001-2000", 2000),
    ("2001-3000", 3000),
    ("3001-4000", 4000),
    ("4001+", None),
)

SLIP_KEY_PREFIX = "salary_slips"
DEFAULT_COMPANY_NAME = "COMPANY NAME"
CURRENCY_CODE = "USD"
