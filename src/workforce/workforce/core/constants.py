"""Constants and defaults.

Pay rules are fixed: 8-hour workday, 1.5x overtime, no deductions.
"""

from decimal import Decimal

STANDARD_WORKDAY_HOURS = Decimal("8")
OVERTIME_MULTIPLIER = Decimal("1.5")
DEFAULT_DEDUCTIONS = Decimal("0")
MONEY_PLACES = Decimal("0.01")
HOURS_PLACES = Decimal("0.01")

# ASCII digits only: "\d" would also accept other scripts' digits.
PERIOD_FORMAT = r"[0-9]{4}-[0-9]{2}"
MIN_PASSWORD_LENGTH = 6
ACTIVE_REPORTS_PLACEHOLDER = 0

# Column limits of database/schema.sql
MAX_NAME_LENGTH = 120
MAX_EMAIL_LENGTH = 190
MAX_LEAVE_TYPE_LENGTH = 60
MAX_LOCATION_LENGTH = 255
MAX_REASON_LENGTH = 2000
MAX_HOURLY_WAGE = Decimal("99999999.99")  # DECIMAL(10, 2)
MAX_SESSION_HOURS = Decimal("9999.99")  # DECIMAL(6, 2)
MAX_PAY_AMOUNT = Decimal("99999999999999.99")  # DECIMAL(16, 2)
