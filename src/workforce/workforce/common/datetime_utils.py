from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timezone
from typing import Any

from ..core.constants import PERIOD_FORMAT
from ..core.exceptions import ValidationError

_PERIOD_RE = re.compile(PERIOD_FORMAT, re.ASCII)
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}", re.ASCII)


def parse_iso_date(value: Any) -> date:
    """Parse YYYY-MM-DD string into date."""
    text = value.strip() if isinstance(value, str) else ""
    if not _ISO_DATE_RE.fullmatch(text):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def now_utc() -> datetime:
    """Current UTC time as a naive datetime, truncated to whole seconds like the DATETIME columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)


def today_utc() -> date:
    return now_utc().date()


def validate_period(value: str) -> str:
    """Check a ``YYYY-MM`` token and return it unchanged."""
    if not isinstance(value, str) or not _PERIOD_RE.fullmatch(value):
        raise ValidationError("Period must be in YYYY-MM format")
    month = int(value[5:7])
    if not 1 <= month <= 12:
        raise ValidationError("Period month must be between 01 and 12")
    return value


def period_bounds(period: str) -> tuple[date, date]:
    """First and last calendar day of the month named by ``period`` (inclusive)."""
    validate_period(period)
    year, month = int(period[:4]), int(period[5:7])
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def period_of(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"
