from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import HOURS_PLACES, MONEY_PLACES


def round_money(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def round_hours(hours: Decimal) -> Decimal:
    return Decimal(hours).quantize(HOURS_PLACES, rounding=ROUND_HALF_UP)
