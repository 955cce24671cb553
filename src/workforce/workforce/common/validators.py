from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str, max_len: Optional[int] = None) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return require_max_length(value.strip(), field_name, max_len)


def require_max_length(value: str, field_name: str, max_len: Optional[int]) -> str:
    if max_len is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def optional_text(value: Any, field_name: str, max_len: Optional[int] = None) -> Optional[str]:
    """Stripped text, or None for a missing/blank value."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return require_max_length(value.strip(), field_name, max_len) or None


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Any, field_name: str = "Email", max_len: Optional[int] = None) -> str:
    value = require_non_empty(value, field_name, max_len).lower()
    local, _, domain = value.partition("@")
    if not local or "." not in domain:
        raise ValidationError(f"{field_name} is not a valid address")
    return value


def require_non_negative_amount(value: Any, field_name: str, maximum: Optional[Decimal] = None) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field_name} must be zero or greater")
    if maximum is not None and amount > maximum:
        raise ValidationError(f"{field_name} must be at most {maximum}")
    return amount


def require_id(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name} format")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name} format")
    if parsed <= 0:
        raise ValidationError(f"Invalid {field_name} format")
    return parsed
