from __future__ import annotations

from ..core.exceptions import ValidationError


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return number


def require_positive_float(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return number


def require_ratio(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if not 0.0 <= number <= 1.0:
        raise ValidationError(f"{field_name} must be between 0 and 1")
    return number
