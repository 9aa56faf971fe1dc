from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .money import MONEY_MAX

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_month(value: Any, field_name: str = "Month") -> int:
    month = parse_int(value, field_name)
    if month < 1 or month > 12:
        raise ValidationError(f"{field_name} must be between 1 and 12")
    return month


def require_year(value: Any, *, min_year: int, max_year: int, field_name: str = "Year") -> int:
    year = parse_int(value, field_name)
    if year < min_year or year > max_year:
        raise ValidationError(f"Invalid {field_name.lower()}")
    return year


def parse_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name.lower()}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name.lower()}")


def parse_decimal(value: Any, field_name: str, *, default: Decimal = Decimal("0")) -> Decimal:
    """Parse a JSON number/string into Decimal; None and "" fall back to default."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name.lower()}")
    try:
        # via str() so 0.1 parses as Decimal("0.1")
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid {field_name.lower()}")
    if not result.is_finite():
        raise ValidationError(f"Invalid {field_name.lower()}")
    return result


def require_non_negative(value: Decimal, field_name: str) -> Decimal:
    if value < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return value


def require_money_range(value: Decimal, field_name: str, *, maximum: Decimal = MONEY_MAX) -> Decimal:
    if abs(value) > maximum:
        raise ValidationError(f"{field_name} must not exceed {maximum}")
    return value


def parse_bool(value: Any, field_name: str) -> bool:
    """Only real JSON booleans; "false", 0 and null are rejected."""
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value


def optional_reference(value: Any, field_name: str) -> Optional[int]:
    """Normalize an optional foreign key: 0, "" and None mean no reference."""
    if value is None or value == "":
        return None
    ref = parse_int(value, field_name)
    return ref if ref > 0 else None


def parse_enum(enum_cls: Type[E], value: Any, message: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(message)
