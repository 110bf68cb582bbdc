from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive_id(value, field_name: str) -> int:
    try:
        as_int = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid") from None
    if as_int <= 0:
        raise ValidationError(f"{field_name} is invalid")
    return as_int


def optional_stripped(value: Optional[str]) -> Optional[str]:
    """Trim a free-text value; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_sort(value: Optional[str], *, allowed: set[str], default: str) -> tuple[str, bool]:
    """Parse ``field-asc`` / ``field-desc``; returns (field, ascending)."""
    field, _, order = (value or default).partition("-")
    if field not in allowed:
        field, _, order = default.partition("-")
    return field, order != "desc"
