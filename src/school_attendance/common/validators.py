from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value, field_name: str) -> str:
    # JSON may carry numbers where text is expected (document numbers, titles).
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"{field_name} is required")
    return text


def require_positive_int(value, field_name: str) -> int:
    number = require_int(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return number


def require_int(value, field_name: str, *, minimum: Optional[int] = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field_name} must be at least {minimum}")
    return number


def optional_text(value: Optional[str]) -> Optional[str]:
    """Blank strings become None (stored as NULL)."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None
