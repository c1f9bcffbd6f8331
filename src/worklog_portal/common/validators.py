from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value.strip()) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value.strip()


def require_email(value: Optional[str], field_name: str = "Email") -> str:
    value = (value or "").strip()
    if not _EMAIL_RE.match(value):
        raise ValidationError("Invalid email address")
    return value


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is required")
    if number <= 0:
        raise ValidationError(f"{field_name} is required")
    return number


def require_number_in_range(value, field_name: str, *, minimum: float, maximum: float) -> float:
    """Number with ``minimum < value <= maximum``."""
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is required")
    if not (minimum < number <= maximum):
        raise ValidationError(f"{field_name} must be between {minimum:g} and {maximum:g}")
    return number


def optional_int(value) -> Optional[int]:
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None
