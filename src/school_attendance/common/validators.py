from __future__ import annotations

import re
from typing import Iterable

from ..core.exceptions import ValidationError

_GMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@gmail\.com$")
_SCHOOL_ID_RE = re.compile(r"^[0-9]{4}-[0-9]{4}$")
_ACADEMIC_YEAR_RE = re.compile(r"^(\d{4})-(\d{4})$")


def as_text(value) -> str:
    """Request field as stripped text; JSON numbers and null are accepted."""
    return "" if value is None else str(value).strip()


def require_non_empty(value: str | None, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_choice(value: str | None, field_name: str, choices: Iterable[str]) -> str:
    allowed = list(choices)
    value = as_text(value)
    if value not in allowed:
        raise ValidationError(f"{field_name} must be one of: {', '.join(allowed)}")
    return value


def require_int_range(value, field_name: str, low: int, high: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def require_gmail(value: str | None) -> str:
    value = require_non_empty(value, "Gmail address").lower()
    if not _GMAIL_RE.match(value):
        raise ValidationError("Please provide a valid Gmail address")
    return value


def require_school_id(value: str | None, field_name: str = "School ID") -> str:
    value = require_non_empty(value, field_name).upper()
    if not _SCHOOL_ID_RE.match(value):
        raise ValidationError(f"{field_name} must follow the format: 0000-0000")
    return value


def require_academic_year(value: str | None) -> str:
    value = require_non_empty(value, "Academic year")
    m = _ACADEMIC_YEAR_RE.match(value)
    if not m:
        raise ValidationError("Academic year must be in format: YYYY-YYYY (e.g., 2023-2024)")
    if int(m.group(2)) != int(m.group(1)) + 1:
        raise ValidationError("End year must be the next year after start year")
    return value
