from __future__ import annotations

import re
from datetime import date
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import format_iso_date, parse_iso_date

E = TypeVar("E", bound=Enum)

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any, field_name: str) -> Optional[str]:
    """Empty strings and None both mean "no value"."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    value = value.strip()
    return value or None


def require_iso_date(value: Any, field_name: str) -> str:
    if isinstance(value, date):
        return format_iso_date(value)
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")
    try:
        return format_iso_date(parse_iso_date(value.strip()))
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)") from None


def require_time(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not _TIME_RE.match(value.strip()):
        raise ValidationError(f"{field_name} must be a time (HH:MM)")
    return value.strip()


def optional_time(value: Any, field_name: str) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_time(value, field_name)


def require_weekday(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("weekday must be an integer between 0 (Sunday) and 6 (Saturday)")
    try:
        weekday = int(value)
    except (TypeError, ValueError):
        raise ValidationError("weekday must be an integer between 0 (Sunday) and 6 (Saturday)") from None
    if not 0 <= weekday <= 6:
        raise ValidationError("weekday must be an integer between 0 (Sunday) and 6 (Saturday)")
    return weekday


def optional_enum(value: Any, enum_type: Type[E], field_name: str) -> Optional[E]:
    if value is None or value == "":
        return None
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_type)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None


def require_time_order(start_time: str, end_time: str) -> None:
    # HH:MM strings compare correctly as text.
    if end_time < start_time:
        raise ValidationError("endTime must not be earlier than startTime")


def normalize_completed(value: Any) -> str:
    if value is None or value == "":
        return "false"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower()
    raise ValidationError("completed must be 'true' or 'false'")


def normalize_code(code: Optional[str]) -> str:
    """Key used for subject code uniqueness: trimmed and case-folded."""
    return (code or "").strip().casefold()
