"""Small validation and nullable-value helpers."""

from __future__ import annotations

import re
from datetime import date, datetime

EMAIL_PATTERN = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9.-]+$"
EMAIL_REGEX = re.compile(EMAIL_PATTERN)

_INT_REGEX = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


def is_null(s: str) -> bool:
    """True when the string is empty."""
    return len(s) == 0


def is_null_string(s: str | None) -> bool:
    """True when the value is missing or empty."""
    return s is None or is_null(s)


def is_email(s: str) -> bool:
    """True when the string looks like an e-mail address."""
    return EMAIL_REGEX.fullmatch(s) is not None


def is_int(s: str) -> int | None:
    """Return the 64-bit integer written in ``s``, or None if it is not one."""
    if _INT_REGEX.fullmatch(s) is None:
        return None
    value = int(s)
    if not _INT_MIN <= value <= _INT_MAX:
        return None
    return value


def is_int_between(s: str, minimum: int, maximum: int) -> int | None:
    """Return the integer in ``s`` if it lies within the bounds, else None."""
    value = is_int(s)
    if value is not None and minimum <= value <= maximum:
        return value
    return None


def is_length(s: str, minimum: int, maximum: int) -> bool:
    """True when the number of characters lies within the bounds."""
    return minimum <= len(s) <= maximum


def is_timezone(zone: str) -> bool:
    """True when the zone looks like an Area/Location name."""
    return not is_null(zone) and "/" in zone


def to_null_string(s: str) -> str | None:
    """Map an empty string to None."""
    return s if s != "" else None


def to_null_time(t: date | datetime | None) -> date | datetime | None:
    """Map a missing or minimum (zero) time to None."""
    if t is None:
        return None
    if isinstance(t, datetime):
        is_zero = t.replace(tzinfo=None) == datetime.min
    else:
        is_zero = t == date.min
    return None if is_zero else t


def to_null_float(f: float) -> float | None:
    """Map 0.0 to None."""
    return f if f != 0.0 else None