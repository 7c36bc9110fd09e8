"""Request value validators.

Each validator either returns the cleaned value or raises
:class:`~exercise_tracker.errors.ValidationError`. An absent value is ``None``
or an empty string.
"""

import math
import re
from datetime import date

from .errors import ValidationError

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

MAX_SQLITE_INT = 2**63 - 1

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000

USERNAME_REQUIRED = "Username is required"
DATE_FORMAT_MESSAGE = "Date must be in YYYY-MM-DD format"
DATE_INVALID_MESSAGE = "Invalid date, must be a valid date in YYYY-MM-DD format"
DESCRIPTION_MESSAGE = "Description is required and must be a non-empty string"
DURATION_MESSAGE = "Duration is required and must be a positive integer"
LIMIT_MESSAGE = "Limit must be a positive integer and no more than 1000"


def _is_absent(raw) -> bool:
    return raw is None or raw == ""


def _to_number(raw) -> int | float | None:
    """Interpret ``raw`` as a finite number, or return None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return None
    else:
        return None
    # Integers past SQLite's 64-bit range are stored as REAL
    if isinstance(value, int) and abs(value) > MAX_SQLITE_INT:
        try:
            value = float(value)
        except OverflowError:
            return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def validate_username(raw) -> str:
    """Return the trimmed username."""
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError(ValidationError.MISSING_FIELD, USERNAME_REQUIRED)
    return raw.strip()


def validate_date(raw) -> date:
    """Parse a ``YYYY-MM-DD`` date, defaulting to today when absent."""
    if _is_absent(raw):
        return date.today()
    if not isinstance(raw, str) or not DATE_PATTERN.fullmatch(raw):
        raise ValidationError(ValidationError.INVALID_FORMAT, DATE_FORMAT_MESSAGE)
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationError(ValidationError.INVALID_DATE, DATE_INVALID_MESSAGE)


def validate_description(raw) -> str:
    """Return the trimmed description."""
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError(ValidationError.MISSING_FIELD, DESCRIPTION_MESSAGE)
    return raw.strip()


def validate_duration(raw) -> int | float:
    """Return the duration in minutes.

    Only positivity is checked; ``12.5`` is accepted.
    """
    value = _to_number(raw)
    if value is None or value <= 0:
        raise ValidationError(ValidationError.INVALID_VALUE, DURATION_MESSAGE)
    return value


def validate_limit(raw) -> int:
    """Return the result limit, defaulting to 100 when absent."""
    if _is_absent(raw):
        return DEFAULT_LIMIT
    value = _to_number(raw)
    if value is None or value <= 0 or value > MAX_LIMIT:
        raise ValidationError(ValidationError.INVALID_VALUE, LIMIT_MESSAGE)
    limit = int(value)
    if limit < 1:
        raise ValidationError(ValidationError.INVALID_VALUE, LIMIT_MESSAGE)
    return limit
