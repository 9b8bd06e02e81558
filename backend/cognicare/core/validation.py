"""Input Validation — pure predicates for request fields checked before any DB call.

Invariants:
    - Pure functions, no IO, no logging
    - Predicates never raise; require_* helpers raise RequestDataError with the given message
    - Dates are checked against the real calendar (2024-02-30 is rejected)

Design Decisions:
    - Regex + datetime.strptime over a validation library: the formats are fixed
      strings handed straight to PostgreSQL casts
"""

import re
from datetime import datetime
from typing import Any
from uuid import UUID

from cognicare.core.errors import RequestDataError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LOOSE_EMAIL_RE = re.compile(r".+@.+\..+")

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def is_blank(value: Any) -> bool:
    """True for None, non-strings and whitespace-only strings."""
    return not isinstance(value, str) or not value.strip()


def is_valid_uuid(value: Any) -> bool:
    if isinstance(value, UUID):
        return True
    if not isinstance(value, str):
        return False
    try:
        parsed = UUID(value)
    except ValueError:
        return False
    # UUID() also takes braces, urn: prefixes and bare hex; only the hyphenated form passes
    return str(parsed) == value.lower()


def _matches_format(value: Any, fmt: str, pattern: str) -> bool:
    if not isinstance(value, str) or not re.fullmatch(pattern, value):
        return False
    try:
        datetime.strptime(value, fmt)
    except ValueError:
        return False
    return True


def is_valid_date(value: Any) -> bool:
    """YYYY-MM-DD and a real calendar day."""
    return _matches_format(value, DATE_FORMAT, r"\d{4}-\d{2}-\d{2}")


def is_valid_datetime(value: Any) -> bool:
    """YYYY-MM-DD HH:MM:SS."""
    return _matches_format(
        value, DATETIME_FORMAT, r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}",
    )


def is_valid_email(value: Any, strict: bool = True) -> bool:
    """Strict form rejects whitespace; loose form is the student registration check."""
    if not isinstance(value, str):
        return False
    pattern = _EMAIL_RE if strict else _LOOSE_EMAIL_RE
    return bool(pattern.fullmatch(value.strip() if strict else value))


def is_json_object(value: Any) -> bool:
    """A JSON object (dict), not an array or scalar."""
    return isinstance(value, dict)


def contains_only_text(items: list) -> bool:
    """Every item is a non-blank string."""
    return all(not is_blank(item) for item in items)


def is_non_empty_text_list(value: Any) -> bool:
    """Non-empty list whose items are all non-blank strings."""
    return isinstance(value, list) and len(value) > 0 and contains_only_text(value)


def parse_datetime(value: Any) -> datetime | None:
    """datetime for 'YYYY-MM-DD', 'YYYY-MM-DD HH:MM:SS' or ISO 8601; None if unparseable.

    asyncpg binds DATE and TIMESTAMP parameters from datetime objects only,
    so every date string is converted before it reaches a repository.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def require_text(value: Any, message: str, field: str | None = None) -> str:
    """Return the stripped string or raise RequestDataError."""
    if is_blank(value):
        raise RequestDataError(message, field)
    return value.strip()


def require_uuid(value: Any, message: str, field: str | None = None) -> str:
    if not is_valid_uuid(value):
        raise RequestDataError(message, field)
    return str(value)
