"""Coercion of loosely-typed client input into column values.

Every helper either returns a normalized value or raises ``FieldError`` with
a message that is safe to show to the client.
"""
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional
from zoneinfo import ZoneInfo

from ..config import APP_TIMEZONE


class FieldError(ValueError):
    """A client-supplied field could not be normalized."""


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_timestamp(value: Any, field: str) -> Optional[datetime]:
    """ISO-8601 date or datetime -> aware UTC datetime (None stays None).

    Values without an offset are taken as UTC.
    """
    if _blank(value):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise FieldError(f"Invalid {field}")
    else:
        raise FieldError(f"Invalid {field}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_calendar_date(value: Any, field: str = "date") -> date:
    """Strict ``YYYY-MM-DD`` parsing."""
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise FieldError(f"Invalid {field}, expected YYYY-MM-DD")


def parse_int(value: Any, field: str) -> Optional[int]:
    if _blank(value):
        return None
    if isinstance(value, bool):
        raise FieldError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise FieldError(f"{field} must be an integer")


def parse_non_negative_int(value: Any, field: str) -> Optional[int]:
    number = parse_int(value, field)
    if number is not None and number < 0:
        raise FieldError(f"{field} must not be negative")
    return number


def parse_decimal(value: Any, field: str, places: str = "0.01") -> Optional[Decimal]:
    if _blank(value):
        return None
    if isinstance(value, bool):
        raise FieldError(f"{field} must be a number")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise FieldError(f"{field} must be a number")
    if not number.is_finite():
        raise FieldError(f"{field} must be a number")
    return number.quantize(Decimal(places))


def normalize_labels(value: Any) -> List[str]:
    """Accept ``"a, b"`` or ``["a", "b"]``; trim, drop blanks, de-duplicate."""
    if isinstance(value, str):
        raw = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        raw = [str(item) for item in value if item is not None]
    else:
        return []

    labels: List[str] = []
    for item in raw:
        label = item.strip()
        if label and label not in labels:
            labels.append(label)
    return labels


def optional_text(value: Any) -> Optional[str]:
    """Empty strings are stored as NULL."""
    if _blank(value):
        return None
    return str(value)


def local_today() -> str:
    """Today's calendar date in the configured timezone, as ``YYYY-MM-DD``."""
    return datetime.now(ZoneInfo(APP_TIMEZONE)).date().isoformat()
