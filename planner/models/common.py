from datetime import datetime, timezone
from typing import Any, Optional, Type, TypeVar
import enum

from sqlalchemy import DateTime

E = TypeVar("E", bound=enum.Enum)

# Column type for every timestamp; values are timezone-aware UTC.
UtcDateTime = DateTime(timezone=True)


class Status(str, enum.Enum):
    """Soft-delete flag shared by every table."""
    active = "active"
    disabled = "disabled"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware UTC view of a stored timestamp.

    SQLite hands timestamps back without an offset; they were written as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_enum(enum_cls: Type[E], value: Any, default: Optional[E] = None) -> Optional[E]:
    """Parse-or-default coercion from raw input to an enum member.

    Matching is by exact value. Anything unrecognized (wrong case, wrong
    type, None) yields ``default`` instead of raising.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            return default
    return default
