from .common import Status, UtcDateTime, as_utc, parse_enum, utcnow
from .todo import Todo, TodoCategory, TodoPriority, TodoState
from .work_session import WorkSession
from .health_log import HealthLog

# Export all models for easy importing
__all__ = [
    "Status",
    "parse_enum",
    "utcnow",
    "as_utc",
    "UtcDateTime",
    "Todo",
    "TodoCategory",
    "TodoPriority",
    "TodoState",
    "WorkSession",
    "HealthLog",
]
