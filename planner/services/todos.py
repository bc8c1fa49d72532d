"""Todo persistence operations shared by the HTTP routers and the fan-out."""
from typing import Any, Dict, List, Optional, Tuple

from sqlmodel import Session

from ..models import Status, Todo, TodoCategory, TodoPriority, TodoState, parse_enum, utcnow
from .normalize import (
    FieldError,
    normalize_labels,
    optional_text,
    parse_int,
    parse_non_negative_int,
    parse_timestamp,
)
from .query import FilterSpec, build_query

TIMESTAMP_FIELDS = ("due_at", "started_at", "completed_at", "canceled_at")
MINUTE_FIELDS = ("estimate_min", "spent_min")


def normalize_todo_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize the fields present in ``data`` into column values.

    Only keys present in ``data`` are returned, so the same function serves
    full creates and partial updates. Raises ``FieldError`` on invalid input.
    """
    values: Dict[str, Any] = {}
    for name, raw in data.items():
        if name == "title":
            title = str(raw if raw is not None else "").strip()
            if not title:
                raise FieldError("Title is required")
            values[name] = title
        elif name == "labels":
            values[name] = normalize_labels(raw)
        elif name == "category":
            values[name] = parse_enum(TodoCategory, raw, TodoCategory.Other)
        elif name == "priority":
            values[name] = parse_enum(TodoPriority, raw, TodoPriority.normal)
        elif name == "state":
            values[name] = parse_enum(TodoState, raw, TodoState.todo)
        elif name == "status":
            values[name] = parse_enum(Status, raw, Status.active)
        elif name in TIMESTAMP_FIELDS:
            values[name] = parse_timestamp(raw, name)
        elif name in MINUTE_FIELDS:
            values[name] = parse_non_negative_int(raw, name)
        elif name == "sort_order":
            values[name] = parse_int(raw, name)
        elif name in ("description", "waiting_on", "parent_id"):
            values[name] = optional_text(raw)
    return values


def list_todos(db: Session, spec: FilterSpec) -> Tuple[List[Todo], int]:
    """Return the requested page and the total number of matching rows."""
    query = build_query(spec)
    items = list(db.exec(query.select()).all())
    total = db.exec(query.count()).one()
    return items, total


def get_todo(db: Session, todo_id: str) -> Optional[Todo]:
    return db.get(Todo, todo_id)


def create_todo(db: Session, data: Dict[str, Any]) -> Todo:
    """Create a todo; ``data`` must contain every writable field (None = unset)."""
    todo = Todo(**normalize_todo_fields(data))
    db.add(todo)
    db.commit()
    db.refresh(todo)
    return todo


def update_todo(db: Session, todo: Todo, changes: Dict[str, Any]) -> Todo:
    """Write only the fields present in ``changes``. Last write wins."""
    for name, value in normalize_todo_fields(changes).items():
        setattr(todo, name, value)
    todo.updated_at = utcnow()

    db.add(todo)
    db.commit()
    db.refresh(todo)
    return todo


def soft_delete_todo(db: Session, todo: Todo) -> Todo:
    """Mark the todo disabled; its subtasks keep their own status."""
    todo.status = Status.disabled
    todo.updated_at = utcnow()

    db.add(todo)
    db.commit()
    db.refresh(todo)
    return todo
