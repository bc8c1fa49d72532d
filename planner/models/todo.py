from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import List, Optional
from uuid import uuid4
import enum

from .common import Status, UtcDateTime, utcnow


class TodoCategory(str, enum.Enum):
    Ainka = "Ainka"
    Kuku = "Kuku"
    Freelancer = "Freelancer"
    Personal = "Personal"
    Learning = "Learning"
    Other = "Other"


class TodoPriority(str, enum.Enum):
    low = "low"
    normal = "normal"
    high = "high"
    urgent = "urgent"
    critical = "critical"


class TodoState(str, enum.Enum):
    todo = "todo"
    in_progress = "in_progress"
    waiting = "waiting"
    blocked = "blocked"
    done = "done"
    canceled = "canceled"
    archived = "archived"


class Todo(SQLModel, table=True):
    """Todo item, either a root (no parent) or a subtask of another todo.

    ``parent_id`` is not a foreign key; referential integrity is left to the
    store owner.
    """
    __tablename__ = "todos"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str
    description: Optional[str] = None
    labels: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    category: TodoCategory = Field(default=TodoCategory.Other, index=True)
    priority: TodoPriority = Field(default=TodoPriority.normal, index=True)
    state: TodoState = Field(default=TodoState.todo, index=True)

    due_at: Optional[datetime] = Field(default=None, index=True, sa_type=UtcDateTime)
    started_at: Optional[datetime] = Field(default=None, sa_type=UtcDateTime)
    completed_at: Optional[datetime] = Field(default=None, sa_type=UtcDateTime)
    canceled_at: Optional[datetime] = Field(default=None, sa_type=UtcDateTime)

    estimate_min: Optional[int] = None
    spent_min: Optional[int] = None
    waiting_on: Optional[str] = None

    parent_id: Optional[str] = Field(default=None, index=True)
    sort_order: Optional[int] = None

    status: Status = Field(default=Status.active, index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True, sa_type=UtcDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
