from typing import Any, Dict, List, Literal, Optional, Union

from .base import CamelModel, UtcDatetime
from ..models import Status, TodoCategory, TodoPriority, TodoState


class TodoBase(CamelModel):
    """Fields accepted when writing a todo.

    Input types are deliberately loose: enum values, timestamps and minute
    counts arrive as whatever the client sent and are normalized by
    ``planner.services.todos`` (unknown enum values fall back to defaults).
    """
    title: Optional[str] = None
    description: Optional[str] = None
    labels: Union[List[Any], str, None] = None
    category: Any = None
    priority: Any = None
    state: Any = None
    due_at: Any = None
    started_at: Any = None
    completed_at: Any = None
    canceled_at: Any = None
    estimate_min: Any = None
    spent_min: Any = None
    waiting_on: Optional[str] = None
    parent_id: Optional[str] = None
    sort_order: Any = None
    status: Any = None


class TodoCreate(TodoBase):
    """Schema for creating todos. ``title`` is checked by the service."""
    pass


class TodoUpdate(TodoBase):
    """Schema for partial updates; only fields that were sent are written."""
    pass


class Todo(CamelModel):
    """Complete todo schema with all fields."""
    id: str
    title: str
    description: Optional[str] = None
    labels: List[str] = []
    category: TodoCategory
    priority: TodoPriority
    state: TodoState
    due_at: Optional[UtcDatetime] = None
    started_at: Optional[UtcDatetime] = None
    completed_at: Optional[UtcDatetime] = None
    canceled_at: Optional[UtcDatetime] = None
    estimate_min: Optional[int] = None
    spent_min: Optional[int] = None
    waiting_on: Optional[str] = None
    parent_id: Optional[str] = None
    sort_order: Optional[int] = None
    status: Status
    created_at: UtcDatetime
    updated_at: UtcDatetime


class TodoList(CamelModel):
    """Page of todos echoing the normalized filter."""
    status: Literal["active", "disabled", "all"]
    states: List[TodoState]
    categories: Union[List[TodoCategory], Literal["all"]]
    priorities: Union[List[TodoPriority], Literal["all"]]
    parent_id: Optional[str] = None
    q: str = ""
    due_from: str = ""
    due_to: str = ""
    skip: int
    take: int
    total: int
    items: List[Todo]


class TodoTree(TodoList):
    """Page of root todos plus each root's visible subtasks."""
    subtasks: Dict[str, List[Todo]]


class TodoDeleted(CamelModel):
    success: bool = True
    id: str
