"""Filter specification for todo listings and its translation to SQL.

``parse_filter_spec`` turns raw query-string values into a ``FilterSpec``;
malformed values are coerced to defaults and unknown enum values are
dropped, never rejected. ``build_query`` maps a spec to a ``TodoQuery``
(predicate, sort and page) that the caller executes on a session.
"""
import json
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timezone
from typing import Any, List, Mapping, Optional, Tuple, Type

from sqlalchemy import String, cast, func, or_
from sqlmodel import select

from ..models import Status, Todo, TodoCategory, TodoPriority, TodoState, parse_enum
from .normalize import FieldError, parse_calendar_date

ROOT_SENTINEL = "__root__"
ALL = "all"

DEFAULT_TAKE = 100
MAX_TAKE = 200

ORDER_COLUMNS = {
    "dueAt": Todo.due_at,
    "createdAt": Todo.created_at,
    "updatedAt": Todo.updated_at,
}
DEFAULT_ORDER_FIELD = "dueAt"
DEFAULT_ORDER_DIR = "asc"

STATUS_FILTERS = ("active", "disabled", ALL)

_START_OF_DAY = time.min.replace(tzinfo=timezone.utc)
_END_OF_DAY = time(23, 59, 59, 999000, tzinfo=timezone.utc)


@dataclass(frozen=True)
class FilterSpec:
    """Normalized listing parameters.

    Empty ``states``/``categories``/``priorities`` mean "no filter".
    ``parent_scope`` is ``"root"``, ``"children-of:<id>"`` or None.
    """
    status: str = "active"
    states: Tuple[TodoState, ...] = ()
    categories: Tuple[TodoCategory, ...] = ()
    priorities: Tuple[TodoPriority, ...] = ()
    parent_scope: Optional[str] = None
    search_text: str = ""
    due_from: Optional[date] = None
    due_to: Optional[date] = None
    skip: int = 0
    take: int = DEFAULT_TAKE
    order_field: str = DEFAULT_ORDER_FIELD
    order_dir: str = DEFAULT_ORDER_DIR

    @property
    def parent_id(self) -> Optional[str]:
        """The ``parentId`` query value this spec corresponds to."""
        if self.parent_scope == "root":
            return ROOT_SENTINEL
        if self.parent_scope and self.parent_scope.startswith("children-of:"):
            return self.parent_scope[len("children-of:"):]
        return None

    def children_of(self, parent_id: str) -> "FilterSpec":
        return replace(self, parent_scope=f"children-of:{parent_id}")


@dataclass
class TodoQuery:
    where: List[Any] = field(default_factory=list)
    order_by: List[Any] = field(default_factory=list)
    offset: int = 0
    limit: int = DEFAULT_TAKE

    def select(self):
        return (
            select(Todo)
            .where(*self.where)
            .order_by(*self.order_by)
            .offset(self.offset)
            .limit(self.limit)
        )

    def count(self):
        return select(func.count()).select_from(Todo).where(*self.where)


def parse_csv_enum(raw: Optional[str], enum_cls: Type) -> Tuple:
    """``"a,b"`` -> enum members; ``all``, blanks and unknown values vanish."""
    if not raw or not raw.strip() or raw.strip() == ALL:
        return ()
    members = []
    for part in raw.split(","):
        member = parse_enum(enum_cls, part.strip())
        if member is not None and member not in members:
            members.append(member)
    return tuple(members)


def _parse_int(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def _parse_bound(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    try:
        return parse_calendar_date(raw)
    except FieldError:
        return None


def parse_parent_scope(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None
    if raw == ROOT_SENTINEL:
        return "root"
    return f"children-of:{raw}"


def parse_filter_spec(params: Mapping[str, str]) -> FilterSpec:
    """Build a spec from query parameters (``status``, ``state``, ``category``,
    ``priority``, ``parentId``, ``q``, ``dueFrom``, ``dueTo``, ``skip``,
    ``take``, ``order``, ``dir``)."""
    status = (params.get("status") or "active").strip().lower()
    if status not in STATUS_FILTERS:
        status = "active"

    order_field = params.get("order") or DEFAULT_ORDER_FIELD
    if order_field not in ORDER_COLUMNS:
        order_field = DEFAULT_ORDER_FIELD
    order_dir = (params.get("dir") or DEFAULT_ORDER_DIR).lower()
    if order_dir not in ("asc", "desc"):
        order_dir = DEFAULT_ORDER_DIR

    return FilterSpec(
        status=status,
        states=parse_csv_enum(params.get("state"), TodoState),
        categories=parse_csv_enum(params.get("category"), TodoCategory),
        priorities=parse_csv_enum(params.get("priority"), TodoPriority),
        parent_scope=parse_parent_scope(params.get("parentId")),
        search_text=(params.get("q") or "").strip(),
        due_from=_parse_bound(params.get("dueFrom")),
        due_to=_parse_bound(params.get("dueTo")),
        skip=max(_parse_int(params.get("skip"), 0), 0),
        take=min(max(_parse_int(params.get("take"), DEFAULT_TAKE), 1), MAX_TAKE),
        order_field=order_field,
        order_dir=order_dir,
    )


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _search_clause(text: str):
    pattern = f"%{_escape_like(text)}%"
    # Labels are a JSON array; membership is a match on the quoted element.
    label_pattern = f"%{_escape_like(json.dumps(text, ensure_ascii=False))}%"
    return or_(
        Todo.title.ilike(pattern, escape="\\"),
        Todo.description.ilike(pattern, escape="\\"),
        cast(Todo.labels, String).ilike(label_pattern, escape="\\"),
    )


def build_query(spec: FilterSpec) -> TodoQuery:
    where = []

    if spec.status != ALL:
        where.append(Todo.status == Status(spec.status))
    if spec.states:
        where.append(Todo.state.in_(spec.states))
    if spec.categories:
        where.append(Todo.category.in_(spec.categories))
    if spec.priorities:
        where.append(Todo.priority.in_(spec.priorities))

    parent_id = spec.parent_id
    if parent_id == ROOT_SENTINEL:
        where.append(Todo.parent_id.is_(None))
    elif parent_id is not None:
        where.append(Todo.parent_id == parent_id)

    if spec.search_text:
        where.append(_search_clause(spec.search_text))

    if spec.due_from is not None:
        where.append(Todo.due_at >= datetime.combine(spec.due_from, _START_OF_DAY))
    if spec.due_to is not None:
        where.append(Todo.due_at <= datetime.combine(spec.due_to, _END_OF_DAY))

    column = ORDER_COLUMNS[spec.order_field]
    primary = column.desc() if spec.order_dir == "desc" else column.asc()

    return TodoQuery(
        where=where,
        order_by=[primary, Todo.created_at.desc(), Todo.id.asc()],
        offset=spec.skip,
        limit=spec.take,
    )
