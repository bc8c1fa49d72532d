"""Subtask fan-out for a page of root todos.

Each root's subtasks are fetched by an independent query on its own
session, all running concurrently on worker threads. A failing fetch only
empties that root's entry; the other roots are unaffected.
"""
import asyncio
import logging
from dataclasses import replace
from typing import Callable, ContextManager, Dict, List, Sequence

from sqlmodel import Session

from ..database import get_session
from ..models import Todo
from .query import DEFAULT_TAKE, FilterSpec
from .todos import list_todos

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]


def subtask_spec(spec: FilterSpec, parent_id: str) -> FilterSpec:
    """Children of ``parent_id`` under the same status/state/category/priority filters."""
    return replace(
        spec.children_of(parent_id),
        search_text="",
        due_from=None,
        due_to=None,
        skip=0,
        take=DEFAULT_TAKE,
    )


def fetch_subtasks(session_factory: SessionFactory, spec: FilterSpec) -> List[Todo]:
    with session_factory() as session:
        items, _ = list_todos(session, spec)
        return items


async def load_subtasks(
    roots: Sequence[Todo],
    spec: FilterSpec,
    session_factory: SessionFactory = get_session,
) -> Dict[str, List[Todo]]:
    """Map each root id to its ordered, filter-visible subtasks."""
    if not roots:
        return {}

    results = await asyncio.gather(
        *(
            asyncio.to_thread(fetch_subtasks, session_factory, subtask_spec(spec, root.id))
            for root in roots
        ),
        return_exceptions=True,
    )

    subtasks: Dict[str, List[Todo]] = {}
    for root, result in zip(roots, results):
        if isinstance(result, Exception):
            logger.warning("Loading subtasks of todo %s failed: %s", root.id, result)
            subtasks[root.id] = []
        elif isinstance(result, BaseException):
            raise result
        else:
            subtasks[root.id] = result
    return subtasks
