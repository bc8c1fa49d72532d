import asyncio
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlmodel import Session

from ..database import get_db
from ..errors import store_guard
from ..models import Todo as TodoModel
from ..schemas.todo import Todo as TodoSchema, TodoCreate, TodoDeleted, TodoList, TodoTree, TodoUpdate
from ..services import todos as todo_service
from ..services.hierarchy import load_subtasks
from ..services.normalize import FieldError
from ..services.query import ALL, FilterSpec, parse_filter_spec

logger = logging.getLogger(__name__)

router = APIRouter()


def _list_payload(spec: FilterSpec, items: List[TodoModel], total: int) -> dict:
    """Echo the normalized filter alongside the page."""
    return {
        "status": spec.status,
        "states": list(spec.states),
        "categories": list(spec.categories) if spec.categories else ALL,
        "priorities": list(spec.priorities) if spec.priorities else ALL,
        "parent_id": spec.parent_id,
        "q": spec.search_text,
        "due_from": spec.due_from.isoformat() if spec.due_from else "",
        "due_to": spec.due_to.isoformat() if spec.due_to else "",
        "skip": spec.skip,
        "take": spec.take,
        "total": total,
        "items": items,
    }


def _get_or_404(db: Session, todo_id: str) -> TodoModel:
    with store_guard(db, "Loading todo"):
        todo = todo_service.get_todo(db, todo_id)
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found")
    return todo


def _bad_request(error: FieldError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


@router.get("/todos", response_model=TodoList)
def get_todos(request: Request, db: Session = Depends(get_db)):
    """List todos matching the query-string filter.

    Malformed parameters fall back to their defaults; unknown enum values
    are dropped.
    """
    spec = parse_filter_spec(request.query_params)
    with store_guard(db, "Listing todos"):
        items, total = todo_service.list_todos(db, spec)
    return _list_payload(spec, items, total)


@router.get("/todos/tree", response_model=TodoTree)
async def get_todo_tree(request: Request, db: Session = Depends(get_db)):
    """List a page of root todos together with their subtasks."""
    spec = replace(parse_filter_spec(request.query_params), parent_scope="root")
    with store_guard(db, "Listing root todos"):
        items, total = await asyncio.to_thread(todo_service.list_todos, db, spec)

    payload = _list_payload(spec, items, total)
    payload["subtasks"] = await load_subtasks(items, spec)
    return payload


@router.post("/todos", response_model=TodoSchema, status_code=status.HTTP_201_CREATED)
def create_todo(
    todo: Optional[TodoCreate] = None,
    db: Session = Depends(get_db),
):
    """Create a todo; everything but ``title`` is optional."""
    data = (todo or TodoCreate()).model_dump()
    try:
        with store_guard(db, "Creating todo"):
            created = todo_service.create_todo(db, data)
    except FieldError as e:
        raise _bad_request(e)
    logger.info("Created todo %s", created.id)
    return created


@router.get("/todos/{todo_id}", response_model=TodoSchema)
def get_todo(todo_id: str, db: Session = Depends(get_db)):
    """Get a specific todo by ID, whatever its status."""
    return _get_or_404(db, todo_id)


@router.put("/todos/{todo_id}", response_model=TodoSchema)
def update_todo(
    todo_id: str,
    body: Optional[Dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
):
    """Update the fields present in the body; omitted fields are untouched.

    A missing todo is reported before the body is validated.
    """
    todo = _get_or_404(db, todo_id)
    try:
        todo_update = TodoUpdate.model_validate(body or {})
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    try:
        with store_guard(db, "Updating todo"):
            return todo_service.update_todo(db, todo, todo_update.model_dump(exclude_unset=True))
    except FieldError as e:
        raise _bad_request(e)


@router.delete("/todos/{todo_id}", response_model=TodoDeleted)
def delete_todo(todo_id: str, db: Session = Depends(get_db)):
    """Soft delete a todo. Subtasks are left as they are."""
    todo = _get_or_404(db, todo_id)
    with store_guard(db, "Deleting todo"):
        todo_service.soft_delete_todo(db, todo)
    logger.info("Disabled todo %s", todo_id)
    return {"success": True, "id": todo_id}


@router.post("/todos/{todo_id}/delete", response_model=TodoDeleted)
def delete_todo_action(todo_id: str, db: Session = Depends(get_db)):
    return delete_todo(todo_id=todo_id, db=db)
