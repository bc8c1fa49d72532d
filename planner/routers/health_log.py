from datetime import date as Date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from ..database import get_db
from ..errors import store_guard
from ..models import HealthLog, Status, parse_enum, utcnow
from ..schemas.health_log import HealthLog as HealthLogSchema, HealthLogCreate, HealthLogDay, HealthLogUpdate
from ..services.normalize import (
    FieldError,
    local_today,
    optional_text,
    parse_calendar_date,
    parse_decimal,
    parse_non_negative_int,
)

router = APIRouter()

TEXT_FIELDS = ("morning", "gym", "afternoon", "no_eat_after")
COUNT_FIELDS = ("calories", "gout_treatment")


def _weekday(day: str) -> str:
    return Date.fromisoformat(day).strftime("%a")


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    """Column values for the fields present in ``data``."""
    values: Dict[str, Any] = {}
    for name, raw in data.items():
        if name == "date":
            values[name] = parse_calendar_date(raw).isoformat()
        elif name == "weekday":
            values[name] = optional_text(raw)
        elif name == "weight":
            values[name] = parse_decimal(raw, name)
        elif name in TEXT_FIELDS:
            values[name] = optional_text(raw)
        elif name in COUNT_FIELDS:
            values[name] = parse_non_negative_int(raw, name)
        elif name == "status":
            values[name] = parse_enum(Status, raw, Status.active)
    return values


def _get_or_404(db: Session, log_id: str) -> HealthLog:
    with store_guard(db, "Loading health log"):
        entry = db.get(HealthLog, log_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Health log not found")
    return entry


@router.get("/healthlog", response_model=HealthLogDay)
def list_health_logs(date: Optional[str] = None, db: Session = Depends(get_db)):
    """Active entries of one calendar day (default: today)."""
    try:
        day = parse_calendar_date(date).isoformat() if date else local_today()
    except FieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    with store_guard(db, "Listing health logs"):
        items = db.exec(
            select(HealthLog)
            .where(HealthLog.date == day, HealthLog.status == Status.active)
            .order_by(HealthLog.created_at.desc())
        ).all()
    return {"date": day, "items": items}


@router.post("/healthlog", response_model=HealthLogSchema, status_code=status.HTTP_201_CREATED)
def create_health_log(payload: Optional[HealthLogCreate] = None, db: Session = Depends(get_db)):
    data = (payload or HealthLogCreate()).model_dump()
    if not data.get("date"):
        data["date"] = local_today()
    try:
        values = _normalize(data)
    except FieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not values.get("weekday"):
        values["weekday"] = _weekday(values["date"])

    entry = HealthLog(**values)
    with store_guard(db, "Creating health log"):
        db.add(entry)
        db.commit()
        db.refresh(entry)
    return entry


@router.put("/healthlog/{log_id}", response_model=HealthLogSchema)
def update_health_log(log_id: str, payload: HealthLogUpdate, db: Session = Depends(get_db)):
    entry = _get_or_404(db, log_id)
    try:
        values = _normalize(payload.model_dump(exclude_unset=True))
    except FieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if "date" in values and "weekday" not in values:
        values["weekday"] = _weekday(values["date"])

    for name, value in values.items():
        setattr(entry, name, value)
    entry.updated_at = utcnow()

    with store_guard(db, "Updating health log"):
        db.add(entry)
        db.commit()
        db.refresh(entry)
    return entry


@router.delete("/healthlog/{log_id}")
def delete_health_log(log_id: str, db: Session = Depends(get_db)):
    """Soft delete an entry."""
    entry = _get_or_404(db, log_id)
    entry.status = Status.disabled
    entry.updated_at = utcnow()
    with store_guard(db, "Deleting health log"):
        db.add(entry)
        db.commit()
    return {"success": True, "id": log_id}
