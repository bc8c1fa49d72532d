from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from ..database import get_db
from ..errors import store_guard
from ..models import Status, WorkSession, as_utc, utcnow
from ..schemas.work_session import WorkSession as WorkSessionSchema, WorkSessionDay, WorkSessionStart
from ..services.normalize import FieldError, local_today, optional_text, parse_calendar_date

router = APIRouter()


def _day_or_400(value: Optional[str]) -> str:
    if not value:
        return local_today()
    try:
        return parse_calendar_date(value).isoformat()
    except FieldError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _get_or_404(db: Session, session_id: str) -> WorkSession:
    with store_guard(db, "Loading work session"):
        work_session = db.get(WorkSession, session_id)
    if not work_session:
        raise HTTPException(status_code=404, detail="Session not found")
    return work_session


@router.get("/sessions", response_model=WorkSessionDay)
def list_sessions(date: Optional[str] = None, db: Session = Depends(get_db)):
    """Sessions of one calendar day (default: today), newest first."""
    day = _day_or_400(date)
    with store_guard(db, "Listing work sessions"):
        sessions = db.exec(
            select(WorkSession)
            .where(WorkSession.date == day, WorkSession.status == Status.active)
            .order_by(WorkSession.start_at.desc())
        ).all()
    return {"date": day, "sessions": sessions}


@router.post("/sessions", response_model=WorkSessionSchema, status_code=status.HTTP_201_CREATED)
def start_session(payload: Optional[WorkSessionStart] = None, db: Session = Depends(get_db)):
    """Start a session now."""
    payload = payload or WorkSessionStart()
    work_session = WorkSession(
        date=_day_or_400(payload.date),
        start_at=utcnow(),
        device=optional_text(payload.device),
        notes=optional_text(payload.notes),
    )
    with store_guard(db, "Starting work session"):
        db.add(work_session)
        db.commit()
        db.refresh(work_session)
    return work_session


@router.post("/sessions/{session_id}/stop", response_model=WorkSessionSchema)
def stop_session(session_id: str, db: Session = Depends(get_db)):
    """Stop a running session and record its duration."""
    work_session = _get_or_404(db, session_id)
    if work_session.end_at is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Session already stopped")

    now = utcnow()
    work_session.end_at = now
    work_session.duration_seconds = max(0, int((now - as_utc(work_session.start_at)).total_seconds()))
    work_session.updated_at = now
    with store_guard(db, "Stopping work session"):
        db.add(work_session)
        db.commit()
        db.refresh(work_session)
    return work_session


@router.post("/sessions/{session_id}/delete")
def delete_session(session_id: str, db: Session = Depends(get_db)):
    """Soft delete a session."""
    work_session = _get_or_404(db, session_id)
    work_session.status = Status.disabled
    work_session.updated_at = utcnow()
    with store_guard(db, "Deleting work session"):
        db.add(work_session)
        db.commit()
    return {"success": True, "id": session_id}
