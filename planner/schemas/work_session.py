from typing import List, Optional

from .base import CamelModel, UtcDatetime
from ..models import Status


class WorkSessionStart(CamelModel):
    """Body for starting a session; every field is optional."""
    device: Optional[str] = None
    notes: Optional[str] = None
    date: Optional[str] = None


class WorkSession(CamelModel):
    id: str
    date: str
    start_at: UtcDatetime
    end_at: Optional[UtcDatetime] = None
    duration_seconds: Optional[int] = None
    device: Optional[str] = None
    notes: Optional[str] = None
    status: Status
    created_at: UtcDatetime
    updated_at: UtcDatetime


class WorkSessionDay(CamelModel):
    date: str
    sessions: List[WorkSession]
