from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from .common import Status, UtcDateTime, utcnow


class WorkSession(SQLModel, table=True):
    """One start/stop interval of the daily work timer."""
    __tablename__ = "work_sessions"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    date: str = Field(index=True)  # YYYY-MM-DD, local calendar day
    start_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
    end_at: Optional[datetime] = Field(default=None, sa_type=UtcDateTime)
    duration_seconds: Optional[int] = None
    device: Optional[str] = None
    notes: Optional[str] = None
    status: Status = Field(default=Status.active)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
