from sqlmodel import SQLModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from .common import Status, UtcDateTime, utcnow


class HealthLog(SQLModel, table=True):
    """Daily health entry."""
    __tablename__ = "health_logs"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    date: str = Field(index=True)  # YYYY-MM-DD
    weekday: Optional[str] = None
    weight: Optional[Decimal] = Field(default=None, max_digits=6, decimal_places=2)
    morning: Optional[str] = None
    gym: Optional[str] = None
    afternoon: Optional[str] = None
    no_eat_after: Optional[str] = None
    calories: Optional[int] = None
    gout_treatment: Optional[int] = None
    status: Status = Field(default=Status.active)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UtcDateTime)
