from decimal import Decimal
from typing import Any, List, Optional

from .base import CamelModel, UtcDatetime
from ..models import Status


class HealthLogBase(CamelModel):
    """Writable health-log fields; numbers are normalized by the router."""
    date: Optional[str] = None
    weekday: Optional[str] = None
    weight: Any = None
    morning: Optional[str] = None
    gym: Optional[str] = None
    afternoon: Optional[str] = None
    no_eat_after: Optional[str] = None
    calories: Any = None
    gout_treatment: Any = None
    status: Any = None


class HealthLogCreate(HealthLogBase):
    pass


class HealthLogUpdate(HealthLogBase):
    pass


class HealthLog(CamelModel):
    id: str
    date: str
    weekday: Optional[str] = None
    weight: Optional[Decimal] = None
    morning: Optional[str] = None
    gym: Optional[str] = None
    afternoon: Optional[str] = None
    no_eat_after: Optional[str] = None
    calories: Optional[int] = None
    gout_treatment: Optional[int] = None
    status: Status
    created_at: UtcDatetime
    updated_at: UtcDatetime


class HealthLogDay(CamelModel):
    date: str
    items: List[HealthLog]
