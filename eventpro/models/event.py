# eventpro/models/event.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from eventpro.models.base import WireModel

STANDARD_EVENT_TYPE = "standard"


class Location(WireModel):
    address: str
    city: str
    state: str
    country: str
    additional_info: Optional[str] = None


class Capacity(WireModel):
    max: int = Field(ge=0)
    current: int = 0
    total: int = 0


class Schedules(WireModel):
    start: datetime
    end: datetime


class EventBase(WireModel):
    name: str
    description: str
    categories: List[str]
    date: datetime
    location: Location
    capacity: Capacity
    schedules: Schedules
    type: Optional[str] = STANDARD_EVENT_TYPE
    inscription_price: float = Field(ge=0)


class EventCreate(EventBase):
    user_id: str


class EventUpdate(WireModel):
    # user_id is the caller claiming ownership, not a field to change
    user_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    categories: Optional[List[str]] = None
    date: Optional[datetime] = None
    location: Optional[Location] = None
    capacity: Optional[Capacity] = None
    schedules: Optional[Schedules] = None
    type: Optional[str] = None
    inscription_price: Optional[float] = Field(default=None, ge=0)


class OwnerClaim(WireModel):
    user_id: str


class Event(EventBase):
    id: str
    user_id: str
