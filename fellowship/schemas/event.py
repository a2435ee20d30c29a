# File: fellowship/schemas/event.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from fellowship.models.event import RsvpStatus


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    max_attendees: Optional[int] = Field(None, ge=1)


class EventCreate(EventBase):
    pass


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    max_attendees: Optional[int] = Field(None, ge=1)


class Event(EventBase):
    id: str
    tenant_id: str
    created_by: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RsvpCreate(BaseModel):
    status: RsvpStatus


class Rsvp(BaseModel):
    id: str
    event_id: str
    user_id: str
    status: RsvpStatus
    created_at: datetime

    class Config:
        from_attributes = True
