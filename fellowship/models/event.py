# File: fellowship/models/event.py
from sqlalchemy import Column, String, Text, ForeignKey, Integer, DateTime, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from fellowship.models.base import BaseModel, TenantBaseModel
import enum


class RsvpStatus(enum.Enum):
    GOING = "going"
    MAYBE = "maybe"
    NOT_GOING = "not_going"


class Event(TenantBaseModel):
    __tablename__ = "events"

    title = Column(String(255), nullable=False)
    description = Column(Text)
    location = Column(String(255))
    image_url = Column(String(500))
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=True)
    max_attendees = Column(Integer, nullable=True)
    created_by = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    rsvps = relationship("EventRsvp", back_populates="event", cascade="all, delete-orphan")


class EventRsvp(BaseModel):
    __tablename__ = "event_rsvps"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="event_rsvps_unique_idx"),)

    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Enum(RsvpStatus), nullable=False)

    event = relationship("Event", back_populates="rsvps")
