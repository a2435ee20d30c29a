# File: fellowship/crud/event.py
from typing import List, Optional
from datetime import datetime
from sqlalchemy.orm import Session
from fellowship.crud.base import CRUDBase
from fellowship.models.event import Event, EventRsvp, RsvpStatus
from fellowship.schemas.event import EventCreate, EventUpdate, RsvpCreate


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):

    def get_by_tenant(self, db: Session, *, tenant_id: str, skip: int = 0, limit: int = 100) -> List[Event]:
        return (
            db.query(Event)
            .filter(Event.tenant_id == tenant_id)
            .order_by(Event.start_time.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_upcoming(self, db: Session, *, tenant_id: str, now: datetime, limit: int = 100) -> List[Event]:
        return (
            db.query(Event)
            .filter(Event.tenant_id == tenant_id, Event.start_time >= now)
            .order_by(Event.start_time.asc())
            .limit(limit)
            .all()
        )


class CRUDEventRsvp(CRUDBase[EventRsvp, RsvpCreate, RsvpCreate]):

    def get_for_user(self, db: Session, *, event_id: str, user_id: str) -> Optional[EventRsvp]:
        return db.query(EventRsvp).filter(EventRsvp.event_id == event_id, EventRsvp.user_id == user_id).first()

    def get_by_user(self, db: Session, *, user_id: str) -> List[EventRsvp]:
        return db.query(EventRsvp).filter(EventRsvp.user_id == user_id).order_by(EventRsvp.created_at.desc()).all()

    def get_by_event(self, db: Session, *, event_id: str) -> List[EventRsvp]:
        return db.query(EventRsvp).filter(EventRsvp.event_id == event_id).all()

    def count_going(self, db: Session, *, event_id: str) -> int:
        return db.query(EventRsvp).filter(EventRsvp.event_id == event_id, EventRsvp.status == RsvpStatus.GOING).count()


event = CRUDEvent(Event)
event_rsvp = CRUDEventRsvp(EventRsvp)
