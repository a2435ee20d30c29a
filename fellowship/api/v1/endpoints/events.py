# File: fellowship/api/v1/endpoints/events.py
from datetime import datetime
from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.exceptions import NotFound, ValidationError
from fellowship.core.permissions import SELF_OR_ADMIN, TENANT_ADMIN, TENANT_MEMBER, AuthContext
from fellowship.db.database import get_db
from fellowship.models.event import Event, EventRsvp, RsvpStatus

router = APIRouter()


def _get_event(db: Session, ctx: AuthContext, event_id: str) -> Event:
    event = crud.event.get(db, event_id)
    if event is None:
        raise NotFound("Event not found")
    ctx.ensure_same_tenant(event.tenant_id)
    return event


@router.get("", response_model=List[schemas.Event])
def list_events(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    return crud.event.get_by_tenant(db, tenant_id=ctx.require_tenant(), skip=skip, limit=limit)


@router.get("/upcoming", response_model=List[schemas.Event])
def list_upcoming_events(
    db: Session = Depends(get_db),
    limit: int = 20,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """Events that have not started yet, soonest first."""
    return crud.event.get_upcoming(db, tenant_id=ctx.require_tenant(), now=datetime.utcnow(), limit=limit)


@router.get("/rsvps", response_model=List[schemas.Rsvp])
def list_my_rsvps(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(deps.authorize(SELF_OR_ADMIN)),
) -> Any:
    """The caller's own RSVPs."""
    return crud.event_rsvp.get_by_user(db, user_id=ctx.user.id)


@router.get("/{event_id}", response_model=schemas.Event)
def read_event(
    *,
    db: Session = Depends(get_db),
    event_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    return _get_event(db, ctx, event_id)


@router.post("", response_model=schemas.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    *,
    db: Session = Depends(get_db),
    event_in: schemas.EventCreate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    tenant_id = ctx.require_tenant()
    event = crud.event.create(db, obj_in=event_in, commit=False, tenant_id=tenant_id, created_by=ctx.user.id)
    crud.activity_log.log(
        db,
        action="event_created",
        tenant_id=tenant_id,
        user_id=ctx.user.id,
        entity_type="event",
        entity_id=event.id,
        details={"title": event.title},
    )
    db.commit()
    db.refresh(event)
    return event


@router.patch("/{event_id}", response_model=schemas.Event)
def update_event(
    *,
    db: Session = Depends(get_db),
    event_id: str,
    event_in: schemas.EventUpdate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    event = _get_event(db, ctx, event_id)
    return crud.event.update(db, db_obj=event, obj_in=event_in)


@router.delete("/{event_id}")
def delete_event(
    *,
    db: Session = Depends(get_db),
    event_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    _get_event(db, ctx, event_id)
    crud.event.remove(db, id=event_id)
    return {"message": "Event deleted"}


@router.get("/{event_id}/rsvps", response_model=List[schemas.Rsvp])
def list_event_rsvps(
    *,
    db: Session = Depends(get_db),
    event_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    event = _get_event(db, ctx, event_id)
    return crud.event_rsvp.get_by_event(db, event_id=event.id)


@router.post("/{event_id}/rsvp", response_model=schemas.Rsvp)
def rsvp_to_event(
    *,
    db: Session = Depends(get_db),
    event_id: str,
    rsvp_in: schemas.RsvpCreate,
    ctx: AuthContext = Depends(deps.authorize(SELF_OR_ADMIN)),
) -> Any:
    """Create or change the caller's RSVP."""
    event = _get_event(db, ctx, event_id)
    rsvp = crud.event_rsvp.get_for_user(db, event_id=event.id, user_id=ctx.user.id)

    already_going = rsvp is not None and rsvp.status == RsvpStatus.GOING
    if rsvp_in.status == RsvpStatus.GOING and event.max_attendees and not already_going:
        if crud.event_rsvp.count_going(db, event_id=event.id) >= event.max_attendees:
            raise ValidationError("Event is full")

    if rsvp is None:
        rsvp = EventRsvp(event_id=event.id, user_id=ctx.user.id, status=rsvp_in.status)
        db.add(rsvp)
    else:
        rsvp.status = rsvp_in.status
    db.commit()
    db.refresh(rsvp)
    return rsvp


@router.delete("/{event_id}/rsvp")
def cancel_rsvp(
    *,
    db: Session = Depends(get_db),
    event_id: str,
    ctx: AuthContext = Depends(deps.authorize(SELF_OR_ADMIN)),
) -> Any:
    event = _get_event(db, ctx, event_id)
    rsvp = crud.event_rsvp.get_for_user(db, event_id=event.id, user_id=ctx.user.id)
    if rsvp is None:
        raise NotFound("RSVP not found")
    crud.event_rsvp.remove(db, id=rsvp.id)
    return {"message": "RSVP removed"}
