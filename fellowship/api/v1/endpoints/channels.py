# File: fellowship/api/v1/endpoints/channels.py
from typing import Any, List
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.exceptions import NotFound
from fellowship.core.permissions import TENANT_ADMIN, TENANT_MEMBER, AuthContext
from fellowship.core.websocket_manager import ConnectionRegistry
from fellowship.db.database import get_db
from fellowship.models.chat import Channel
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_channel(db: Session, ctx: AuthContext, channel_id: str) -> Channel:
    channel = crud.channel.get(db, channel_id)
    if channel is None:
        raise NotFound("Channel not found")
    ctx.ensure_same_tenant(channel.tenant_id)
    return channel


@router.get("", response_model=List[schemas.Channel])
def list_channels(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """List the organization's channels."""
    return crud.channel.get_by_tenant(db, tenant_id=ctx.require_tenant())


@router.post("", response_model=schemas.Channel, status_code=status.HTTP_201_CREATED)
def create_channel(
    *,
    db: Session = Depends(get_db),
    channel_in: schemas.ChannelCreate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    """Create a channel."""
    tenant_id = ctx.require_tenant()
    channel = crud.channel.create(db, obj_in=channel_in, commit=False, tenant_id=tenant_id, created_by=ctx.user.id)
    crud.activity_log.log(
        db,
        action="channel_created",
        tenant_id=tenant_id,
        user_id=ctx.user.id,
        entity_type="channel",
        entity_id=channel.id,
    )
    db.commit()
    db.refresh(channel)
    return channel


@router.get("/{channel_id}/messages", response_model=List[schemas.Message])
def list_messages(
    *,
    db: Session = Depends(get_db),
    channel_id: str,
    skip: int = 0,
    limit: int = Query(100, ge=1, le=500),
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """Channel history, oldest first."""
    channel = _get_channel(db, ctx, channel_id)
    return crud.channel_message.get_by_channel(db, channel_id=channel.id, skip=skip, limit=limit)


@router.post("/{channel_id}/messages", response_model=schemas.Message, status_code=status.HTTP_201_CREATED)
def create_message(
    *,
    db: Session = Depends(get_db),
    channel_id: str,
    message_in: schemas.MessageCreate,
    background_tasks: BackgroundTasks,
    registry: ConnectionRegistry = Depends(deps.get_registry),
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """Post a message and push it to live subscribers."""
    channel = _get_channel(db, ctx, channel_id)
    message = crud.channel_message.create(db, obj_in=message_in, channel_id=channel.id, user_id=ctx.user.id)

    payload = schemas.Message.model_validate(message).model_dump(mode="json")
    background_tasks.add_task(registry.broadcast, channel.id, payload)
    return payload
