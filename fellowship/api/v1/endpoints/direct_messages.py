# File: fellowship/api/v1/endpoints/direct_messages.py
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.exceptions import Forbidden, NotFound, ValidationError
from fellowship.core.permissions import TENANT_MEMBER, AuthContext
from fellowship.db.database import get_db
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[schemas.DirectMessage])
def list_direct_messages(
    *,
    db: Session = Depends(get_db),
    recipient_id: Optional[str] = None,
    skip: int = 0,
    limit: int = Query(100, ge=1, le=500),
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """The caller's direct messages, or one conversation when ``recipient_id`` is given."""
    return crud.direct_message.get_for_user(
        db,
        tenant_id=ctx.require_tenant(),
        user_id=ctx.user.id,
        other_id=recipient_id,
        skip=skip,
        limit=limit,
    )


@router.get("/partners", response_model=List[schemas.Member])
def list_conversation_partners(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    return crud.direct_message.get_partners(db, tenant_id=ctx.require_tenant(), user_id=ctx.user.id)


@router.post("", response_model=schemas.DirectMessage, status_code=status.HTTP_201_CREATED)
def send_direct_message(
    *,
    db: Session = Depends(get_db),
    message_in: schemas.DirectMessageCreate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """Send a message to another member of the caller's organization."""
    tenant_id = ctx.require_tenant()
    recipient = crud.user.get_in_tenant(db, user_id=message_in.recipient_id, tenant_id=tenant_id)
    if recipient is None or recipient.id == ctx.user.id:
        raise ValidationError("Invalid recipient")

    message = crud.direct_message.create(db, obj_in=message_in, tenant_id=tenant_id, sender_id=ctx.user.id)
    logger.info(f"💬 Direct message {message.id} sent in tenant {tenant_id}")
    return message


@router.put("/{message_id}/read", response_model=schemas.DirectMessage)
def mark_direct_message_read(
    *,
    db: Session = Depends(get_db),
    message_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    message = crud.direct_message.get(db, message_id)
    if message is None:
        raise NotFound("Message not found")
    ctx.ensure_same_tenant(message.tenant_id)
    if message.recipient_id != ctx.user.id:
        raise Forbidden("Only the recipient can mark a message as read")
    return crud.direct_message.update(db, db_obj=message, obj_in={"is_read": True})
