# File: fellowship/crud/chat.py
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Union
from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session, joinedload
from fellowship.crud.base import CRUDBase
from fellowship.models.chat import Channel, ChannelMessage, DirectMessage
from fellowship.models.user import User
from fellowship.schemas.chat import ChannelCreate, DirectMessageCreate, MessageCreate


class CRUDChannel(CRUDBase[Channel, ChannelCreate, ChannelCreate]):

    def get_by_tenant(self, db: Session, *, tenant_id: str) -> List[Channel]:
        return db.query(Channel).filter(Channel.tenant_id == tenant_id).order_by(Channel.created_at, Channel.name).all()

    def get_ids_by_tenant(self, db: Session, *, tenant_id: str) -> List[str]:
        return [row.id for row in db.query(Channel.id).filter(Channel.tenant_id == tenant_id).all()]


class CRUDChannelMessage(CRUDBase[ChannelMessage, MessageCreate, MessageCreate]):

    def create(self, db: Session, *, obj_in: Union[MessageCreate, Dict[str, Any]], commit: bool = True, **extra: Any) -> ChannelMessage:
        """Store a message stamped strictly after the channel's newest one.

        History is ordered by ``created_at`` alone, so two messages may never
        share a timestamp within a channel.
        """
        created_at = datetime.utcnow()
        latest = (
            db.query(func.max(ChannelMessage.created_at))
            .filter(ChannelMessage.channel_id == extra.get("channel_id"))
            .scalar()
        )
        if latest is not None and created_at <= latest:
            created_at = latest + timedelta(microseconds=1)
        return super().create(db, obj_in=obj_in, commit=commit, created_at=created_at, **extra)

    def get_by_channel(self, db: Session, *, channel_id: str, skip: int = 0, limit: int = 100) -> List[ChannelMessage]:
        return (
            db.query(ChannelMessage)
            .options(joinedload(ChannelMessage.author))
            .filter(ChannelMessage.channel_id == channel_id)
            .order_by(ChannelMessage.created_at.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )


class CRUDDirectMessage(CRUDBase[DirectMessage, DirectMessageCreate, DirectMessageCreate]):

    def get_for_user(
        self,
        db: Session,
        *,
        tenant_id: str,
        user_id: str,
        other_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[DirectMessage]:
        """Messages the user sent or received, optionally narrowed to one partner. Oldest first."""
        if other_id is None:
            involved = or_(DirectMessage.sender_id == user_id, DirectMessage.recipient_id == user_id)
        else:
            involved = or_(
                and_(DirectMessage.sender_id == user_id, DirectMessage.recipient_id == other_id),
                and_(DirectMessage.sender_id == other_id, DirectMessage.recipient_id == user_id),
            )
        return (
            db.query(DirectMessage)
            .options(joinedload(DirectMessage.sender))
            .filter(DirectMessage.tenant_id == tenant_id, involved)
            .order_by(DirectMessage.created_at.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_partners(self, db: Session, *, tenant_id: str, user_id: str) -> List[User]:
        """Members of the tenant the user has exchanged at least one message with."""
        rows = (
            db.query(DirectMessage.sender_id, DirectMessage.recipient_id)
            .filter(
                DirectMessage.tenant_id == tenant_id,
                or_(DirectMessage.sender_id == user_id, DirectMessage.recipient_id == user_id),
            )
            .distinct()
            .all()
        )
        partner_ids = {recipient_id if sender_id == user_id else sender_id for sender_id, recipient_id in rows}
        return (
            db.query(User)
            .filter(User.tenant_id == tenant_id, User.id.in_(partner_ids))
            .order_by(User.first_name, User.last_name)
            .all()
        )


channel = CRUDChannel(Channel)
channel_message = CRUDChannelMessage(ChannelMessage)
direct_message = CRUDDirectMessage(DirectMessage)
