# File: fellowship/models/chat.py
from sqlalchemy import Boolean, Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from fellowship.models.base import BaseModel, TenantBaseModel


class Channel(TenantBaseModel):
    __tablename__ = "message_channels"

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    messages = relationship("ChannelMessage", back_populates="channel", cascade="all, delete-orphan")


class ChannelMessage(BaseModel):
    """Append-only; ordered by ``created_at`` within a channel."""

    __tablename__ = "messages"

    channel_id = Column(String(36), ForeignKey("message_channels.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)

    channel = relationship("Channel", back_populates="messages")
    author = relationship("User")


class DirectMessage(TenantBaseModel):
    """One-to-one message between two members of the same tenant."""

    __tablename__ = "direct_messages"

    sender_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)

    sender = relationship("User", foreign_keys=[sender_id])
    recipient = relationship("User", foreign_keys=[recipient_id])
