# File: fellowship/schemas/chat.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ChannelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class Channel(BaseModel):
    id: str
    tenant_id: str
    name: str
    description: Optional[str] = None
    created_by: str
    created_at: datetime

    class Config:
        from_attributes = True


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1)


class MessageAuthor(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None

    class Config:
        from_attributes = True


class Message(BaseModel):
    id: str
    channel_id: str
    user_id: str
    content: str
    created_at: datetime
    author: Optional[MessageAuthor] = None

    class Config:
        from_attributes = True


class DirectMessageCreate(BaseModel):
    recipient_id: str
    content: str = Field(..., min_length=1)


class DirectMessage(BaseModel):
    id: str
    tenant_id: str
    sender_id: str
    recipient_id: str
    content: str
    is_read: bool
    created_at: datetime
    sender: Optional[MessageAuthor] = None

    class Config:
        from_attributes = True
