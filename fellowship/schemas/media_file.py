# File: fellowship/schemas/media_file.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from fellowship.models.media_file import MediaCategory, MediaType


class MediaFileUpdate(BaseModel):
    description: Optional[str] = None
    tags: Optional[str] = None
    category: Optional[MediaCategory] = None


class MediaFile(BaseModel):
    id: str
    tenant_id: str
    uploaded_by: str
    file_name: str
    file_url: str
    thumbnail_url: Optional[str] = None
    file_size: int
    mime_type: str
    media_type: MediaType
    category: MediaCategory
    description: Optional[str] = None
    tags: Optional[str] = None
    related_entity_id: Optional[str] = None
    related_entity_type: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
