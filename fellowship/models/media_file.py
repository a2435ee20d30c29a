# File: fellowship/models/media_file.py
from sqlalchemy import Column, String, Text, Integer, ForeignKey, Enum
from fellowship.models.base import TenantBaseModel
import enum


class MediaType(enum.Enum):
    IMAGE = "image"
    VIDEO = "video"


class MediaCategory(enum.Enum):
    EVENT = "event"
    POST = "post"
    PROFILE = "profile"
    GENERAL = "general"
    MINISTRY = "ministry"


class MediaFile(TenantBaseModel):
    __tablename__ = "media_files"

    uploaded_by = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    file_name = Column(String(255), nullable=False)
    file_url = Column(String(1000), nullable=False)
    thumbnail_url = Column(String(1000), nullable=True)
    file_size = Column(Integer, nullable=False)  # bytes
    mime_type = Column(String(100), nullable=False)
    media_type = Column(Enum(MediaType), nullable=False, index=True)
    category = Column(Enum(MediaCategory), nullable=False, default=MediaCategory.GENERAL, index=True)
    description = Column(Text, nullable=True)
    tags = Column(Text, nullable=True)  # comma-separated
    related_entity_id = Column(String(36), nullable=True)
    related_entity_type = Column(String(50), nullable=True)
