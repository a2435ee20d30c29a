# File: fellowship/models/post.py
from sqlalchemy import Column, String, Text, Boolean, ForeignKey
from fellowship.models.base import TenantBaseModel


class Post(TenantBaseModel):
    __tablename__ = "posts"

    author_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    video_url = Column(String(500), nullable=True)
    is_pinned = Column(Boolean, default=False, nullable=False, index=True)
