# File: fellowship/models/check_in.py
from datetime import datetime
from sqlalchemy import Column, String, Text, ForeignKey, DateTime
from sqlalchemy.sql import func
from fellowship.models.base import TenantBaseModel


class CheckIn(TenantBaseModel):
    __tablename__ = "check_ins"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    check_in_time = Column(DateTime, default=datetime.utcnow, server_default=func.now(), nullable=False, index=True)
    location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
