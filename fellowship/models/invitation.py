# File: fellowship/models/invitation.py
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, String, DateTime, Enum, ForeignKey
from fellowship.models.base import TenantBaseModel
from fellowship.models.user import UserRole
import enum


class InvitationStatus(enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class Invitation(TenantBaseModel):
    __tablename__ = "invitations"

    email = Column(String(255), nullable=False, index=True)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.MEMBER)
    token = Column(String(255), nullable=False, unique=True, index=True)
    status = Column(Enum(InvitationStatus), nullable=False, default=InvitationStatus.PENDING, index=True)
    expires_at = Column(DateTime, nullable=False)
    invited_by = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    responded_at = Column(DateTime, nullable=True)

    def effective_status(self, now: Optional[datetime] = None) -> InvitationStatus:
        """Status as readers should see it; a lapsed pending row reads as expired."""
        now = now or datetime.utcnow()
        if self.status == InvitationStatus.PENDING and self.expires_at < now:
            return InvitationStatus.EXPIRED
        return self.status
