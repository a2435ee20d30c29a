# File: fellowship/crud/invitation.py
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_
from fellowship.crud.base import CRUDBase
from fellowship.models.invitation import Invitation, InvitationStatus
from fellowship.schemas.invitation import InvitationCreate
from datetime import datetime


class CRUDInvitation(CRUDBase[Invitation, InvitationCreate, InvitationCreate]):

    def get_pending_by_email_and_tenant(self, db: Session, *, email: str, tenant_id: str, now: datetime) -> Optional[Invitation]:
        return db.query(Invitation).filter(
            and_(
                Invitation.email == email,
                Invitation.tenant_id == tenant_id,
                Invitation.status == InvitationStatus.PENDING,
                Invitation.expires_at > now,
            )
        ).first()

    def get_by_token(self, db: Session, *, token: str) -> Optional[Invitation]:
        return db.query(Invitation).filter(Invitation.token == token).first()

    def transition_from_pending(self, db: Session, *, invitation_id: str, status: InvitationStatus, now: datetime) -> bool:
        """Conditionally move a pending invitation to ``status`` without committing.

        Returns False if another request already moved it out of pending.
        """
        updated = (
            db.query(Invitation)
            .filter(Invitation.id == invitation_id, Invitation.status == InvitationStatus.PENDING)
            .update({"status": status, "responded_at": now}, synchronize_session=False)
        )
        return updated == 1


invitation = CRUDInvitation(Invitation)
