# File: fellowship/services/invitation_service.py
import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fellowship import crud
from fellowship.core.config import settings
from fellowship.core.exceptions import (
    AlreadyMember,
    AlreadyUsed,
    DuplicateInvitation,
    EmailMismatch,
    Expired,
    Forbidden,
    NotFound,
    ServerError,
)
from fellowship.core.rate_limit import InvitationRateLimiter
from fellowship.models.invitation import Invitation, InvitationStatus
from fellowship.models.user import User, UserRole
from fellowship.schemas.invitation import InvitationCreate

logger = logging.getLogger(__name__)


def generate_invitation_token() -> str:
    # 32 random bytes, 256 bits of entropy
    return secrets.token_urlsafe(32)


def _commit(db: Session, failure_message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(failure_message)
        raise ServerError(failure_message)


def issue_invitation(
    db: Session,
    *,
    inviter: User,
    tenant_id: str,
    invitation_in: InvitationCreate,
    rate_limiter: InvitationRateLimiter,
    now: Optional[datetime] = None,
) -> Invitation:
    """Create a pending invitation for ``invitation_in.email``.

    Every check runs before anything is written, and a quota slot is
    recorded only once the invitation has been committed.
    """
    now = now or datetime.utcnow()
    email = invitation_in.email

    with rate_limiter.slot(inviter.id):
        existing_user = crud.user.get_by_email(db, email=email)
        if existing_user is not None and existing_user.tenant_id == tenant_id:
            raise AlreadyMember()

        if crud.invitation.get_pending_by_email_and_tenant(db, email=email, tenant_id=tenant_id, now=now):
            raise DuplicateInvitation()

        invitation = Invitation(
            tenant_id=tenant_id,
            email=email,
            role=UserRole(invitation_in.role.value),
            token=generate_invitation_token(),
            status=InvitationStatus.PENDING,
            expires_at=now + timedelta(days=settings.INVITATION_EXPIRE_DAYS),
            invited_by=inviter.id,
        )
        db.add(invitation)
        try:
            db.flush()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to create invitation")
            raise ServerError("Failed to create invitation")

        crud.activity_log.log(
            db,
            action="member_invited",
            tenant_id=tenant_id,
            user_id=inviter.id,
            entity_type="invitation",
            entity_id=invitation.id,
            details={"email": email, "role": invitation.role.value},
        )
        _commit(db, "Failed to create invitation")

    db.refresh(invitation)
    logger.info(f"📧 Invitation {invitation.id} issued by {inviter.id}")
    return invitation


def _get_respondable(db: Session, *, token: str, user: User, now: datetime) -> Invitation:
    """Shared guard for accept and decline, checked in a fixed order."""
    invitation = crud.invitation.get_by_token(db, token=token)
    if invitation is None:
        raise NotFound("Invalid invitation token")

    if invitation.status != InvitationStatus.PENDING:
        raise AlreadyUsed()

    if invitation.expires_at < now:
        crud.invitation.transition_from_pending(
            db, invitation_id=invitation.id, status=InvitationStatus.EXPIRED, now=now
        )
        _commit(db, "Failed to expire invitation")
        logger.warning(f"Expired invitation {invitation.id} used by {user.id}")
        raise Expired()

    if user.email != invitation.email:
        logger.warning(f"Invitation {invitation.id} presented by account with a different email")
        raise EmailMismatch()

    return invitation


def accept_invitation(db: Session, *, token: str, user: User, now: Optional[datetime] = None) -> Invitation:
    """Consume the invitation and grant its role and organization.

    The status change and the account change are committed together. The
    status write only matches a still-pending row, so of two concurrent
    accepts exactly one succeeds.
    """
    now = now or datetime.utcnow()
    invitation = _get_respondable(db, token=token, user=user, now=now)

    if user.role == UserRole.PLATFORM_ADMIN:
        raise Forbidden("Platform admins cannot join an organization")

    if not crud.invitation.transition_from_pending(
        db, invitation_id=invitation.id, status=InvitationStatus.ACCEPTED, now=now
    ):
        db.rollback()
        raise AlreadyUsed()

    user.role = invitation.role
    user.tenant_id = invitation.tenant_id
    crud.activity_log.log(
        db,
        action="invitation_accepted",
        tenant_id=invitation.tenant_id,
        user_id=user.id,
        entity_type="invitation",
        entity_id=invitation.id,
    )
    _commit(db, "Failed to accept invitation")

    db.refresh(invitation)
    logger.info(f"🎉 Invitation {invitation.id} accepted by {user.id}")
    return invitation


def decline_invitation(db: Session, *, token: str, user: User, now: Optional[datetime] = None) -> Invitation:
    now = now or datetime.utcnow()
    invitation = _get_respondable(db, token=token, user=user, now=now)

    if not crud.invitation.transition_from_pending(
        db, invitation_id=invitation.id, status=InvitationStatus.DECLINED, now=now
    ):
        db.rollback()
        raise AlreadyUsed()

    crud.activity_log.log(
        db,
        action="invitation_declined",
        tenant_id=invitation.tenant_id,
        user_id=user.id,
        entity_type="invitation",
        entity_id=invitation.id,
    )
    _commit(db, "Failed to decline invitation")

    db.refresh(invitation)
    logger.info(f"Invitation {invitation.id} declined by {user.id}")
    return invitation
