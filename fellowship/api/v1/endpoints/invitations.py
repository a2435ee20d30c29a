# File: fellowship/api/v1/endpoints/invitations.py
from datetime import datetime
from typing import Any, List
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.email_service import EmailService
from fellowship.core.exceptions import NotFound
from fellowship.core.permissions import AUTHENTICATED, TENANT_ADMIN, AuthContext
from fellowship.core.rate_limit import InvitationRateLimiter
from fellowship.db.database import get_db
from fellowship.models.invitation import Invitation
from fellowship.services import invitation_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _serialize(invitation: Invitation, now: datetime) -> schemas.Invitation:
    return schemas.Invitation(
        id=invitation.id,
        email=invitation.email,
        role=invitation.role.value,
        tenant_id=invitation.tenant_id,
        status=invitation.effective_status(now),
        expires_at=invitation.expires_at,
        invited_by=invitation.invited_by,
        responded_at=invitation.responded_at,
        created_at=invitation.created_at,
    )


@router.post("", response_model=schemas.Invitation, status_code=status.HTTP_201_CREATED)
def create_invitation(
    *,
    db: Session = Depends(get_db),
    invitation_in: schemas.InvitationCreate,
    background_tasks: BackgroundTasks,
    rate_limiter: InvitationRateLimiter = Depends(deps.get_rate_limiter),
    mailer: EmailService = Depends(deps.get_email_service),
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    """Invite someone to the caller's organization."""
    tenant_id = ctx.require_tenant()
    invitation = invitation_service.issue_invitation(
        db,
        inviter=ctx.user,
        tenant_id=tenant_id,
        invitation_in=invitation_in,
        rate_limiter=rate_limiter,
    )

    tenant = crud.tenant.get(db, tenant_id)
    background_tasks.add_task(
        mailer.send_invitation_email,
        email=invitation.email,
        tenant_name=tenant.name if tenant else "your organization",
        token=invitation.token,
        invited_by=ctx.user.full_name,
        role=invitation.role.value,
    )
    return _serialize(invitation, datetime.utcnow())


@router.get("", response_model=List[schemas.Invitation])
def list_invitations(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    """List the organization's invitations; lapsed pending ones read as expired."""
    now = datetime.utcnow()
    invitations = crud.invitation.get_multi_by_tenant(db, tenant_id=ctx.require_tenant(), skip=skip, limit=limit)
    return [_serialize(invitation, now) for invitation in invitations]


@router.delete("/{invitation_id}")
def cancel_invitation(
    *,
    db: Session = Depends(get_db),
    invitation_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    """Cancel an invitation."""
    invitation = crud.invitation.get(db, invitation_id)
    if invitation is None:
        raise NotFound("Invitation not found")
    ctx.ensure_same_tenant(invitation.tenant_id)
    crud.invitation.remove(db, id=invitation_id)
    return {"message": "Invitation cancelled"}


@router.get("/token/{token}", response_model=schemas.InvitationPreview)
def preview_invitation(
    *,
    db: Session = Depends(get_db),
    token: str,
    ctx: AuthContext = Depends(deps.authorize(AUTHENTICATED)),
) -> Any:
    """Show what an invitation grants before it is accepted."""
    invitation = crud.invitation.get_by_token(db, token=token)
    if invitation is None:
        raise NotFound("Invalid invitation token")
    tenant = crud.tenant.get(db, invitation.tenant_id)
    return schemas.InvitationPreview(
        email=invitation.email,
        role=invitation.role.value,
        tenant_id=invitation.tenant_id,
        tenant_name=tenant.name if tenant else "",
        status=invitation.effective_status(),
        expires_at=invitation.expires_at,
    )


@router.post("/accept/{token}", response_model=schemas.InvitationAccepted)
def accept_invitation(
    *,
    db: Session = Depends(get_db),
    token: str,
    ctx: AuthContext = Depends(deps.authorize(AUTHENTICATED)),
) -> Any:
    """Accept an invitation and join its organization."""
    invitation = invitation_service.accept_invitation(db, token=token, user=ctx.user)
    return schemas.InvitationAccepted(tenant_id=invitation.tenant_id)


@router.post("/decline/{token}")
def decline_invitation(
    *,
    db: Session = Depends(get_db),
    token: str,
    ctx: AuthContext = Depends(deps.authorize(AUTHENTICATED)),
) -> Any:
    """Decline an invitation."""
    invitation_service.decline_invitation(db, token=token, user=ctx.user)
    return {"message": "Invitation declined"}
