# File: fellowship/services/tenant_service.py
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fellowship import crud
from fellowship.core.exceptions import Forbidden, InvalidTransition, NotFound, ServerError
from fellowship.models.chat import Channel
from fellowship.models.tenant import Tenant, TenantStatus
from fellowship.models.user import User, UserRole
from fellowship.schemas.tenant import TenantRegister

logger = logging.getLogger(__name__)

DEFAULT_CHANNELS = [
    ("general", "General discussion"),
    ("prayer-requests", "Share prayer requests"),
    ("events", "Event announcements and discussion"),
    ("ministries", "Ministry coordination"),
]


def register_tenant(db: Session, *, applicant: User, tenant_in: TenantRegister) -> Tenant:
    """Create a pending organization.

    The applicant's role and organization are left untouched; they only
    change when a platform admin approves the registration.
    """
    if applicant.role == UserRole.PLATFORM_ADMIN:
        raise Forbidden("Platform admins cannot register organizations")
    if applicant.tenant_id:
        raise Forbidden("You already belong to an organization")
    if crud.tenant.get_pending_by_admin(db, admin_user_id=applicant.id):
        raise InvalidTransition("You already have a registration awaiting review")

    tenant = Tenant(
        **tenant_in.model_dump(),
        status=TenantStatus.PENDING,
        admin_user_id=applicant.id,
    )
    db.add(tenant)
    try:
        db.flush()
        crud.activity_log.log(
            db,
            action="organization_registered",
            tenant_id=tenant.id,
            user_id=applicant.id,
            entity_type="tenant",
            entity_id=tenant.id,
            details={"name": tenant.name},
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to register organization")
        raise ServerError("Failed to register organization")

    db.refresh(tenant)
    logger.info(f"🏢 Organization '{tenant.name}' registered by {applicant.id}, awaiting review")
    return tenant


def _get_pending(db: Session, tenant_id: str) -> Tenant:
    tenant = crud.tenant.get(db, tenant_id)
    if tenant is None:
        raise NotFound("Organization not found")
    if tenant.status != TenantStatus.PENDING:
        raise InvalidTransition(f"Organization is already {tenant.status.value}")
    return tenant


def approve_tenant(db: Session, *, tenant_id: str, reviewer: User, now: Optional[datetime] = None) -> Tenant:
    """Approve a pending organization, promote its registrant and seed default channels.

    All writes land in a single commit.
    """
    now = now or datetime.utcnow()
    tenant = _get_pending(db, tenant_id)

    admin = crud.user.get(db, tenant.admin_user_id)
    if admin is None:
        raise NotFound("Registering account no longer exists")
    # The registrant may have joined or been promoted elsewhere while pending
    if admin.role == UserRole.PLATFORM_ADMIN or admin.tenant_id:
        raise InvalidTransition("Registering account already belongs to an organization")

    tenant.status = TenantStatus.APPROVED
    tenant.reviewed_by = reviewer.id
    tenant.reviewed_at = now

    admin.role = UserRole.TENANT_ADMIN
    admin.tenant_id = tenant.id

    for name, description in DEFAULT_CHANNELS:
        db.add(Channel(tenant_id=tenant.id, name=name, description=description, created_by=admin.id))

    crud.activity_log.log(
        db,
        action="organization_approved",
        tenant_id=tenant.id,
        user_id=reviewer.id,
        entity_type="tenant",
        entity_id=tenant.id,
    )

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to approve organization {tenant_id}")
        raise ServerError("Failed to approve organization")

    db.refresh(tenant)
    logger.info(f"✅ Organization {tenant.id} approved; {admin.id} is now tenant admin")
    return tenant


def reject_tenant(db: Session, *, tenant_id: str, reviewer: User, now: Optional[datetime] = None) -> Tenant:
    now = now or datetime.utcnow()
    tenant = _get_pending(db, tenant_id)

    tenant.status = TenantStatus.REJECTED
    tenant.reviewed_by = reviewer.id
    tenant.reviewed_at = now
    crud.activity_log.log(
        db,
        action="organization_rejected",
        tenant_id=tenant.id,
        user_id=reviewer.id,
        entity_type="tenant",
        entity_id=tenant.id,
    )

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to reject organization {tenant_id}")
        raise ServerError("Failed to reject organization")

    db.refresh(tenant)
    logger.info(f"❌ Organization {tenant.id} rejected")
    return tenant
