# File: fellowship/api/v1/endpoints/admin.py
from typing import Any, List, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.email_service import EmailService
from fellowship.core.permissions import PLATFORM_ADMIN, AuthContext
from fellowship.core.websocket_manager import ConnectionRegistry
from fellowship.db.database import get_db
from fellowship.models.chat import ChannelMessage
from fellowship.models.event import Event
from fellowship.models.post import Post
from fellowship.models.tenant import Tenant, TenantStatus
from fellowship.models.user import User
from fellowship.services import tenant_service

router = APIRouter()


def _notify_registrant(db: Session, background_tasks: BackgroundTasks, mailer: EmailService, tenant: Tenant, approved: bool) -> None:
    registrant = crud.user.get(db, tenant.admin_user_id)
    if registrant is not None and registrant.email:
        background_tasks.add_task(mailer.send_tenant_review_email, registrant.email, tenant.name, approved)


@router.get("/organizations", response_model=List[schemas.Tenant])
def list_organizations(
    db: Session = Depends(get_db),
    status: Optional[TenantStatus] = None,
    skip: int = 0,
    limit: int = 100,
    ctx: AuthContext = Depends(deps.authorize(PLATFORM_ADMIN)),
) -> Any:
    """List organizations of any status (platform admin only)."""
    return crud.tenant.get_by_status(db, status=status, skip=skip, limit=limit)


@router.post("/organizations/{tenant_id}/approve", response_model=schemas.Tenant)
def approve_organization(
    *,
    db: Session = Depends(get_db),
    tenant_id: str,
    background_tasks: BackgroundTasks,
    mailer: EmailService = Depends(deps.get_email_service),
    ctx: AuthContext = Depends(deps.authorize(PLATFORM_ADMIN)),
) -> Any:
    """Approve a pending organization and promote its registrant."""
    tenant = tenant_service.approve_tenant(db, tenant_id=tenant_id, reviewer=ctx.user)
    _notify_registrant(db, background_tasks, mailer, tenant, approved=True)
    return tenant


@router.post("/organizations/{tenant_id}/reject", response_model=schemas.Tenant)
def reject_organization(
    *,
    db: Session = Depends(get_db),
    tenant_id: str,
    background_tasks: BackgroundTasks,
    mailer: EmailService = Depends(deps.get_email_service),
    ctx: AuthContext = Depends(deps.authorize(PLATFORM_ADMIN)),
) -> Any:
    """Reject a pending organization."""
    tenant = tenant_service.reject_tenant(db, tenant_id=tenant_id, reviewer=ctx.user)
    _notify_registrant(db, background_tasks, mailer, tenant, approved=False)
    return tenant


@router.get("/analytics", response_model=schemas.PlatformAnalytics)
def platform_analytics(
    db: Session = Depends(get_db),
    registry: ConnectionRegistry = Depends(deps.get_registry),
    ctx: AuthContext = Depends(deps.authorize(PLATFORM_ADMIN)),
) -> Any:
    """Platform-wide counts."""
    return schemas.PlatformAnalytics(
        total_tenants=db.query(Tenant).count(),
        pending_tenants=crud.tenant.count_by_status(db, status=TenantStatus.PENDING),
        approved_tenants=crud.tenant.count_by_status(db, status=TenantStatus.APPROVED),
        rejected_tenants=crud.tenant.count_by_status(db, status=TenantStatus.REJECTED),
        total_users=db.query(User).count(),
        total_events=db.query(Event).count(),
        total_posts=db.query(Post).count(),
        total_messages=db.query(ChannelMessage).count(),
        connected_accounts=len(registry.account_ids()),
    )


@router.get("/activity", response_model=List[schemas.ActivityLog])
def platform_activity(
    db: Session = Depends(get_db),
    tenant_id: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    ctx: AuthContext = Depends(deps.authorize(PLATFORM_ADMIN)),
) -> Any:
    """Cross-organization activity log."""
    return crud.activity_log.get_multi(db, tenant_id=tenant_id, skip=offset, limit=limit)
