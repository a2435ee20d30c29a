# File: fellowship/api/v1/endpoints/organizations.py
from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.exceptions import NotFound
from fellowship.core.permissions import AUTHENTICATED, TENANT_ADMIN, TENANT_MEMBER, AuthContext
from fellowship.db.database import get_db
from fellowship.models.tenant import TenantStatus
from fellowship.services import tenant_service

router = APIRouter()


@router.post("/register", response_model=schemas.Tenant, status_code=status.HTTP_201_CREATED)
def register_organization(
    *,
    db: Session = Depends(get_db),
    tenant_in: schemas.TenantRegister,
    ctx: AuthContext = Depends(deps.authorize(AUTHENTICATED)),
) -> Any:
    """Register a new organization for platform review."""
    return tenant_service.register_tenant(db, applicant=ctx.user, tenant_in=tenant_in)


@router.get("", response_model=List[schemas.TenantPublic])
def browse_organizations(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
    ctx: AuthContext = Depends(deps.authorize(AUTHENTICATED)),
) -> Any:
    """List approved organizations."""
    return crud.tenant.get_by_status(db, status=TenantStatus.APPROVED, skip=skip, limit=limit)


@router.get("/registrations", response_model=List[schemas.Tenant])
def my_registrations(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(deps.authorize(AUTHENTICATED)),
) -> Any:
    """Organizations the caller has registered, with their review status."""
    return crud.tenant.get_by_admin(db, admin_user_id=ctx.user.id)


@router.get("/mine", response_model=schemas.Tenant)
def read_my_organization(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """Get the caller's organization."""
    tenant = crud.tenant.get(db, ctx.require_tenant())
    if tenant is None:
        raise NotFound("Organization not found")
    return tenant


@router.patch("/mine", response_model=schemas.Tenant)
def update_my_organization(
    *,
    db: Session = Depends(get_db),
    tenant_in: schemas.TenantUpdate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    """Update the caller's organization profile."""
    tenant = crud.tenant.get(db, ctx.require_tenant())
    if tenant is None:
        raise NotFound("Organization not found")
    return crud.tenant.update(db, db_obj=tenant, obj_in=tenant_in)
