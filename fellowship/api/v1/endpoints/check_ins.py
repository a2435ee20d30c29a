# File: fellowship/api/v1/endpoints/check_ins.py
from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.exceptions import NotFound
from fellowship.core.permissions import SELF_OR_ADMIN, TENANT_ADMIN, AuthContext
from fellowship.db.database import get_db
from fellowship.models.check_in import CheckIn

router = APIRouter()


def _get_check_in(db: Session, check_in_id: str) -> CheckIn:
    check_in = crud.check_in.get(db, check_in_id)
    if check_in is None:
        raise NotFound("Check-in not found")
    return check_in


@router.post("", response_model=schemas.CheckIn, status_code=status.HTTP_201_CREATED)
def check_in(
    *,
    db: Session = Depends(get_db),
    check_in_in: schemas.CheckInCreate,
    ctx: AuthContext = Depends(deps.authorize(SELF_OR_ADMIN)),
) -> Any:
    """Record the caller's attendance."""
    return crud.check_in.create(db, obj_in=check_in_in, tenant_id=ctx.require_tenant(), user_id=ctx.user.id)


@router.get("/my-history", response_model=List[schemas.CheckIn])
def my_check_ins(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(deps.authorize(SELF_OR_ADMIN)),
) -> Any:
    return crud.check_in.get_by_user(db, user_id=ctx.user.id)


@router.get("/recent", response_model=List[schemas.CheckIn])
def recent_check_ins(
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    """Latest check-ins across the organization."""
    return crud.check_in.get_recent(db, tenant_id=ctx.require_tenant(), limit=20)


@router.patch("/{check_in_id}", response_model=schemas.CheckIn)
def update_check_in(
    *,
    db: Session = Depends(get_db),
    check_in_id: str,
    check_in_in: schemas.CheckInUpdate,
    ctx: AuthContext = Depends(deps.authorize(SELF_OR_ADMIN)),
) -> Any:
    record = _get_check_in(db, check_in_id)
    ctx.ensure_owner_or_admin(record.tenant_id, record.user_id)
    return crud.check_in.update(db, db_obj=record, obj_in=check_in_in)


@router.delete("/{check_in_id}")
def delete_check_in(
    *,
    db: Session = Depends(get_db),
    check_in_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    record = _get_check_in(db, check_in_id)
    ctx.ensure_same_tenant(record.tenant_id)
    crud.check_in.remove(db, id=check_in_id)
    return {"message": "Check-in deleted"}
