# File: fellowship/api/v1/endpoints/members.py
from typing import Any, List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.exceptions import NotFound
from fellowship.core.permissions import TENANT_MEMBER, AuthContext
from fellowship.db.database import get_db

router = APIRouter()


@router.get("", response_model=List[schemas.Member])
def list_members(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """Organization directory."""
    return crud.user.get_by_tenant(db, tenant_id=ctx.require_tenant(), skip=skip, limit=limit)


@router.get("/{user_id}", response_model=schemas.Member)
def read_member(
    *,
    db: Session = Depends(get_db),
    user_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    member = crud.user.get(db, user_id)
    if member is None or member.tenant_id is None:
        raise NotFound("Member not found")
    ctx.ensure_same_tenant(member.tenant_id)
    return member
