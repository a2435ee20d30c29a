# File: fellowship/api/v1/endpoints/profile.py
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.permissions import AUTHENTICATED, AuthContext
from fellowship.db.database import get_db

router = APIRouter()


@router.get("", response_model=schemas.User)
def read_profile(
    ctx: AuthContext = Depends(deps.authorize(AUTHENTICATED)),
) -> Any:
    return ctx.user


@router.put("", response_model=schemas.User)
def update_profile(
    *,
    db: Session = Depends(get_db),
    profile_in: schemas.ProfileUpdate,
    ctx: AuthContext = Depends(deps.authorize(AUTHENTICATED)),
) -> Any:
    """Update the caller's own profile; email is managed by the identity provider."""
    return crud.user.update(db, db_obj=ctx.user, obj_in=profile_in)
