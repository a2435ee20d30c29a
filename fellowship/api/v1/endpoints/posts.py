# File: fellowship/api/v1/endpoints/posts.py
from typing import Any, List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.exceptions import NotFound
from fellowship.core.permissions import TENANT_ADMIN, TENANT_MEMBER, AuthContext
from fellowship.db.database import get_db
from fellowship.models.post import Post

router = APIRouter()


def _get_post(db: Session, ctx: AuthContext, post_id: str) -> Post:
    post = crud.post.get(db, post_id)
    if post is None:
        raise NotFound("Post not found")
    ctx.ensure_same_tenant(post.tenant_id)
    return post


@router.get("", response_model=List[schemas.Post])
def list_posts(
    db: Session = Depends(get_db),
    skip: int = 0,
    limit: int = 100,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """Announcement feed, pinned posts first."""
    return crud.post.get_by_tenant(db, tenant_id=ctx.require_tenant(), skip=skip, limit=limit)


@router.get("/{post_id}", response_model=schemas.Post)
def read_post(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    return _get_post(db, ctx, post_id)


@router.post("", response_model=schemas.Post, status_code=status.HTTP_201_CREATED)
def create_post(
    *,
    db: Session = Depends(get_db),
    post_in: schemas.PostCreate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    tenant_id = ctx.require_tenant()
    post = crud.post.create(db, obj_in=post_in, commit=False, tenant_id=tenant_id, author_id=ctx.user.id)
    crud.activity_log.log(
        db,
        action="post_created",
        tenant_id=tenant_id,
        user_id=ctx.user.id,
        entity_type="post",
        entity_id=post.id,
    )
    db.commit()
    db.refresh(post)
    return post


@router.patch("/{post_id}", response_model=schemas.Post)
def update_post(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    post_in: schemas.PostUpdate,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    post = _get_post(db, ctx, post_id)
    return crud.post.update(db, db_obj=post, obj_in=post_in)


@router.delete("/{post_id}")
def delete_post(
    *,
    db: Session = Depends(get_db),
    post_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    _get_post(db, ctx, post_id)
    crud.post.remove(db, id=post_id)
    return {"message": "Post deleted"}
