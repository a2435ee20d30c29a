# File: fellowship/crud/post.py
from typing import List
from sqlalchemy.orm import Session
from fellowship.crud.base import CRUDBase
from fellowship.models.post import Post
from fellowship.schemas.post import PostCreate, PostUpdate


class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):

    def get_by_tenant(self, db: Session, *, tenant_id: str, skip: int = 0, limit: int = 100) -> List[Post]:
        return (
            db.query(Post)
            .filter(Post.tenant_id == tenant_id)
            .order_by(Post.is_pinned.desc(), Post.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )


post = CRUDPost(Post)
