# File: fellowship/crud/user.py
from typing import List, Optional
from sqlalchemy.orm import Session
from fellowship.crud.base import CRUDBase
from fellowship.models.user import User
from fellowship.schemas.user import ProfileUpdate


class CRUDUser(CRUDBase[User, ProfileUpdate, ProfileUpdate]):

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def get_by_external_id(self, db: Session, *, external_id: str) -> Optional[User]:
        return db.query(User).filter(User.external_id == external_id).first()

    def get_by_tenant(self, db: Session, *, tenant_id: str, skip: int = 0, limit: int = 100) -> List[User]:
        return (
            db.query(User)
            .filter(User.tenant_id == tenant_id)
            .order_by(User.first_name, User.last_name)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_in_tenant(self, db: Session, *, user_id: str, tenant_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id, User.tenant_id == tenant_id).first()


user = CRUDUser(User)
