# File: fellowship/crud/check_in.py
from typing import List
from sqlalchemy.orm import Session
from fellowship.crud.base import CRUDBase
from fellowship.models.check_in import CheckIn
from fellowship.schemas.check_in import CheckInCreate, CheckInUpdate


class CRUDCheckIn(CRUDBase[CheckIn, CheckInCreate, CheckInUpdate]):

    def get_by_user(self, db: Session, *, user_id: str, limit: int = 100) -> List[CheckIn]:
        return db.query(CheckIn).filter(CheckIn.user_id == user_id).order_by(CheckIn.check_in_time.desc()).limit(limit).all()

    def get_recent(self, db: Session, *, tenant_id: str, limit: int = 20) -> List[CheckIn]:
        return db.query(CheckIn).filter(CheckIn.tenant_id == tenant_id).order_by(CheckIn.check_in_time.desc()).limit(limit).all()


check_in = CRUDCheckIn(CheckIn)
