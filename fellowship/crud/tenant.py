# File: fellowship/crud/tenant.py
from typing import List, Optional
from sqlalchemy.orm import Session
from fellowship.crud.base import CRUDBase
from fellowship.models.tenant import Tenant, TenantStatus
from fellowship.schemas.tenant import TenantRegister, TenantUpdate


class CRUDTenant(CRUDBase[Tenant, TenantRegister, TenantUpdate]):

    def get_by_status(self, db: Session, *, status: Optional[TenantStatus] = None, skip: int = 0, limit: int = 100) -> List[Tenant]:
        query = db.query(Tenant)
        if status is not None:
            query = query.filter(Tenant.status == status)
        return query.order_by(Tenant.created_at.desc()).offset(skip).limit(limit).all()

    def get_by_admin(self, db: Session, *, admin_user_id: str) -> List[Tenant]:
        return db.query(Tenant).filter(Tenant.admin_user_id == admin_user_id).all()

    def get_pending_by_admin(self, db: Session, *, admin_user_id: str) -> Optional[Tenant]:
        return (
            db.query(Tenant)
            .filter(Tenant.admin_user_id == admin_user_id, Tenant.status == TenantStatus.PENDING)
            .first()
        )

    def count_by_status(self, db: Session, *, status: TenantStatus) -> int:
        return db.query(Tenant).filter(Tenant.status == status).count()


tenant = CRUDTenant(Tenant)
