# File: fellowship/crud/activity_log.py
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from fellowship.models.activity_log import ActivityLog


class CRUDActivityLog:

    def log(
        self,
        db: Session,
        *,
        action: str,
        tenant_id: Optional[str] = None,
        user_id: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> ActivityLog:
        """Stage an activity row in the caller's transaction."""
        entry = ActivityLog(
            action=action,
            tenant_id=tenant_id,
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
        )
        db.add(entry)
        return entry

    def get_multi(
        self,
        db: Session,
        *,
        tenant_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[ActivityLog]:
        query = db.query(ActivityLog)
        if tenant_id:
            query = query.filter(ActivityLog.tenant_id == tenant_id)
        return query.order_by(ActivityLog.created_at.desc()).offset(skip).limit(limit).all()


activity_log = CRUDActivityLog()
