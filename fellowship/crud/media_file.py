# File: fellowship/crud/media_file.py
from typing import List, Optional
from sqlalchemy.orm import Session
from fellowship.crud.base import CRUDBase
from fellowship.models.media_file import MediaFile, MediaType, MediaCategory
from fellowship.schemas.media_file import MediaFileUpdate


class CRUDMediaFile(CRUDBase[MediaFile, MediaFileUpdate, MediaFileUpdate]):

    def get_filtered(
        self,
        db: Session,
        *,
        tenant_id: str,
        media_type: Optional[MediaType] = None,
        category: Optional[MediaCategory] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[MediaFile]:
        query = db.query(MediaFile).filter(MediaFile.tenant_id == tenant_id)
        if media_type is not None:
            query = query.filter(MediaFile.media_type == media_type)
        if category is not None:
            query = query.filter(MediaFile.category == category)
        return query.order_by(MediaFile.created_at.desc()).offset(skip).limit(limit).all()


media_file = CRUDMediaFile(MediaFile)
