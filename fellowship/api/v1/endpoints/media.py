# File: fellowship/api/v1/endpoints/media.py
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session
from fellowship import crud, schemas
from fellowship.api import deps
from fellowship.core.config import settings
from fellowship.core.exceptions import NotFound, ValidationError
from fellowship.core.media_storage import MediaStorage
from fellowship.core.permissions import SELF_OR_ADMIN, TENANT_ADMIN, TENANT_MEMBER, AuthContext
from fellowship.db.database import get_db
from fellowship.models.media_file import MediaCategory, MediaFile, MediaType
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _media_type_for(content_type: Optional[str]) -> MediaType:
    if content_type and content_type.startswith("image/"):
        return MediaType.IMAGE
    if content_type and content_type.startswith("video/"):
        return MediaType.VIDEO
    raise ValidationError("Only image and video files are allowed")


def _get_media(db: Session, media_id: str) -> MediaFile:
    media = crud.media_file.get(db, media_id)
    if media is None:
        raise NotFound("Media file not found")
    return media


@router.post("/upload", response_model=schemas.MediaFile, status_code=status.HTTP_201_CREATED)
def upload_media(
    *,
    db: Session = Depends(get_db),
    file: UploadFile = File(...),
    category: MediaCategory = Form(MediaCategory.GENERAL),
    description: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    related_entity_id: Optional[str] = Form(None),
    related_entity_type: Optional[str] = Form(None),
    storage: MediaStorage = Depends(deps.get_media_storage),
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    """Upload an image or video to media storage."""
    tenant_id = ctx.require_tenant()
    media_type = _media_type_for(file.content_type)

    file.file.seek(0, 2)
    file_size = file.file.tell()
    file.file.seek(0)
    if file_size > settings.MAX_UPLOAD_SIZE:
        raise ValidationError(f"File exceeds the {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB limit")

    stored = storage.upload(
        file.file,
        file_name=file.filename or "upload",
        resource_type=media_type.value,
        tenant_id=tenant_id,
    )
    logger.info(f"📁 Stored {media_type.value} {stored.public_id} for tenant {tenant_id}")

    media = MediaFile(
        tenant_id=tenant_id,
        uploaded_by=ctx.user.id,
        file_name=file.filename or "upload",
        file_url=stored.url,
        thumbnail_url=stored.thumbnail_url,
        file_size=file_size,
        mime_type=file.content_type,
        media_type=media_type,
        category=category,
        description=description,
        tags=tags,
        related_entity_id=related_entity_id,
        related_entity_type=related_entity_type,
    )
    db.add(media)
    db.commit()
    db.refresh(media)
    return media


@router.get("", response_model=List[schemas.MediaFile])
def list_media(
    db: Session = Depends(get_db),
    media_type: Optional[MediaType] = None,
    category: Optional[MediaCategory] = None,
    skip: int = 0,
    limit: int = 100,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    return crud.media_file.get_filtered(
        db, tenant_id=ctx.require_tenant(), media_type=media_type, category=category, skip=skip, limit=limit
    )


@router.get("/{media_id}", response_model=schemas.MediaFile)
def read_media(
    *,
    db: Session = Depends(get_db),
    media_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_MEMBER)),
) -> Any:
    media = _get_media(db, media_id)
    ctx.ensure_same_tenant(media.tenant_id)
    return media


@router.patch("/{media_id}", response_model=schemas.MediaFile)
def update_media(
    *,
    db: Session = Depends(get_db),
    media_id: str,
    media_in: schemas.MediaFileUpdate,
    ctx: AuthContext = Depends(deps.authorize(SELF_OR_ADMIN)),
) -> Any:
    media = _get_media(db, media_id)
    ctx.ensure_owner_or_admin(media.tenant_id, media.uploaded_by)
    return crud.media_file.update(db, db_obj=media, obj_in=media_in)


@router.delete("/{media_id}")
def delete_media(
    *,
    db: Session = Depends(get_db),
    media_id: str,
    ctx: AuthContext = Depends(deps.authorize(TENANT_ADMIN)),
) -> Any:
    media = _get_media(db, media_id)
    ctx.ensure_same_tenant(media.tenant_id)
    crud.media_file.remove(db, id=media_id)
    return {"message": "Media file deleted"}
