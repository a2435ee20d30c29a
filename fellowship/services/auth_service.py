# File: fellowship/services/auth_service.py
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fellowship import crud
from fellowship.core.exceptions import ServerError
from fellowship.core.identity import IdentityClaims
from fellowship.models.user import User, UserRole

logger = logging.getLogger(__name__)


def upsert_account(db: Session, claims: IdentityClaims, now: Optional[datetime] = None) -> User:
    """Map verified identity claims to an internal account.

    Lookup is by provider subject first, then by email so an account created
    under an earlier sign-in method keeps its id and picks up the new subject.
    Only profile fields are refreshed; role and organization never change here.
    """
    now = now or datetime.utcnow()

    user = crud.user.get_by_external_id(db, external_id=claims.subject)
    if user is None and claims.email:
        user = crud.user.get_by_email(db, email=claims.email)
        if user is not None:
            logger.info(f"🔗 Linking existing account {user.id} to new identity subject")

    if user is None:
        user = User(
            external_id=claims.subject,
            email=claims.email,
            role=UserRole.MEMBER,
            tenant_id=None,
        )
        db.add(user)
        logger.info(f"👤 Creating account for {claims.email or claims.subject}")

    user.external_id = claims.subject
    if claims.email:
        user.email = claims.email
    if claims.first_name:
        user.first_name = claims.first_name
    if claims.last_name:
        user.last_name = claims.last_name
    if claims.picture:
        user.profile_image_url = claims.picture
    user.last_login = now

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to save account during sign-in")
        raise ServerError("Failed to save account")

    db.refresh(user)
    return user
