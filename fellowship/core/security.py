# File: fellowship/core/security.py
"""Server-side sessions.

A session is a row in the ``sessions`` table; the browser only holds a signed
reference to it. Every API instance resolves the cookie against the database,
so there is no per-process session state.
"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fellowship.core.config import settings
from fellowship.core.exceptions import ServerError
from fellowship.models.session import UserSession
from fellowship.models.user import User

logger = logging.getLogger(__name__)


def encode_session_cookie(session_id: str, expires_at: datetime) -> str:
    to_encode = {"sid": session_id, "exp": expires_at}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)


def decode_session_cookie(cookie: str) -> Optional[str]:
    try:
        payload = jwt.decode(cookie, settings.SECRET_KEY, algorithms=[settings.SESSION_ALGORITHM])
    except JWTError:
        return None
    session_id = payload.get("sid")
    return session_id if isinstance(session_id, str) else None


def create_session(db: Session, user: User, subject: str, now: Optional[datetime] = None) -> str:
    """Persist a new session for ``user`` and return the signed cookie value.

    Raises ``ServerError`` when the session cannot be stored; login must not
    continue without a session.
    """
    now = now or datetime.utcnow()
    expires_at = now + timedelta(days=settings.SESSION_TTL_DAYS)
    session_row = UserSession(
        id=secrets.token_urlsafe(32),
        user_id=user.id,
        subject=subject,
        expires_at=expires_at,
    )
    try:
        db.add(session_row)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to persist session for user {user.id}")
        raise ServerError("Failed to create session")

    logger.info(f"Session created for user {user.id}")
    return encode_session_cookie(session_row.id, expires_at)


def resolve_session(db: Session, cookie: Optional[str], now: Optional[datetime] = None) -> Optional[User]:
    """Map a session cookie to its account, or None.

    Shared by REST dependencies and the WebSocket handshake.
    """
    if not cookie:
        return None
    session_id = decode_session_cookie(cookie)
    if session_id is None:
        return None

    now = now or datetime.utcnow()
    session_row = db.query(UserSession).filter(UserSession.id == session_id).first()
    if session_row is None or session_row.expires_at <= now:
        return None

    # None when the account was deleted after login
    return db.query(User).filter(User.id == session_row.user_id).first()


def destroy_session(db: Session, cookie: Optional[str]) -> None:
    if not cookie:
        return
    session_id = decode_session_cookie(cookie)
    if session_id is None:
        return
    try:
        db.query(UserSession).filter(UserSession.id == session_id).delete()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete session")
        raise ServerError("Failed to end session")
