# File: fellowship/api/deps.py
from typing import Callable, Dict, Optional

from fastapi import Depends, Request
from fastapi.requests import HTTPConnection
from sqlalchemy.orm import Session

from fellowship.core.config import settings
from fellowship.core.email_service import EmailService, email_service
from fellowship.core.exceptions import Unauthenticated
from fellowship.core.identity import IdentityVerifier
from fellowship.core.media_storage import MediaStorage, media_storage
from fellowship.core.permissions import AccessPolicy, AuthContext, check_policy
from fellowship.core.rate_limit import InvitationRateLimiter
from fellowship.core.security import resolve_session
from fellowship.core.websocket_manager import ConnectionRegistry
from fellowship.db.database import get_db
from fellowship.models.user import User


def get_session_cookie(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_user(
    db: Session = Depends(get_db),
    cookie: Optional[str] = Depends(get_session_cookie),
) -> User:
    user = resolve_session(db, cookie)
    if user is None:
        raise Unauthenticated()
    return user


def authorize(policy: AccessPolicy) -> Callable[..., AuthContext]:
    """Build a dependency enforcing ``policy`` for one route."""

    def dependency(current_user: User = Depends(get_current_user)) -> AuthContext:
        return check_policy(current_user, policy)

    return dependency


def get_registry(connection: HTTPConnection) -> ConnectionRegistry:
    return connection.app.state.registry


def get_rate_limiter(request: Request) -> InvitationRateLimiter:
    return request.app.state.invitation_rate_limiter


def get_identity_verifiers(request: Request) -> Dict[str, IdentityVerifier]:
    return request.app.state.identity_verifiers


def get_email_service() -> EmailService:
    return email_service


def get_media_storage() -> MediaStorage:
    return media_storage
