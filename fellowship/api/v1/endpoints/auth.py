# File: fellowship/api/v1/endpoints/auth.py
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Header, Response
from sqlalchemy.orm import Session
from fellowship import schemas
from fellowship.api import deps
from fellowship.core.config import settings
from fellowship.core.exceptions import InvalidAssertion, NotFound
from fellowship.core.identity import IdentityVerifier
from fellowship.core.security import create_session, destroy_session
from fellowship.db.database import get_db
from fellowship.models.user import User
from fellowship.services.auth_service import upsert_account
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise InvalidAssertion("Missing bearer token")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise InvalidAssertion("Missing bearer token")
    return token.strip()


def _set_session_cookie(response: Response, cookie: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=cookie,
        max_age=settings.SESSION_TTL_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


@router.get("/user", response_model=schemas.User)
def read_current_user(
    current_user: User = Depends(deps.get_current_user),
) -> Any:
    """Get the signed-in account."""
    return current_user


@router.post("/logout")
def logout(
    response: Response,
    db: Session = Depends(get_db),
    cookie: Optional[str] = Depends(deps.get_session_cookie),
) -> Any:
    """End the current session."""
    destroy_session(db, cookie)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}


@router.post("/{provider}", response_model=schemas.User)
def sign_in(
    *,
    provider: str,
    response: Response,
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None),
    verifiers: Dict[str, IdentityVerifier] = Depends(deps.get_identity_verifiers),
) -> Any:
    """Exchange an identity provider token for a session."""
    verifier = verifiers.get(provider)
    if verifier is None:
        raise NotFound(f"Unknown identity provider '{provider}'")

    claims = verifier.verify(_bearer_token(authorization))
    user = upsert_account(db, claims)
    cookie = create_session(db, user, subject=claims.subject)
    _set_session_cookie(response, cookie)

    logger.info(f"🔐 {provider} sign-in for user {user.id}")
    return user
