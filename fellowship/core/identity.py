# File: fellowship/core/identity.py
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from fellowship.core.config import settings
from fellowship.core.exceptions import InvalidAssertion

logger = logging.getLogger(__name__)


@dataclass
class IdentityClaims:
    subject: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    picture: Optional[str] = None

    @property
    def first_name(self) -> Optional[str]:
        if not self.display_name:
            return None
        return self.display_name.split(" ", 1)[0]

    @property
    def last_name(self) -> Optional[str]:
        if not self.display_name or " " not in self.display_name:
            return None
        return self.display_name.split(" ", 1)[1]


class IdentityVerifier:
    """Verifies a bearer assertion issued by an external identity provider."""

    name = "base"

    def verify(self, token: str) -> IdentityClaims:
        raise NotImplementedError


class FirebaseIdentityVerifier(IdentityVerifier):
    """Handle Firebase ID tokens"""

    name = "firebase"

    def __init__(self, project_id: Optional[str] = None):
        self.project_id = project_id or settings.FIREBASE_PROJECT_ID
        self._request = google_requests.Request()

    def verify(self, token: str) -> IdentityClaims:
        if not self.project_id:
            logger.error("FIREBASE_PROJECT_ID is not configured")
            raise InvalidAssertion("Identity provider is not configured")

        try:
            claims = id_token.verify_firebase_token(token, self._request, audience=self.project_id)
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            logger.warning(f"Firebase token rejected: {str(e)}")
            raise InvalidAssertion()

        if not claims or not claims.get("sub"):
            raise InvalidAssertion()

        return IdentityClaims(
            subject=claims["sub"],
            email=claims.get("email"),
            display_name=claims.get("name"),
            picture=claims.get("picture"),
        )


def build_identity_verifiers() -> Dict[str, IdentityVerifier]:
    return {FirebaseIdentityVerifier.name: FirebaseIdentityVerifier()}
