# File: fellowship/core/exceptions.py
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class ApiError(HTTPException):
    """HTTP error with a stable machine-readable ``code``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "server_error"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
            headers=headers,
        )

    @property
    def message(self) -> str:
        return self.detail

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Authentication required"


class InvalidAssertion(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_assertion"
    default_message = "Identity token is invalid or expired"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Not enough permissions"


class NoTenantAssigned(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "no_tenant_assigned"
    default_message = "Account is not affiliated with an organization"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class AlreadyUsed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "already_used"
    default_message = "This invitation has already been used"


class Expired(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "expired"
    default_message = "This invitation has expired"


class EmailMismatch(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "email_mismatch"
    default_message = "This invitation was sent to a different email address"


class AlreadyMember(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "already_member"
    default_message = "User is already a member of this organization"


class DuplicateInvitation(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "duplicate_invitation"
    default_message = "A pending invitation already exists for this email"


class InvalidTransition(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_transition"
    default_message = "Organization has already been reviewed"


class RateLimited(ApiError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "rate_limited"
    default_message = "Too many invitations sent. Please try again later."

    def __init__(self, message: Optional[str] = None, retry_after: Optional[int] = None):
        headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
        super().__init__(message, headers=headers)
        self.retry_after = retry_after


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Invalid request"


class ServerError(ApiError):
    pass
