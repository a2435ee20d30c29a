# File: fellowship/schemas/invitation.py
from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from email_validator import EmailNotValidError, validate_email
from fellowship.models.invitation import InvitationStatus
import enum


class InvitableRole(enum.Enum):
    MEMBER = "member"
    TENANT_ADMIN = "tenant_admin"


class InvitationCreate(BaseModel):
    email: str
    role: InvitableRole = InvitableRole.MEMBER

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str) -> str:
        # Acceptance compares addresses byte for byte, so keep what was typed
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e))
        return v


class Invitation(BaseModel):
    id: str
    email: str
    role: str
    tenant_id: str
    status: InvitationStatus
    expires_at: datetime
    invited_by: str
    responded_at: Optional[datetime] = None
    created_at: datetime


class InvitationPreview(BaseModel):
    email: str
    role: str
    tenant_id: str
    tenant_name: str
    status: InvitationStatus
    expires_at: datetime


class InvitationAccepted(BaseModel):
    tenant_id: str
