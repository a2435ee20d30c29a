# File: fellowship/schemas/user.py
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from fellowship.models.user import UserRole


class UserBase(BaseModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class User(UserBase):
    id: str
    role: UserRole
    tenant_id: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    bio: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Member(UserBase):
    """Directory entry shown to other members of the same organization."""
    id: str
    role: UserRole
    phone_number: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    # Email belongs to the identity provider and is rejected here
    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    bio: Optional[str] = None
