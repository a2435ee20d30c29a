# File: fellowship/schemas/tenant.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from fellowship.models.tenant import OrganizationType, TenantStatus


class TenantBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    organization_type: OrganizationType = OrganizationType.CHURCH


class TenantRegister(TenantBase):
    pass


class TenantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    organization_type: Optional[OrganizationType] = None


class Tenant(TenantBase):
    id: str
    email: Optional[str] = None
    status: TenantStatus
    admin_user_id: str
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TenantPublic(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    organization_type: OrganizationType

    class Config:
        from_attributes = True
