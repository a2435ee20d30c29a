# File: fellowship/models/tenant.py
from sqlalchemy import Column, String, Text, Enum, DateTime
from fellowship.models.base import BaseModel
import enum


class TenantStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class OrganizationType(enum.Enum):
    CHURCH = "church"
    NONPROFIT = "nonprofit"
    BUSINESS = "business"
    CLUB = "club"
    COMMUNITY = "community"
    OTHER = "other"


class Tenant(BaseModel):
    __tablename__ = "tenants"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)
    logo_url = Column(String(500), nullable=True)
    banner_url = Column(String(500), nullable=True)
    organization_type = Column(Enum(OrganizationType), nullable=False, default=OrganizationType.CHURCH)
    status = Column(Enum(TenantStatus), nullable=False, default=TenantStatus.PENDING, index=True)

    # The registering account; promoted to tenant admin on approval
    admin_user_id = Column(String(36), nullable=False, index=True)

    reviewed_by = Column(String(36), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
