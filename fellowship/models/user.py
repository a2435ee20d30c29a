# File: fellowship/models/user.py
from sqlalchemy import Column, String, Enum, DateTime, Text, ForeignKey
from fellowship.models.base import BaseModel
import enum


class UserRole(enum.Enum):
    PLATFORM_ADMIN = "platform_admin"
    TENANT_ADMIN = "tenant_admin"
    MEMBER = "member"


class User(BaseModel):
    """An account. ``tenant_id`` stays null for platform admins and unaffiliated accounts."""

    __tablename__ = "users"

    external_id = Column(String(255), unique=True, nullable=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    phone_number = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)

    role = Column(Enum(UserRole), nullable=False, default=UserRole.MEMBER)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)

    # Payment processor references
    stripe_customer_id = Column(String(255), nullable=True)
    stripe_subscription_id = Column(String(255), nullable=True)

    last_login = Column(DateTime, nullable=True)

    @property
    def full_name(self) -> str:
        parts = [self.first_name or "", self.last_name or ""]
        return " ".join(p for p in parts if p).strip() or (self.email or "")
