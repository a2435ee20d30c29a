# File: fellowship/core/permissions.py
import enum
from dataclasses import dataclass
from typing import Optional

from fellowship.core.exceptions import Forbidden, NoTenantAssigned
from fellowship.models.user import User, UserRole


class RoleClass(enum.Enum):
    PLATFORM_ADMIN_ONLY = "platform_admin_only"
    TENANT_ADMIN_OR_ABOVE = "tenant_admin_or_above"
    ANY_AUTHENTICATED = "any_authenticated"
    # Ownership is decided per record by AuthContext.ensure_owner_or_admin
    SELF_OR_TENANT_ADMIN = "self_or_tenant_admin"


ALLOWED_ROLES = {
    RoleClass.PLATFORM_ADMIN_ONLY: {UserRole.PLATFORM_ADMIN},
    RoleClass.TENANT_ADMIN_OR_ABOVE: {UserRole.PLATFORM_ADMIN, UserRole.TENANT_ADMIN},
    RoleClass.ANY_AUTHENTICATED: set(UserRole),
    RoleClass.SELF_OR_TENANT_ADMIN: set(UserRole),
}


@dataclass(frozen=True)
class AccessPolicy:
    role_class: RoleClass
    tenant_scoped: bool = True


@dataclass
class AuthContext:
    """The authenticated caller, as seen by a policy-gated route."""

    user: User

    @property
    def role(self) -> UserRole:
        return self.user.role

    @property
    def tenant_id(self) -> Optional[str]:
        return self.user.tenant_id

    @property
    def is_platform_admin(self) -> bool:
        return self.user.role == UserRole.PLATFORM_ADMIN

    @property
    def is_tenant_admin(self) -> bool:
        return self.user.role == UserRole.TENANT_ADMIN

    def require_tenant(self) -> str:
        if not self.user.tenant_id:
            raise NoTenantAssigned()
        return self.user.tenant_id

    def ensure_same_tenant(self, tenant_id: str) -> None:
        if self.is_platform_admin:
            return
        if self.require_tenant() != tenant_id:
            raise Forbidden("Resource belongs to another organization")

    def ensure_owner_or_admin(self, tenant_id: str, owner_id: Optional[str]) -> None:
        self.ensure_same_tenant(tenant_id)
        if owner_id is not None and owner_id == self.user.id:
            return
        if not (self.is_platform_admin or self.is_tenant_admin):
            raise Forbidden("You can only modify your own records")


def check_policy(user: User, policy: AccessPolicy) -> AuthContext:
    """Role check then tenant presence; scope comparison happens per record."""
    if user.role not in ALLOWED_ROLES[policy.role_class]:
        raise Forbidden()

    context = AuthContext(user=user)
    if policy.tenant_scoped and not context.is_platform_admin:
        context.require_tenant()
    return context


PLATFORM_ADMIN = AccessPolicy(RoleClass.PLATFORM_ADMIN_ONLY, tenant_scoped=False)
TENANT_ADMIN = AccessPolicy(RoleClass.TENANT_ADMIN_OR_ABOVE)
TENANT_MEMBER = AccessPolicy(RoleClass.ANY_AUTHENTICATED)
SELF_OR_ADMIN = AccessPolicy(RoleClass.SELF_OR_TENANT_ADMIN)
AUTHENTICATED = AccessPolicy(RoleClass.ANY_AUTHENTICATED, tenant_scoped=False)
