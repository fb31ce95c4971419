"""Authenticated caller context for request authorization."""

from dataclasses import dataclass, field

from tenant_api.models.user import User, UserRole


@dataclass
class AuthContext:
    """
    Authenticated caller for one request.

    Built from the JWT claims validated by the auth middleware and the
    User row they point at. Used by routes for role and ownership checks.

    Attributes:
        user: The authenticated User object
        role: The user's application role
        claims: Decoded access-token payload
    """

    user: User
    role: UserRole
    claims: dict = field(default_factory=dict)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_tenant(self) -> bool:
        return self.role == UserRole.TENANT

    def owns_tenant(self, tenant_id: int | None) -> bool:
        """Check if the caller's own tenant profile has the given id."""
        tenant = self.user.tenant
        return tenant is not None and tenant_id is not None and tenant.id == tenant_id

    def __repr__(self) -> str:
        return f"<AuthContext(user_id={self.user.id}, role={self.role.value})>"
