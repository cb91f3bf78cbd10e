"""Request-scoped identity resolved from a verified, registered token."""

from dataclasses import dataclass
from typing import Tuple, Union

from jwtpizza.auth.jwt import RoleClaim, TokenClaims
from jwtpizza.models.user import Role


@dataclass(frozen=True)
class ResolvedIdentity:
    """
    Read-only view of the caller for the duration of one request.

    Built only by the auth resolver; never persisted. Roles keep the order
    and franchise ids they were issued with.
    """
    id: int
    name: str
    email: str
    roles: Tuple[RoleClaim, ...]

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "ResolvedIdentity":
        return cls(
            id=claims.id,
            name=claims.name,
            email=claims.email,
            roles=tuple(claims.roles),
        )

    def has_role(self, role: Union[Role, str]) -> bool:
        value = role.value if isinstance(role, Role) else role
        return any(r.role == value for r in self.roles)
