"""
Authorization policies and their FastAPI dependency wrappers.

Provides:
- require_authenticated: 401 when no identity was resolved
- require_self_or_role: 403 unless the caller is the target or holds the role
- require_role: 404 when the caller lacks the role, hiding the endpoint
"""

from typing import Optional

from fastapi import Depends, Request

from jwtpizza.auth.identity import ResolvedIdentity
from jwtpizza.core.errors import Forbidden, ObscuredNotFound, Unauthorized
from jwtpizza.core.logging import get_logger
from jwtpizza.models.user import Role

logger = get_logger(__name__)


def require_authenticated(identity: Optional[ResolvedIdentity]) -> ResolvedIdentity:
    if identity is None:
        raise Unauthorized()
    return identity


def require_self_or_role(
    identity: ResolvedIdentity,
    target_user_id: int,
    role: Role,
) -> None:
    """
    Allow the target user themselves, or anyone holding `role`.

    Raises:
        Forbidden: Otherwise
    """
    if identity.id == target_user_id or identity.has_role(role):
        return
    logger.info(
        "access_forbidden",
        actor_id=identity.id,
        target_user_id=target_user_id,
        required_role=role.value,
    )
    raise Forbidden()


def require_role(identity: ResolvedIdentity, role: Role) -> None:
    """
    Allow only callers holding `role`.

    Raises:
        ObscuredNotFound: Otherwise. Callers without the role get the same
            404 as for a route that does not exist.
    """
    if not identity.has_role(role):
        raise ObscuredNotFound()


# =============================================================================
# FastAPI dependencies
# =============================================================================

async def get_optional_identity(request: Request) -> Optional[ResolvedIdentity]:
    """Identity resolved by AuthResolverMiddleware, or None."""
    return getattr(request.state, "identity", None)


async def get_current_identity(
    identity: Optional[ResolvedIdentity] = Depends(get_optional_identity),
) -> ResolvedIdentity:
    """
    Require an authenticated caller.

    Usage:
        @router.delete("")
        async def logout(identity: ResolvedIdentity = Depends(get_current_identity)):
            ...
    """
    return require_authenticated(identity)


class RoleGate:
    """
    Class-based dependency for role-gated endpoints.

    Usage:
        admin_only = RoleGate(Role.ADMIN)

        @router.put("/chaos/{state}")
        async def endpoint(identity: ResolvedIdentity = Depends(admin_only)):
            ...
    """

    def __init__(self, role: Role):
        self.role = role

    async def __call__(
        self,
        identity: ResolvedIdentity = Depends(get_current_identity),
    ) -> ResolvedIdentity:
        require_role(identity, self.role)
        return identity
