"""
User-related schemas.
"""

from typing import List, Optional

from pydantic import BaseModel

from jwtpizza.auth.identity import ResolvedIdentity
from jwtpizza.models.user import User


class RoleEntry(BaseModel):
    """One role membership in wire form."""

    role: str
    objectId: Optional[int] = None


class UserResponse(BaseModel):
    """Schema for user response (no password hash)."""

    id: int
    name: str
    email: str
    roles: List[RoleEntry]


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        roles=[RoleEntry(**claim) for claim in user.role_claims()],
    )


def identity_to_response(identity: ResolvedIdentity) -> UserResponse:
    return UserResponse(
        id=identity.id,
        name=identity.name,
        email=identity.email,
        roles=[RoleEntry(role=r.role, objectId=r.objectId) for r in identity.roles],
    )
