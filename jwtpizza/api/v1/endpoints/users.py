"""
User endpoints.
"""

from fastapi import APIRouter, Depends

from jwtpizza.auth.dependencies import get_current_identity
from jwtpizza.auth.identity import ResolvedIdentity
from jwtpizza.schemas.user import UserResponse, identity_to_response

router = APIRouter()

ENDPOINTS = [
    {
        "method": "GET",
        "path": "/api/user/me",
        "requiresAuth": True,
        "description": "Get authenticated user",
        "example": """curl -X GET localhost:3000/api/user/me -H 'Authorization: Bearer tttttt'""",
        "response": {"id": 1, "name": "常用名字", "email": "a@jwt.com", "roles": [{"role": "admin"}]},
    },
]


@router.get("/me", response_model=UserResponse, response_model_exclude_none=True)
async def get_me(
    identity: ResolvedIdentity = Depends(get_current_identity),
):
    """The caller, as resolved from their token."""
    return identity_to_response(identity)
