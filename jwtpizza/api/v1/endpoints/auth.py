"""
Authentication endpoints.

Provides:
- Register (name/email/password → user + token)
- Login (email/password → user + token)
- Update user (self or admin)
- Logout (revokes the presented token)
- Chaos toggle (admin only; hidden from everyone else)
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from jwtpizza.auth.dependencies import RoleGate, get_current_identity
from jwtpizza.auth.identity import ResolvedIdentity
from jwtpizza.auth.service import AuthService, set_chaos
from jwtpizza.core.database import get_db
from jwtpizza.models.user import Role
from jwtpizza.schemas.auth import (
    AuthResponse,
    ChaosResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UpdateUserRequest,
)
from jwtpizza.schemas.user import UserResponse, user_to_response

router = APIRouter()

admin_only = RoleGate(Role.ADMIN)

ENDPOINTS = [
    {
        "method": "POST",
        "path": "/api/auth",
        "description": "Register a new user",
        "example": """curl -X POST localhost:3000/api/auth -d '{"name":"pizza diner", "email":"d@jwt.com", "password":"diner"}' -H 'Content-Type: application/json'""",
        "response": {"user": {"id": 2, "name": "pizza diner", "email": "d@jwt.com", "roles": [{"role": "diner"}]}, "token": "tttttt"},
    },
    {
        "method": "PUT",
        "path": "/api/auth",
        "description": "Login existing user",
        "example": """curl -X PUT localhost:3000/api/auth -d '{"email":"a@jwt.com", "password":"admin"}' -H 'Content-Type: application/json'""",
        "response": {"user": {"id": 1, "name": "常用名字", "email": "a@jwt.com", "roles": [{"role": "admin"}]}, "token": "tttttt"},
    },
    {
        "method": "PUT",
        "path": "/api/auth/:userId",
        "requiresAuth": True,
        "description": "Update user",
        "example": """curl -X PUT localhost:3000/api/auth/1 -d '{"email":"a@jwt.com", "password":"admin"}' -H 'Content-Type: application/json' -H 'Authorization: Bearer tttttt'""",
        "response": {"id": 1, "name": "常用名字", "email": "a@jwt.com", "roles": [{"role": "admin"}]},
    },
    {
        "method": "DELETE",
        "path": "/api/auth",
        "requiresAuth": True,
        "description": "Logout a user",
        "example": """curl -X DELETE localhost:3000/api/auth -H 'Authorization: Bearer tttttt'""",
        "response": {"message": "logout successful"},
    },
    {
        "method": "PUT",
        "path": "/api/auth/chaos/:state",
        "requiresAuth": True,
        "description": "Enable Chaos",
        "example": """curl -X PUT localhost:3000/api/auth/chaos/true -H 'Authorization: Bearer tttttt'""",
        "response": {"chaos": True},
    },
]


def get_auth_service(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AuthService:
    return AuthService(db, request.app.state.token_codec, request.app.state.metrics)


@router.post("", response_model=AuthResponse, response_model_exclude_none=True)
async def register(
    body: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Register a new diner and return the user with a fresh token."""
    result = await service.register(body.name, body.email, body.password)
    return AuthResponse(user=user_to_response(result.user), token=result.token)


@router.put("", response_model=AuthResponse, response_model_exclude_none=True)
async def login(
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate and return the user with a fresh token.

    Each login opens an additional session; earlier tokens stay valid until
    they are logged out.
    """
    result = await service.login(body.email, body.password)
    return AuthResponse(user=user_to_response(result.user), token=result.token)


@router.delete("", response_model=MessageResponse)
async def logout(
    request: Request,
    identity: ResolvedIdentity = Depends(get_current_identity),
    service: AuthService = Depends(get_auth_service),
):
    """Revoke the token this request was authenticated with."""
    return await service.logout(request.state.token)


@router.put("/chaos/{state}", response_model=ChaosResponse)
async def chaos(
    request: Request,
    state: str,
    identity: ResolvedIdentity = Depends(admin_only),
):
    """Toggle chaos mode. Non-admins get the same 404 as an unknown route."""
    return set_chaos(identity, request.app.state.chaos, state)


@router.put("/{user_id}", response_model=UserResponse, response_model_exclude_none=True)
async def update_user(
    user_id: int,
    body: UpdateUserRequest,
    identity: ResolvedIdentity = Depends(get_current_identity),
    service: AuthService = Depends(get_auth_service),
):
    """Update a user's name, email or password (self or admin)."""
    user = await service.update_user(
        identity,
        user_id,
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return user_to_response(user)
