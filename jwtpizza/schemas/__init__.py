"""
Pydantic schemas for API request/response validation.
"""

from jwtpizza.schemas.user import (
    RoleEntry,
    UserResponse,
    identity_to_response,
    user_to_response,
)
from jwtpizza.schemas.auth import (
    AuthResponse,
    ChaosResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UpdateUserRequest,
)

__all__ = [
    # User
    "RoleEntry",
    "UserResponse",
    "identity_to_response",
    "user_to_response",
    # Auth
    "AuthResponse",
    "ChaosResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "UpdateUserRequest",
]
