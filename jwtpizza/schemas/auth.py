"""
Authentication-related schemas.

Request fields are optional at the schema level: missing fields and bad
email formats are reported by the service with the service's own status
codes rather than FastAPI's generic 422.
"""

from typing import Optional

from pydantic import BaseModel, Field

from jwtpizza.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    """Register a new diner."""

    name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="User email address")
    password: Optional[str] = Field(default=None, description="User password")

    model_config = {
        "json_schema_extra": {
            "example": {"name": "pizza diner", "email": "d@jwt.com", "password": "diner"}
        }
    }


class LoginRequest(BaseModel):
    """Login with email and password."""

    email: Optional[str] = Field(default=None, description="User email address")
    password: Optional[str] = Field(default=None, description="User password")


class UpdateUserRequest(BaseModel):
    """Partial user update. Omitted fields are left unchanged."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    """Register/login response."""

    user: UserResponse
    token: str = Field(description="Bearer token (JWT)")


class MessageResponse(BaseModel):
    message: str


class ChaosResponse(BaseModel):
    chaos: bool
