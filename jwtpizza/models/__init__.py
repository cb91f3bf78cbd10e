"""
JWT Pizza Database Models

This module exports all SQLAlchemy models for the application.
"""

from jwtpizza.models.user import User, UserRole, Role
from jwtpizza.models.session import AuthSession

__all__ = [
    # User models
    "User",
    "UserRole",
    "Role",
    # Session registry
    "AuthSession",
]
