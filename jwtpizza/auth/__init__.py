"""
Authentication and Authorization module.

Provides:
- JWT token signing and verification (TokenCodec)
- Password hashing (Argon2id)
- Credential store and session registry
- Per-request identity resolution
- Role-based access policies
"""

from jwtpizza.auth.jwt import TokenCodec, TokenClaims
from jwtpizza.auth.password import hash_password, verify_password
from jwtpizza.auth.identity import ResolvedIdentity
from jwtpizza.auth.credentials import CredentialStore
from jwtpizza.auth.sessions import SessionRegistry
from jwtpizza.auth.resolver import AuthResolver, read_bearer_token
from jwtpizza.auth.dependencies import (
    RoleGate,
    get_current_identity,
    get_optional_identity,
    require_authenticated,
    require_role,
    require_self_or_role,
)
from jwtpizza.auth.service import AuthResult, AuthService, ChaosMonkey, set_chaos

__all__ = [
    # JWT
    "TokenCodec",
    "TokenClaims",
    # Password
    "hash_password",
    "verify_password",
    # Stores
    "CredentialStore",
    "SessionRegistry",
    # Resolution
    "ResolvedIdentity",
    "AuthResolver",
    "read_bearer_token",
    # Policies / dependencies
    "RoleGate",
    "get_current_identity",
    "get_optional_identity",
    "require_authenticated",
    "require_role",
    "require_self_or_role",
    # Service
    "AuthResult",
    "AuthService",
    "ChaosMonkey",
    "set_chaos",
]
