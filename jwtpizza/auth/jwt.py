"""
JWT token codec.

Tokens are self-contained (claims: id, name, email, roles) but a valid
signature alone never authorizes a request: callers must also find the token
in the session registry. The signing secret is injected at construction so
each environment (and each test) can use its own key.
"""

import secrets
from datetime import datetime, timezone
from typing import Any, Dict, List

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, ValidationError

from jwtpizza.core.errors import InvalidSignature
from jwtpizza.models.user import User


class RoleClaim(BaseModel):
    """One entry of the roles claim."""
    model_config = ConfigDict(frozen=True)

    role: str
    objectId: int | None = None


class TokenClaims(BaseModel):
    """Decoded JWT payload."""
    id: int
    name: str
    email: str
    roles: List[RoleClaim]
    iat: int | None = None
    jti: str | None = None


class TokenCodec:
    """Signs user claim sets into bearer tokens and verifies them."""

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        if not secret_key:
            raise ValueError("TokenCodec requires a non-empty secret key")
        self._secret_key = secret_key
        self.algorithm = algorithm

    def issue(self, user: User) -> str:
        """
        Create a signed token for a user.

        The jti nonce keeps tokens unique even when the same user logs in
        twice within one second; the token string is the registry key.
        """
        payload: Dict[str, Any] = {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "roles": user.role_claims(),
            "iat": int(datetime.now(timezone.utc).timestamp()),
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a token's signature and structure and return its claims.

        Raises:
            InvalidSignature: If the token is malformed, tampered with,
                signed with another key, expired, or missing claims
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidSignature(str(e)) from e

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise InvalidSignature("token claims are malformed") from e
