"""
Per-request authentication.

Turns an Authorization header into a ResolvedIdentity, or into nothing.
Resolution never fails the request: a missing, malformed, forged, or revoked
token (or an unreachable registry) all mean "anonymous", and it is up to the
handler's guards to reject anonymous callers.
"""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jwtpizza.auth.identity import ResolvedIdentity
from jwtpizza.auth.jwt import TokenCodec
from jwtpizza.auth.sessions import SessionRegistry
from jwtpizza.core.errors import InvalidSignature
from jwtpizza.core.logging import get_logger

logger = get_logger(__name__)


def read_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an 'Authorization: Bearer <token>' header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class AuthResolver:
    """Validates bearer tokens against the codec and the session registry."""

    def __init__(
        self,
        codec: TokenCodec,
        session_maker: async_sessionmaker[AsyncSession],
    ):
        self.codec = codec
        self.session_maker = session_maker

    async def resolve(self, token: Optional[str]) -> Optional[ResolvedIdentity]:
        if not token:
            return None

        try:
            claims = self.codec.verify(token)
        except InvalidSignature as e:
            logger.debug("token_rejected", reason=str(e))
            return None

        try:
            async with self.session_maker() as db:
                registered = await SessionRegistry(db).exists(token)
        except SQLAlchemyError as e:
            logger.warning("session_registry_unavailable", error=str(e))
            return None

        if not registered:
            logger.debug("token_not_registered", user_id=claims.id)
            return None

        return ResolvedIdentity.from_claims(claims)
