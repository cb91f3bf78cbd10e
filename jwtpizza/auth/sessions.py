"""
Session registry: the set of tokens that are currently allowed.

This is the sole authority for revocation. Every operation is a single
statement committed on its own, so concurrent requests see either the row
or its absence and never a partial state.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from jwtpizza.models.session import AuthSession


class SessionRegistry:
    """Token registry operations over one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, user_id: int, token: str) -> AuthSession:
        """
        Register a freshly issued token.

        A duplicate token is a logic error; the integrity error propagates.
        """
        session = AuthSession(token=token, user_id=user_id)
        self.db.add(session)
        await self.db.commit()
        return session

    async def exists(self, token: str) -> bool:
        result = await self.db.execute(
            select(AuthSession.token).where(AuthSession.token == token)
        )
        return result.first() is not None

    async def revoke(self, token: str) -> bool:
        """
        Remove a token. Revoking an unknown token is a no-op.

        Returns:
            True if a session was removed
        """
        result = await self.db.execute(
            delete(AuthSession).where(AuthSession.token == token)
        )
        await self.db.commit()
        return (result.rowcount or 0) > 0

    async def count_for_user(self, user_id: int) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(AuthSession).where(AuthSession.user_id == user_id)
        )
        return result.scalar_one()
