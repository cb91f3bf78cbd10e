"""
Auth operations exposed to the routing layer.

Register and login open a session (issue a token and record it in the
registry); logout closes one. Every operation reports to the metrics
facade, which never raises.
"""

import re
import time
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from jwtpizza.auth.credentials import CredentialStore
from jwtpizza.auth.dependencies import require_self_or_role
from jwtpizza.auth.identity import ResolvedIdentity
from jwtpizza.auth.jwt import TokenCodec
from jwtpizza.auth.sessions import SessionRegistry
from jwtpizza.core.errors import BadRequest, InvalidCredentials, InvalidEmailFormat
from jwtpizza.core.logging import get_logger
from jwtpizza.models.user import Role, User
from jwtpizza.observability.metrics import AuthMetrics

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email_format(email: Optional[str]) -> str:
    """
    Raises:
        InvalidEmailFormat: If the email is missing or malformed
    """
    if not email or not EMAIL_PATTERN.fullmatch(email):
        raise InvalidEmailFormat()
    return email


@dataclass
class AuthResult:
    """A user together with the token just issued for them."""
    user: User
    token: str


class ChaosMonkey:
    """Process-wide chaos flag toggled by admins for failure testing."""

    def __init__(self) -> None:
        self.enabled = False


class AuthService:
    """Register, login, logout and update-user over one database session."""

    def __init__(
        self,
        db: AsyncSession,
        codec: TokenCodec,
        metrics: Optional[AuthMetrics] = None,
    ):
        self.credentials = CredentialStore(db)
        self.sessions = SessionRegistry(db)
        self.codec = codec
        self.metrics = metrics or AuthMetrics()

    async def _open_session(self, user: User) -> str:
        token = self.codec.issue(user)
        await self.sessions.create(user.id, token)
        self.metrics.session_opened()
        return token

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> AuthResult:
        """
        Create a diner account and log it in.

        Raises:
            BadRequest: If name, email or password is missing
            InvalidEmailFormat: If the email is malformed
            DuplicateEmail: If the email is already registered
        """
        start = time.perf_counter()
        self.metrics.request("post")

        if not name or not email or not password:
            raise BadRequest("name, email, and password are required")
        validate_email_format(email)

        user = await self.credentials.create(name, email, password, [Role.DINER])
        token = await self._open_session(user)

        logger.info("user_registered", user_id=user.id)
        self.metrics.latency("register", (time.perf_counter() - start) * 1000)
        return AuthResult(user=user, token=token)

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """
        Raises:
            InvalidCredentials: For an unknown email or a wrong password alike
        """
        start = time.perf_counter()
        self.metrics.request("put")

        if not email or not password:
            self.metrics.auth_attempt(success=False)
            raise InvalidCredentials()

        try:
            user = await self.credentials.lookup(email, password)
        except InvalidCredentials:
            self.metrics.auth_attempt(success=False)
            logger.info("login_failed")
            raise

        token = await self._open_session(user)
        self.metrics.auth_attempt(success=True)

        logger.info("login_succeeded", user_id=user.id)
        self.metrics.latency("login", (time.perf_counter() - start) * 1000)
        return AuthResult(user=user, token=token)

    async def logout(self, token: Optional[str]) -> dict:
        """Revoke a token. Succeeds whether or not the session still existed."""
        start = time.perf_counter()
        self.metrics.request("delete")

        if token and await self.sessions.revoke(token):
            self.metrics.session_closed()
            logger.info("logout")

        self.metrics.latency("logout", (time.perf_counter() - start) * 1000)
        return {"message": "logout successful"}

    async def update_user(
        self,
        identity: ResolvedIdentity,
        target_user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """
        Update a user's name, email or password. Allowed for the user
        themselves and for admins. An empty name or password leaves the
        stored value unchanged.

        Raises:
            Forbidden: If the caller is neither the target nor an admin
            InvalidEmailFormat: If a new email is supplied and malformed
            DuplicateEmail: If the new email belongs to someone else
            UnknownUser: If the target does not exist
        """
        start = time.perf_counter()
        self.metrics.request("put")

        require_self_or_role(identity, target_user_id, Role.ADMIN)
        if email is not None:
            validate_email_format(email)

        user = await self.credentials.update(
            target_user_id, name=name, email=email, password=password
        )

        logger.info("user_updated", actor_id=identity.id, user_id=user.id)
        self.metrics.latency("update_user", (time.perf_counter() - start) * 1000)
        return user


def set_chaos(identity: ResolvedIdentity, chaos: ChaosMonkey, state: str) -> dict:
    """
    Flip the chaos flag. The caller must already have passed the admin gate
    (`RoleGate(Role.ADMIN)` on the route).
    """
    chaos.enabled = state == "true"
    logger.warning("chaos_toggled", actor_id=identity.id, enabled=chaos.enabled)
    return {"chaos": chaos.enabled}
