"""
Credential store: persisted users, their password hashes and roles.

All lookups match email exactly. Login failures are reported with a single
error whether the account is missing or the password is wrong.
"""

from typing import Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jwtpizza.auth.password import (
    burn_verification,
    hash_password,
    needs_rehash,
    verify_password,
)
from jwtpizza.core.errors import DuplicateEmail, InvalidCredentials, UnknownUser
from jwtpizza.models.user import Role, User, UserRole


class CredentialStore:
    """User persistence operations over one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: int) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.email == email))
        return result.first() is not None

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(User.id)))
        return result.scalar_one()

    async def create(
        self,
        name: str,
        email: str,
        password: str,
        roles: Iterable[Role | UserRole],
    ) -> User:
        """
        Create a user with a hashed password.

        Roles may be plain Role values or UserRole rows (for franchise-scoped
        roles carrying an object id).

        Raises:
            DuplicateEmail: If the email is already registered
        """
        if await self.email_exists(email):
            raise DuplicateEmail()

        user = User(name=name, email=email, password_hash=hash_password(password))
        user.roles = [
            r if isinstance(r, UserRole) else UserRole(role=Role(r))
            for r in roles
        ]
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email
            await self.db.rollback()
            raise DuplicateEmail() from e

        return user

    async def lookup(self, email: str, password: str) -> User:
        """
        Find a user by email and password.

        Raises:
            InvalidCredentials: If the email is unknown or the password is wrong
        """
        user = await self.get_by_email(email)
        if user is None:
            burn_verification(password)
            raise InvalidCredentials()

        if not verify_password(password, user.password_hash):
            raise InvalidCredentials()

        # Upgrade hashes made with outdated Argon2 parameters
        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            await self.db.commit()

        return user

    async def update(
        self,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """
        Partially update a user. Only the supplied fields change; empty
        strings count as not supplied.

        Raises:
            UnknownUser: If no user has this id
            DuplicateEmail: If the new email belongs to another user
        """
        user = await self.get(user_id)
        if user is None:
            raise UnknownUser()

        if email and email != user.email:
            other = await self.get_by_email(email)
            if other is not None and other.id != user.id:
                raise DuplicateEmail()
            user.email = email
        if name:
            user.name = name
        if password:
            user.password_hash = hash_password(password)

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateEmail() from e

        return user
