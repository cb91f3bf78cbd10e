"""
User and role models.

Security considerations:
- Passwords are hashed with Argon2id before they reach the model
- Email is unique and matched exactly (case-sensitive)
- All timestamps use UTC
"""

from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jwtpizza.core.database import Base

if TYPE_CHECKING:
    from jwtpizza.models.session import AuthSession


class Role(str, PyEnum):
    """Closed set of roles a user may hold (zero or more of each)."""
    DINER = "diner"
    ADMIN = "admin"
    FRANCHISEE = "franchisee"


class UserRole(Base):
    """One role membership of a user. Franchisee roles carry a franchise id."""

    __tablename__ = "user_roles"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    role: Mapped[Role] = mapped_column(
        Enum(Role, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
    )
    object_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="roles")

    def to_claim(self) -> Dict[str, Any]:
        claim: Dict[str, Any] = {"role": self.role.value}
        if self.object_id is not None:
            claim["objectId"] = self.object_id
        return claim

    def __repr__(self) -> str:
        return f"<UserRole {self.role.value} user={self.user_id}>"


class User(Base):
    """Registered user of the pizza service."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    roles: Mapped[List[UserRole]] = relationship(
        UserRole,
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=UserRole.id,
    )
    sessions: Mapped[List["AuthSession"]] = relationship(
        "AuthSession",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"

    def role_claims(self) -> List[Dict[str, Any]]:
        """Roles in wire form: [{"role": "diner"}, ...]."""
        return [r.to_claim() for r in self.roles]
