"""
Session registry model.

A row exists for every token that has been issued by register/login and not
yet revoked by logout. The token string itself is the primary key, so the
existence check on every authenticated request is a single index lookup.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jwtpizza.core.database import Base

if TYPE_CHECKING:
    from jwtpizza.models.user import User


class AuthSession(Base):
    """A live authorization grant."""

    __tablename__ = "auth_sessions"

    token: Mapped[str] = mapped_column(Text, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )

    user: Mapped["User"] = relationship("User", back_populates="sessions")

    def __repr__(self) -> str:
        return f"<AuthSession user={self.user_id}>"
