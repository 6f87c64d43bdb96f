from __future__ import annotations

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, CreatedAtMixin


class Account(CreatedAtMixin, Base):
    """A user that can log in."""
    __tablename__ = "accounts"

    user: Mapped[str] = mapped_column(Text, primary_key=True)
    hashed_password: Mapped[str] = mapped_column(Text, nullable=False)


class LoginSession(CreatedAtMixin, Base):
    """Opaque session token issued at login. A user holds at most one."""
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    user: Mapped[str] = mapped_column(
        Text,
        ForeignKey("accounts.user", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
