from __future__ import annotations

from sqlalchemy import ForeignKey, ForeignKeyConstraint, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, CreatedAtMixin


class Favorite(CreatedAtMixin, Base):
    """A GIF saved by a user, keyed by the provider's GIF id."""
    __tablename__ = "favorites"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    user: Mapped[str] = mapped_column(
        Text, ForeignKey("accounts.user", ondelete="CASCADE"), primary_key=True
    )
    url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    still_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    downsized_url: Mapped[str] = mapped_column(Text, nullable=False, default="")


class Tag(CreatedAtMixin, Base):
    """User-defined label attached to one of the user's favorites."""
    __tablename__ = "tags"
    __table_args__ = (
        ForeignKeyConstraint(
            ["favorite", "user"],
            ["favorites.id", "favorites.user"],
            ondelete="CASCADE",
            name="fk_tags_favorite_favorites",
        ),
    )

    tag: Mapped[str] = mapped_column(Text, primary_key=True)
    user: Mapped[str] = mapped_column(
        Text, ForeignKey("accounts.user", ondelete="CASCADE"), primary_key=True
    )
    favorite: Mapped[str] = mapped_column(Text, primary_key=True)
