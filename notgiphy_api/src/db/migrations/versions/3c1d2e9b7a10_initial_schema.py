"""Initial schema.

- accounts
- sessions (one row per logged-in user)
- favorites (keyed by GIF id and user)
- tags (labels on favorites)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1d2e9b7a10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("user", sa.Text(), nullable=False),
        sa.Column("hashed_password", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("user", name="pk_accounts"),
    )

    op.create_table(
        "sessions",
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("user", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_sessions"),
        sa.UniqueConstraint("user", name="uq_sessions_user"),
        sa.ForeignKeyConstraint(
            ["user"], ["accounts.user"], ondelete="CASCADE", name="fk_sessions_user_accounts"
        ),
    )

    op.create_table(
        "favorites",
        sa.Column("id", sa.Text(), nullable=False),
        sa.Column("user", sa.Text(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("still_url", sa.Text(), nullable=False),
        sa.Column("downsized_url", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", "user", name="pk_favorites"),
        sa.ForeignKeyConstraint(
            ["user"], ["accounts.user"], ondelete="CASCADE", name="fk_favorites_user_accounts"
        ),
    )

    op.create_table(
        "tags",
        sa.Column("tag", sa.Text(), nullable=False),
        sa.Column("user", sa.Text(), nullable=False),
        sa.Column("favorite", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("tag", "user", "favorite", name="pk_tags"),
        sa.ForeignKeyConstraint(
            ["user"], ["accounts.user"], ondelete="CASCADE", name="fk_tags_user_accounts"
        ),
        sa.ForeignKeyConstraint(
            ["favorite", "user"],
            ["favorites.id", "favorites.user"],
            ondelete="CASCADE",
            name="fk_tags_favorite_favorites",
        ),
    )


def downgrade() -> None:
    # Drop tables in reverse dependency order
    op.drop_table("tags")
    op.drop_table("favorites")
    op.drop_table("sessions")
    op.drop_table("accounts")
