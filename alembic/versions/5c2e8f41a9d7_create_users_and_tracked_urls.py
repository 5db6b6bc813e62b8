"""Create users and tracked_urls tables

Revision ID: 5c2e8f41a9d7
Revises:
Create Date: 2026-10-19 10:12:44.118203

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c2e8f41a9d7"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=255), nullable=False),
        sa.Column("last_name", sa.String(length=255), nullable=False),
        sa.Column("company", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    # Unique index settles concurrent signups with the same email
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "tracked_urls",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("search_phrase", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_tracked_urls_id", "tracked_urls", ["id"])
    op.create_index("ix_tracked_urls_user_id", "tracked_urls", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_tracked_urls_user_id", table_name="tracked_urls")
    op.drop_index("ix_tracked_urls_id", table_name="tracked_urls")
    op.drop_table("tracked_urls")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
