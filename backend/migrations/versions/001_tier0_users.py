"""Create Tier 0 table: users.

Revision ID: 001_tier0_users
Revises: 000_enable_extensions
Create Date: 2026-10-05

Accounts shared by job seekers and employers. user_type selects which
onboarding wizard the account runs.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "001_tier0_users"
down_revision: str | None = "000_enable_extensions"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column(
            "user_type",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'job_seeker'"),
        ),
        sa.Column(
            "onboarding_completed",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "token_invalidated_before", sa.DateTime(timezone=True), nullable=True
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "user_type IN ('job_seeker', 'employer')",
            name="ck_users_user_type",
        ),
    )
    op.create_index("idx_user_email", "users", ["email"], unique=True)

    # Seed default user for local-first mode (DEFAULT_USER_ID)
    op.execute(
        """
        INSERT INTO users (id, email)
        VALUES ('00000000-0000-0000-0000-000000000001', 'default@local.dev')
    """
    )


def downgrade() -> None:
    op.drop_index("idx_user_email")
    op.drop_table("users")
