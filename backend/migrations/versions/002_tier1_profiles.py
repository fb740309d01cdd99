"""Create Tier 1 tables: user_profiles, employers, onboarding_progress.

Revision ID: 002_tier1_profiles
Revises: 001_tier0_users
Create Date: 2026-10-05

Each references users. Profiles and employers are created by the final
wizard submission; onboarding_progress holds drafts until then.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "002_tier1_profiles"
down_revision: str | None = "001_tier0_users"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_EMPTY_JSON_ARRAY = sa.text("'[]'::jsonb")


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
    )


def _user_fk_column(*, unique: bool) -> sa.Column:
    return sa.Column(
        "user_id",
        sa.UUID(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=unique,
    )


def _timestamp_columns() -> list[sa.Column]:
    return [
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
    ]


def upgrade() -> None:
    # Job-seeker profile; free-form wizard sections stay JSONB
    op.create_table(
        "user_profiles",
        _id_column(),
        _user_fk_column(unique=True),
        sa.Column("nama_lengkap", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("nomor_telepon", sa.String(20), nullable=False),
        sa.Column("tanggal_lahir", sa.String(10), nullable=False),
        sa.Column("tempat_lahir", sa.String(255), nullable=True),
        sa.Column("jenis_kelamin", sa.String(20), nullable=True),
        sa.Column("status_pernikahan", sa.String(30), nullable=True),
        sa.Column("agama", sa.String(30), nullable=True),
        sa.Column("berat_badan", sa.Integer(), nullable=True),
        sa.Column("tinggi_badan", sa.Integer(), nullable=True),
        sa.Column("profile_photo_url", sa.Text(), nullable=True),
        sa.Column("level_pengalaman", sa.String(30), nullable=True),
        sa.Column("cv_file_url", sa.Text(), nullable=True),
        sa.Column("cv_upload_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("social_media", JSONB(), nullable=True),
        sa.Column(
            "keahlian", JSONB(), nullable=False, server_default=_EMPTY_JSON_ARRAY
        ),
        sa.Column(
            "sertifikasi", JSONB(), nullable=False, server_default=_EMPTY_JSON_ARRAY
        ),
        sa.Column("bahasa", JSONB(), nullable=False, server_default=_EMPTY_JSON_ARRAY),
        sa.Column("informasi_tambahan", JSONB(), nullable=True),
        sa.Column("ekspektasi_kerja", JSONB(), nullable=True),
        *_timestamp_columns(),
    )

    # Company profile; one per employer account
    op.create_table(
        "employers",
        _id_column(),
        _user_fk_column(unique=True),
        sa.Column("nama_perusahaan", sa.String(255), nullable=False),
        sa.Column("merek_usaha", sa.String(255), nullable=True),
        sa.Column("industri", sa.String(100), nullable=False),
        sa.Column("alamat_kantor", sa.Text(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("social_media", JSONB(), nullable=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("pic", JSONB(), nullable=False),
        *_timestamp_columns(),
    )

    # Wizard drafts; one row per (user, flow)
    op.create_table(
        "onboarding_progress",
        _id_column(),
        _user_fk_column(unique=False),
        sa.Column("flow", sa.String(20), nullable=False),
        sa.Column(
            "current_step", sa.Integer(), nullable=False, server_default=sa.text("1")
        ),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'NOT_STARTED'"),
        ),
        sa.Column(
            "data", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")
        ),
        *_timestamp_columns(),
        sa.UniqueConstraint(
            "user_id", "flow", name="uq_onboarding_progress_user_flow"
        ),
        sa.CheckConstraint(
            "status IN ('NOT_STARTED', 'IN_PROGRESS', 'COMPLETED')",
            name="ck_onboarding_progress_status",
        ),
        sa.CheckConstraint(
            "current_step >= 1",
            name="ck_onboarding_progress_current_step",
        ),
    )


def downgrade() -> None:
    op.drop_table("onboarding_progress")
    op.drop_table("employers")
    op.drop_table("user_profiles")
