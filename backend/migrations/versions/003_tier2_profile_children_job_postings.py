"""Create Tier 2 and Tier 3 tables.

Revision ID: 003_tier2_profile_children_job_postings
Revises: 002_tier1_profiles
Create Date: 2026-10-05

Tier 2: user_addresses, user_pendidikan, user_pengalaman_kerja (reference
user_profiles) and job_postings (references employers).
Tier 3: job_posting_locations (references job_postings).
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "003_tier2_profile_children_job_postings"
down_revision: str | None = "002_tier1_profiles"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_PROFILE_FK = "user_profiles.id"
_EMPTY_JSON_ARRAY = sa.text("'[]'::jsonb")


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        primary_key=True,
        server_default=sa.text("gen_random_uuid()"),
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
    op.create_table(
        "user_addresses",
        _id_column(),
        sa.Column(
            "user_profile_id",
            sa.UUID(),
            sa.ForeignKey(_PROFILE_FK, ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("jalan", sa.Text(), nullable=True),
        sa.Column("rt", sa.String(5), nullable=True),
        sa.Column("rw", sa.String(5), nullable=True),
        sa.Column("kelurahan", sa.String(100), nullable=True),
        sa.Column("kecamatan", sa.String(100), nullable=True),
        sa.Column("kota", sa.String(100), nullable=True),
        sa.Column("provinsi", sa.String(100), nullable=True),
        sa.Column("kode_pos", sa.String(10), nullable=True),
        *_timestamp_columns(),
    )

    op.create_table(
        "user_pendidikan",
        _id_column(),
        sa.Column(
            "user_profile_id",
            sa.UUID(),
            sa.ForeignKey(_PROFILE_FK, ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("nama_institusi", sa.String(255), nullable=False),
        sa.Column("jenjang_pendidikan", sa.String(50), nullable=False),
        sa.Column("bidang_studi", sa.String(255), nullable=True),
        sa.Column("tanggal_lulus", sa.String(10), nullable=False),
        sa.Column("lokasi", sa.String(255), nullable=True),
        sa.Column("deskripsi_tambahan", sa.Text(), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index(
        "idx_user_pendidikan_profile", "user_pendidikan", ["user_profile_id"]
    )

    op.create_table(
        "user_pengalaman_kerja",
        _id_column(),
        sa.Column(
            "user_profile_id",
            sa.UUID(),
            sa.ForeignKey(_PROFILE_FK, ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("nama_perusahaan", sa.String(255), nullable=False),
        sa.Column("posisi", sa.String(255), nullable=False),
        sa.Column("tanggal_mulai", sa.String(10), nullable=False),
        sa.Column("tanggal_selesai", sa.String(10), nullable=True),
        sa.Column("deskripsi_pekerjaan", sa.Text(), nullable=True),
        sa.Column("lokasi", sa.String(255), nullable=True),
        sa.Column("alasan_keluar", sa.Text(), nullable=True),
        sa.Column("level_pengalaman", sa.String(30), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index(
        "idx_user_pengalaman_kerja_profile",
        "user_pengalaman_kerja",
        ["user_profile_id"],
    )

    op.create_table(
        "job_postings",
        _id_column(),
        sa.Column(
            "employer_id",
            sa.UUID(),
            sa.ForeignKey("employers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("job_title", sa.String(255), nullable=False),
        sa.Column("number_of_positions", sa.Integer(), nullable=False),
        sa.Column("contract_type", sa.String(50), nullable=True),
        sa.Column(
            "min_work_experience",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.Column("application_deadline", sa.String(10), nullable=True),
        sa.Column(
            "responsibilities",
            JSONB(),
            nullable=False,
            server_default=_EMPTY_JSON_ARRAY,
        ),
        sa.Column(
            "requirements", JSONB(), nullable=False, server_default=_EMPTY_JSON_ARRAY
        ),
        sa.Column("salary_range", JSONB(), nullable=True),
        sa.Column("expectations", JSONB(), nullable=True),
        sa.Column("additional_requirements", JSONB(), nullable=True),
        sa.Column(
            "is_confirmed",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "posted_date",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "number_of_positions >= 1",
            name="ck_job_postings_number_of_positions",
        ),
    )
    op.create_index("idx_job_postings_employer", "job_postings", ["employer_id"])

    op.create_table(
        "job_posting_locations",
        _id_column(),
        sa.Column(
            "job_posting_id",
            sa.UUID(),
            sa.ForeignKey("job_postings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("province", sa.String(100), nullable=False),
        sa.Column(
            "is_remote", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column("address", sa.Text(), nullable=True),
        *_timestamp_columns(),
    )
    op.create_index(
        "idx_job_posting_locations_posting",
        "job_posting_locations",
        ["job_posting_id"],
    )


def downgrade() -> None:
    op.drop_index("idx_job_posting_locations_posting")
    op.drop_table("job_posting_locations")
    op.drop_index("idx_job_postings_employer")
    op.drop_table("job_postings")
    op.drop_index("idx_user_pengalaman_kerja_profile")
    op.drop_table("user_pengalaman_kerja")
    op.drop_index("idx_user_pendidikan_profile")
    op.drop_table("user_pendidikan")
    op.drop_table("user_addresses")
