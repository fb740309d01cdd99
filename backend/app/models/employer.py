"""Employer model - written by the employer onboarding wizard.

Tier 1 - references User (one employer profile per user).
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.job_posting import JobPosting
    from app.models.user import User


class Employer(Base, TimestampMixin):
    """Company profile owned by an employer user.

    Attributes:
        pic: Person in charge, {"nama": ..., "nomorTelepon": ...}.
        social_media: Optional links keyed by platform.
    """

    __tablename__ = "employers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    nama_perusahaan: Mapped[str] = mapped_column(String(255), nullable=False)
    merek_usaha: Mapped[str | None] = mapped_column(String(255), nullable=True)
    industri: Mapped[str] = mapped_column(String(100), nullable=False)
    alamat_kantor: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    social_media: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    logo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    pic: Mapped[dict] = mapped_column(JSONB, nullable=False)

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="employer")
    job_postings: Mapped[list["JobPosting"]] = relationship(
        "JobPosting",
        back_populates="employer",
        cascade="all, delete-orphan",
    )
