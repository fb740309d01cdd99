"""Job posting models - written by the employer job-posting wizard.

JobPosting (Tier 2, references Employer), JobPostingLocation (Tier 3).
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.employer import Employer


_DEFAULT_UUID = text("gen_random_uuid()")


class JobPosting(Base, TimestampMixin):
    """Job vacancy published by an employer.

    Tier 2 - references Employer.
    """

    __tablename__ = "job_postings"
    __table_args__ = (
        CheckConstraint(
            "number_of_positions >= 1",
            name="ck_job_postings_number_of_positions",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=_DEFAULT_UUID,
    )
    employer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("employers.id", ondelete="CASCADE"),
        nullable=False,
    )
    job_title: Mapped[str] = mapped_column(String(255), nullable=False)
    number_of_positions: Mapped[int] = mapped_column(Integer, nullable=False)
    contract_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    min_work_experience: Mapped[int] = mapped_column(
        Integer,
        server_default=text("0"),
        nullable=False,
    )
    application_deadline: Mapped[str | None] = mapped_column(
        String(10), nullable=True
    )
    responsibilities: Mapped[list] = mapped_column(
        JSONB, server_default=text("'[]'::jsonb"), nullable=False
    )
    requirements: Mapped[list] = mapped_column(
        JSONB, server_default=text("'[]'::jsonb"), nullable=False
    )
    salary_range: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    expectations: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    additional_requirements: Mapped[dict | None] = mapped_column(
        JSONB, nullable=True
    )
    is_confirmed: Mapped[bool] = mapped_column(
        Boolean,
        server_default=text("false"),
        nullable=False,
    )
    posted_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Relationships
    employer: Mapped["Employer"] = relationship(
        "Employer", back_populates="job_postings"
    )
    work_locations: Mapped[list["JobPostingLocation"]] = relationship(
        "JobPostingLocation",
        back_populates="job_posting",
        cascade="all, delete-orphan",
    )


class JobPostingLocation(Base, TimestampMixin):
    """Work location of a job posting.

    Tier 3 - references JobPosting.
    """

    __tablename__ = "job_posting_locations"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=_DEFAULT_UUID,
    )
    job_posting_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("job_postings.id", ondelete="CASCADE"),
        nullable=False,
    )
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    province: Mapped[str] = mapped_column(String(100), nullable=False)
    is_remote: Mapped[bool] = mapped_column(
        Boolean,
        server_default=text("false"),
        nullable=False,
    )
    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    job_posting: Mapped["JobPosting"] = relationship(
        "JobPosting", back_populates="work_locations"
    )
