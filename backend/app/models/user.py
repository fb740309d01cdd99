"""User model - account shared by job seekers and employers.

Tier 0, no FK dependencies. The onboarding wizards flip
onboarding_completed once the final submission is persisted.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.employer import Employer
    from app.models.job_seeker import UserProfile

_DEFAULT_UUID = text("gen_random_uuid()")
_CASCADE_ALL_DELETE_ORPHAN = "all, delete-orphan"

USER_TYPE_JOB_SEEKER = "job_seeker"
USER_TYPE_EMPLOYER = "employer"


class User(Base, TimestampMixin):
    """User account.

    Attributes:
        id: UUID primary key.
        email: Unique email address.
        name: Display name.
        image: Avatar URL.
        user_type: "job_seeker" or "employer"; selects the onboarding flow.
        onboarding_completed: True once the user's onboarding wizard
            has been submitted successfully.
        token_invalidated_before: JWTs issued before this are rejected.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "user_type IN ('job_seeker', 'employer')",
            name="ck_users_user_type",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=_DEFAULT_UUID,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    image: Mapped[str | None] = mapped_column(
        Text(),
        nullable=True,
    )
    user_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        server_default=text("'job_seeker'"),
        default=USER_TYPE_JOB_SEEKER,
    )
    onboarding_completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("false"),
        default=False,
    )
    token_invalidated_before: Mapped[datetime | None] = mapped_column(
        nullable=True,
    )

    # Relationships
    profile: Mapped["UserProfile | None"] = relationship(
        "UserProfile",
        back_populates="user",
        uselist=False,
        cascade=_CASCADE_ALL_DELETE_ORPHAN,
    )
    employer: Mapped["Employer | None"] = relationship(
        "Employer",
        back_populates="user",
        uselist=False,
        cascade=_CASCADE_ALL_DELETE_ORPHAN,
    )
