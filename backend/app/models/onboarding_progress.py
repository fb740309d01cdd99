"""Onboarding progress model - remote copy of an in-progress wizard draft.

Tier 1 - references User. One row per (user, flow); deleted when the
wizard's final submission succeeds.
"""

import uuid

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin

PROGRESS_NOT_STARTED = "NOT_STARTED"
PROGRESS_IN_PROGRESS = "IN_PROGRESS"
PROGRESS_COMPLETED = "COMPLETED"


class OnboardingProgress(Base, TimestampMixin):
    """Saved wizard draft for one user and one wizard flow.

    Attributes:
        flow: Wizard name ("job_seeker", "employer", "job_posting").
        current_step: 1-based index of the step the user last reached.
        status: NOT_STARTED, IN_PROGRESS or COMPLETED.
        data: Draft Record as sent by the wizard (camelCase keys).
    """

    __tablename__ = "onboarding_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "flow", name="uq_onboarding_progress_user_flow"),
        CheckConstraint(
            "status IN ('NOT_STARTED', 'IN_PROGRESS', 'COMPLETED')",
            name="ck_onboarding_progress_status",
        ),
        CheckConstraint(
            "current_step >= 1",
            name="ck_onboarding_progress_current_step",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    flow: Mapped[str] = mapped_column(String(20), nullable=False)
    current_step: Mapped[int] = mapped_column(
        Integer,
        server_default=text("1"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        server_default=text("'NOT_STARTED'"),
        nullable=False,
    )
    data: Mapped[dict] = mapped_column(
        JSONB,
        server_default=text("'{}'::jsonb"),
        nullable=False,
    )
