"""Repository for saved wizard drafts.

One onboarding_progress row per (user, flow). Rows are created on the first
step save and deleted once the flow's final submission is persisted.
"""

import uuid
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.onboarding_progress import PROGRESS_IN_PROGRESS, OnboardingProgress


class OnboardingProgressRepository:
    """Stateless repository for OnboardingProgress operations."""

    @staticmethod
    async def get(
        db: AsyncSession, user_id: uuid.UUID, flow: str
    ) -> OnboardingProgress | None:
        """Fetch the saved draft of one wizard flow for a user.

        Args:
            db: Async database session.
            user_id: Owner of the draft.
            flow: Wizard flow name.

        Returns:
            OnboardingProgress if the user has saved this flow, None otherwise.
        """
        stmt = select(OnboardingProgress).where(
            OnboardingProgress.user_id == user_id,
            OnboardingProgress.flow == flow,
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def save(
        db: AsyncSession,
        user_id: uuid.UUID,
        flow: str,
        *,
        current_step: int,
        data: dict[str, Any],
    ) -> OnboardingProgress:
        """Create or update a saved draft.

        Top-level draft fields in ``data`` replace the stored ones; fields
        not sent are kept.

        Returns:
            The saved OnboardingProgress.
        """
        progress = await OnboardingProgressRepository.get(db, user_id, flow)
        if progress is None:
            progress = OnboardingProgress(
                user_id=user_id,
                flow=flow,
                current_step=current_step,
                status=PROGRESS_IN_PROGRESS,
                data=dict(data),
            )
            db.add(progress)
        else:
            # Reassign so SQLAlchemy sees the JSONB change.
            progress.data = {**(progress.data or {}), **data}
            progress.current_step = current_step
            progress.status = PROGRESS_IN_PROGRESS

        await db.flush()
        await db.refresh(progress)
        return progress

    @staticmethod
    async def delete(db: AsyncSession, user_id: uuid.UUID, flow: str) -> bool:
        """Remove a saved draft.

        Returns:
            True if a row was deleted.
        """
        stmt = delete(OnboardingProgress).where(
            OnboardingProgress.user_id == user_id,
            OnboardingProgress.flow == flow,
        )
        result = await db.execute(stmt)
        return bool(result.rowcount)
