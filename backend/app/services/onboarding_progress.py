"""Wizard draft persistence shared by every wizard flow.

Each flow service (job_seeker_onboarding, employer_onboarding,
job_posting_wizard) keeps its own entity writes but loads, saves and
validates drafts through these helpers, so the rules a draft is checked
against on submit are the same StepValidator rules the wizard runs while
navigating.
"""

import uuid
from dataclasses import dataclass
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ValidationError
from app.models.onboarding_progress import PROGRESS_COMPLETED, PROGRESS_NOT_STARTED
from app.repositories.onboarding_progress_repository import (
    OnboardingProgressRepository,
)
from app.wizard.steps import WizardDefinition
from app.wizard.validation import StepValidator

logger = structlog.get_logger()

INCOMPLETE_DRAFT_MESSAGE = "Submitted draft is incomplete"


@dataclass(frozen=True)
class DraftState:
    """Saved wizard progress as returned by GET <wizard>."""

    current_step: int
    status: str
    draft: dict[str, Any]


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of a successful final submission."""

    entity_id: uuid.UUID
    redirect_url: str
    already_completed: bool = False


# =============================================================================
# States
# =============================================================================


def not_started(definition: WizardDefinition) -> DraftState:
    """Fresh draft for a user who never saved this flow."""
    return DraftState(
        current_step=1,
        status=PROGRESS_NOT_STARTED,
        draft=definition.initial_draft(),
    )


def completed(definition: WizardDefinition, draft: dict[str, Any]) -> DraftState:
    """Finished flow, rebuilt from the persisted entity."""
    return DraftState(
        current_step=definition.last_index,
        status=PROGRESS_COMPLETED,
        draft=draft,
    )


# =============================================================================
# Persistence
# =============================================================================


async def load_progress(
    db: AsyncSession,
    user_id: uuid.UUID,
    definition: WizardDefinition,
) -> DraftState | None:
    """Saved draft of a flow, or None when nothing was saved."""
    progress = await OnboardingProgressRepository.get(db, user_id, definition.flow)
    if progress is None:
        return None
    return DraftState(
        current_step=progress.current_step,
        status=progress.status,
        draft=dict(progress.data or {}),
    )


async def save_progress(
    db: AsyncSession,
    user_id: uuid.UUID,
    definition: WizardDefinition,
    *,
    step: int,
    data: dict[str, Any],
) -> DraftState:
    """Merge a step save into the user's draft.

    Saves are not validated: the wizard persists incomplete drafts on
    every backward move as well.

    Raises:
        ValidationError: If step is not one of the flow's steps.
    """
    if not 1 <= step <= definition.last_index:
        raise ValidationError(
            message=f"Step must be between 1 and {definition.last_index}",
            details=[{"field": "step", "error": "OUT_OF_RANGE"}],
        )

    progress = await OnboardingProgressRepository.save(
        db, user_id, definition.flow, current_step=step, data=data
    )
    logger.debug(
        "Wizard draft saved",
        flow=definition.flow,
        user_id=str(user_id),
        step=step,
    )
    return DraftState(
        current_step=progress.current_step,
        status=progress.status,
        draft=dict(progress.data or {}),
    )


async def clear_progress(
    db: AsyncSession,
    user_id: uuid.UUID,
    definition: WizardDefinition,
) -> None:
    """Drop the saved draft after a successful submission."""
    await OnboardingProgressRepository.delete(db, user_id, definition.flow)


# =============================================================================
# Validation
# =============================================================================


def ensure_complete(definition: WizardDefinition, draft: dict[str, Any]) -> None:
    """Validate every non-optional step of a submitted draft.

    Raises:
        ValidationError: With one ``{"field", "message"}`` detail per invalid
            field, earliest step first.
    """
    failures = StepValidator(definition).validate_all(draft)
    if not failures:
        return

    field_errors: dict[str, str] = {}
    for step_index in sorted(failures):
        for field, message in failures[step_index].items():
            field_errors.setdefault(field, message)

    logger.info(
        "Wizard submission rejected",
        flow=definition.flow,
        steps=sorted(failures),
        fields=sorted(field_errors),
    )
    raise ValidationError.from_field_errors(INCOMPLETE_DRAFT_MESSAGE, field_errors)
