"""Job-seeker onboarding API router.

Backend of the fifteen-step job-seeker wizard.

Endpoints:
- GET  /job-seeker/onboarding         — Saved draft (or completed profile).
- POST /job-seeker/onboarding         — Save the draft as of a step.
- POST /job-seeker/onboarding/submit  — Validate and persist the profile.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body

from app.api.deps import DbSession, JobSeekerUser
from app.core.responses import DataResponse
from app.schemas.onboarding import (
    DraftStateResponse,
    SaveStepRequest,
    SubmissionResponse,
)
from app.services.job_seeker_onboarding import finalize, get_draft, save_step

router = APIRouter()


@router.get("")
async def get_onboarding_draft(
    user: JobSeekerUser,
    db: DbSession,
) -> DataResponse[DraftStateResponse]:
    """Return the job seeker's saved wizard draft.

    Falls back to the persisted profile (status COMPLETED) when the draft
    was already submitted, and to an empty draft (status NOT_STARTED) when
    nothing was ever saved.
    """
    state = await get_draft(db, user)
    return DataResponse(
        data=DraftStateResponse(
            current_step=state.current_step,
            status=state.status,
            draft=state.draft,
        )
    )


@router.post("")
async def save_onboarding_step(
    request: SaveStepRequest,
    user: JobSeekerUser,
    db: DbSession,
) -> DataResponse[DraftStateResponse]:
    """Merge a step's fields into the saved draft.

    Raises:
        ValidationError: If step is not between 1 and 15.
        InvalidStateError: If onboarding is already completed.
    """
    state = await save_step(db, user, step=request.step, data=request.data)
    return DataResponse(
        data=DraftStateResponse(
            current_step=state.current_step,
            status=state.status,
            draft=state.draft,
        )
    )


@router.post("/submit")
async def submit_onboarding(
    draft: Annotated[dict[str, Any], Body(...)],
    user: JobSeekerUser,
    db: DbSession,
) -> DataResponse[SubmissionResponse]:
    """Validate the complete draft and create the job-seeker profile.

    A repeated submission returns the existing profile with
    ``already_completed: true``.

    Raises:
        ValidationError: With per-field details when the draft is incomplete.
    """
    outcome = await finalize(db, user, draft)
    return DataResponse(
        data=SubmissionResponse(
            entity_id=outcome.entity_id,
            redirect_url=outcome.redirect_url,
            already_completed=outcome.already_completed,
        )
    )
