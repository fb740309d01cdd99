"""Job-posting wizard API router.

Endpoints:
- GET  /employer/job-postings/wizard         — Saved posting draft.
- POST /employer/job-postings/wizard         — Save the draft as of a step.
- POST /employer/job-postings/wizard/submit  — Create a job posting.

Every endpoint requires an employer account; saving and submitting also
require a completed employer profile.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body

from app.api.deps import DbSession, EmployerUser
from app.core.responses import DataResponse
from app.schemas.onboarding import (
    DraftStateResponse,
    SaveStepRequest,
    SubmissionResponse,
)
from app.services.job_posting_wizard import finalize, get_draft, save_step
from app.services.onboarding_progress import DraftState

router = APIRouter()


def _state_response(state: DraftState) -> DataResponse[DraftStateResponse]:
    return DataResponse(
        data=DraftStateResponse(
            current_step=state.current_step,
            status=state.status,
            draft=state.draft,
        )
    )


@router.get("")
async def get_job_posting_draft(
    user: EmployerUser,
    db: DbSession,
) -> DataResponse[DraftStateResponse]:
    """Return the unfinished job-posting draft, or an empty one."""
    return _state_response(await get_draft(db, user))


@router.post("")
async def save_job_posting_step(
    request: SaveStepRequest,
    user: EmployerUser,
    db: DbSession,
) -> DataResponse[DraftStateResponse]:
    """Merge a step's fields into the saved posting draft."""
    state = await save_step(db, user, step=request.step, data=request.data)
    return _state_response(state)


@router.post("/submit")
async def submit_job_posting(
    draft: Annotated[dict[str, Any], Body(...)],
    user: EmployerUser,
    db: DbSession,
) -> DataResponse[SubmissionResponse]:
    """Validate the complete draft and publish it as a new job posting.

    Raises:
        InvalidStateError: If the employer profile does not exist yet.
        ValidationError: With per-field details when the draft is incomplete.
    """
    outcome = await finalize(db, user, draft)
    return DataResponse(
        data=SubmissionResponse(
            entity_id=outcome.entity_id,
            redirect_url=outcome.redirect_url,
        )
    )
