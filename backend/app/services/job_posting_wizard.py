"""Job-posting wizard: create one job posting per submitted draft.

Only employers with a completed company profile may publish. Unlike the
onboarding flows there is no duplicate guard on the server: every
successful submission is a new vacancy, and the wizard's in-flight guard
keeps a double click from posting twice.
"""

import uuid
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InvalidStateError
from app.models.employer import Employer
from app.models.job_posting import JobPosting, JobPostingLocation
from app.models.user import User
from app.services.draft_fields import (
    entries,
    int_or_none,
    present_items,
    section,
    text_or_none,
    text_value,
)
from app.services.employer_onboarding import get_employer
from app.services.onboarding_progress import (
    DraftState,
    SubmissionOutcome,
    clear_progress,
    ensure_complete,
    load_progress,
    not_started,
    save_progress,
)
from app.wizard.flows.job_posting import JOB_POSTING_WIZARD

logger = structlog.get_logger()

_MAX_WORK_LOCATIONS = 20
"""Safety bound on work locations per posting."""

_EMPLOYER_REQUIRED_MESSAGE = (
    "Complete employer onboarding before publishing a job posting"
)


async def _require_employer(db: AsyncSession, user_id: uuid.UUID) -> Employer:
    employer = await get_employer(db, user_id)
    if employer is None:
        raise InvalidStateError(_EMPLOYER_REQUIRED_MESSAGE)
    return employer


async def get_draft(db: AsyncSession, user: User) -> DraftState:
    """Saved posting draft, or a fresh one."""
    state = await load_progress(db, user.id, JOB_POSTING_WIZARD)
    return state if state is not None else not_started(JOB_POSTING_WIZARD)


async def save_step(
    db: AsyncSession, user: User, *, step: int, data: dict[str, Any]
) -> DraftState:
    """Persist the posting draft as of a step.

    Raises:
        InvalidStateError: If the user has no employer profile yet.
        ValidationError: If step is outside the wizard.
    """
    await _require_employer(db, user.id)
    return await save_progress(db, user.id, JOB_POSTING_WIZARD, step=step, data=data)


def _add_locations(db: AsyncSession, posting_id: uuid.UUID, draft: dict) -> int:
    rows = entries(draft.get("workLocations"))[:_MAX_WORK_LOCATIONS]
    for entry in rows:
        db.add(
            JobPostingLocation(
                job_posting_id=posting_id,
                city=text_value(entry.get("city")),
                province=text_value(entry.get("province")),
                is_remote=bool(entry.get("isRemote", False)),
                address=text_or_none(entry.get("address")),
            )
        )
    return len(rows)


async def finalize(
    db: AsyncSession, user: User, draft: dict[str, Any]
) -> SubmissionOutcome:
    """Create a job posting from a complete draft.

    Raises:
        InvalidStateError: If the user has no employer profile yet.
        ValidationError: If any non-optional step does not validate.
    """
    employer = await _require_employer(db, user.id)
    ensure_complete(JOB_POSTING_WIZARD, draft)

    posting = JobPosting(
        employer_id=employer.id,
        job_title=text_value(draft.get("jobTitle")),
        number_of_positions=int_or_none(draft.get("numberOfPositions")) or 1,
        contract_type=text_or_none(draft.get("contractType")),
        min_work_experience=int_or_none(draft.get("minWorkExperience")) or 0,
        application_deadline=text_or_none(draft.get("applicationDeadline")),
        responsibilities=present_items(draft.get("responsibilities")),
        requirements=present_items(draft.get("requirements")),
        salary_range=section(draft.get("salaryRange")),
        expectations=section(draft.get("expectations")),
        additional_requirements=section(draft.get("additionalRequirements")),
        is_confirmed=bool(draft.get("isConfirmed", False)),
    )
    db.add(posting)
    await db.flush()

    location_count = _add_locations(db, posting.id, draft)
    await clear_progress(db, user.id, JOB_POSTING_WIZARD)

    logger.info(
        "Job posting created",
        user_id=str(user.id),
        employer_id=str(employer.id),
        job_posting_id=str(posting.id),
        location_count=location_count,
    )
    return SubmissionOutcome(
        entity_id=posting.id,
        redirect_url=JOB_POSTING_WIZARD.success_route,
    )
