"""Employer onboarding: persist a submitted company profile.

Same shape as job_seeker_onboarding: validate the whole draft, create the
Employer row, flag the user as onboarded and drop the saved draft. A
second submission returns the existing employer with already_completed.
"""

import uuid
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError, InvalidStateError
from app.models.employer import Employer
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.draft_fields import section, text_or_none, text_value
from app.services.onboarding_progress import (
    DraftState,
    SubmissionOutcome,
    clear_progress,
    completed,
    ensure_complete,
    load_progress,
    not_started,
    save_progress,
)
from app.wizard.flows.employer import EMPLOYER_WIZARD

logger = structlog.get_logger()

_ALREADY_COMPLETED_MESSAGE = "Employer onboarding has already been completed"


async def get_employer(db: AsyncSession, user_id: uuid.UUID) -> Employer | None:
    """Fetch the employer profile owned by a user."""
    result = await db.execute(select(Employer).where(Employer.user_id == user_id))
    return result.scalar_one_or_none()


def employer_to_draft(employer: Employer) -> dict[str, Any]:
    """Rebuild a Draft Record from a persisted employer."""
    draft = EMPLOYER_WIZARD.initial_draft()
    draft.update(
        {
            "namaPerusahaan": employer.nama_perusahaan,
            "merekUsaha": employer.merek_usaha or "",
            "industri": employer.industri,
            "alamatKantor": employer.alamat_kantor,
            "email": employer.email,
            "website": employer.website or "",
            "logoUrl": employer.logo_url,
            "pic": {**draft["pic"], **(employer.pic or {})},
            "isConfirmed": True,
        }
    )
    if employer.social_media:
        draft["socialMedia"] = {**draft["socialMedia"], **employer.social_media}
    return draft


async def get_draft(db: AsyncSession, user: User) -> DraftState:
    """Saved draft, the completed employer profile, or a fresh draft."""
    state = await load_progress(db, user.id, EMPLOYER_WIZARD)
    if state is not None:
        return state
    employer = await get_employer(db, user.id)
    if employer is not None:
        return completed(EMPLOYER_WIZARD, employer_to_draft(employer))
    return not_started(EMPLOYER_WIZARD)


async def save_step(
    db: AsyncSession, user: User, *, step: int, data: dict[str, Any]
) -> DraftState:
    """Persist the draft as of a step.

    Raises:
        InvalidStateError: If the employer profile already exists.
        ValidationError: If step is outside the wizard.
    """
    if user.onboarding_completed:
        raise InvalidStateError(_ALREADY_COMPLETED_MESSAGE)
    return await save_progress(db, user.id, EMPLOYER_WIZARD, step=step, data=data)


async def finalize(
    db: AsyncSession, user: User, draft: dict[str, Any]
) -> SubmissionOutcome:
    """Persist a complete employer draft.

    Raises:
        ValidationError: If any non-optional step does not validate.
        ConflictError: If a concurrent submission created the employer first.
    """
    existing = await get_employer(db, user.id)
    if existing is not None:
        logger.info(
            "Employer onboarding already completed",
            user_id=str(user.id),
            employer_id=str(existing.id),
        )
        return SubmissionOutcome(
            entity_id=existing.id,
            redirect_url=EMPLOYER_WIZARD.success_route,
            already_completed=True,
        )

    ensure_complete(EMPLOYER_WIZARD, draft)

    pic = section(draft.get("pic")) or {}
    employer = Employer(
        user_id=user.id,
        nama_perusahaan=text_value(draft.get("namaPerusahaan")),
        merek_usaha=text_or_none(draft.get("merekUsaha")),
        industri=text_value(draft.get("industri")),
        alamat_kantor=text_value(draft.get("alamatKantor")),
        email=text_value(draft.get("email")).lower(),
        website=text_or_none(draft.get("website")),
        social_media=section(draft.get("socialMedia")),
        logo_url=text_or_none(draft.get("logoUrl")),
        pic={
            "nama": text_value(pic.get("nama")),
            "nomorTelepon": text_value(pic.get("nomorTelepon")),
        },
    )
    db.add(employer)
    try:
        await db.flush()
    except IntegrityError as exc:
        raise ConflictError(
            code="ONBOARDING_ALREADY_COMPLETED",
            message=_ALREADY_COMPLETED_MESSAGE,
        ) from exc

    await UserRepository.mark_onboarding_completed(db, user.id)
    await clear_progress(db, user.id, EMPLOYER_WIZARD)

    logger.info(
        "Employer onboarding completed",
        user_id=str(user.id),
        employer_id=str(employer.id),
    )
    return SubmissionOutcome(
        entity_id=employer.id,
        redirect_url=EMPLOYER_WIZARD.success_route,
    )
