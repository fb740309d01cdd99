"""Job-seeker onboarding: persist a submitted wizard draft.

The final submission is written in the request's transaction:

1. Validates the draft against every non-optional wizard step
2. Creates the UserProfile with its JSONB sections
3. Creates UserAddress, UserPendidikan and UserPengalamanKerja rows
4. Sets user.onboarding_completed = True
5. Deletes the saved draft

A user who already has a profile gets that profile back with
already_completed=True and nothing is written.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import ConflictError, InvalidStateError
from app.models.job_seeker import (
    UserAddress,
    UserPendidikan,
    UserPengalamanKerja,
    UserProfile,
)
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.services.draft_fields import (
    entries,
    int_or_none,
    present_items,
    section,
    text_or_none,
    text_value,
)
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
from app.wizard.flows.job_seeker import JOB_SEEKER_WIZARD

logger = structlog.get_logger()

_MAX_EDUCATION_ENTRIES = 20
"""Safety bound on education entries."""

_MAX_WORK_ENTRIES = 50
"""Safety bound on work experience entries."""

_ALREADY_COMPLETED_MESSAGE = "Onboarding has already been completed"

# camelCase draft key -> snake_case address column
_ADDRESS_FIELDS = {
    "jalan": "jalan",
    "rt": "rt",
    "rw": "rw",
    "kelurahan": "kelurahan",
    "kecamatan": "kecamatan",
    "kota": "kota",
    "provinsi": "provinsi",
    "kodePos": "kode_pos",
}


# =============================================================================
# Profile Lookup
# =============================================================================


async def get_profile(db: AsyncSession, user_id: uuid.UUID) -> UserProfile | None:
    """Fetch the user's profile with address, education and work history."""
    stmt = (
        select(UserProfile)
        .where(UserProfile.user_id == user_id)
        .options(
            selectinload(UserProfile.address),
            selectinload(UserProfile.pendidikan),
            selectinload(UserProfile.pengalaman_kerja),
        )
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


def profile_to_draft(profile: UserProfile) -> dict[str, Any]:
    """Rebuild a Draft Record from a persisted profile."""
    draft = JOB_SEEKER_WIZARD.initial_draft()
    draft.update(
        {
            "namaLengkap": profile.nama_lengkap,
            "email": profile.email,
            "nomorTelepon": profile.nomor_telepon,
            "tanggalLahir": profile.tanggal_lahir,
            "tempatLahir": profile.tempat_lahir or "",
            "jenisKelamin": profile.jenis_kelamin,
            "statusPernikahan": profile.status_pernikahan,
            "agama": profile.agama,
            "beratBadan": profile.berat_badan,
            "tinggiBadan": profile.tinggi_badan,
            "profilePhotoUrl": profile.profile_photo_url,
            "levelPengalaman": profile.level_pengalaman or "",
            "cvFileUrl": profile.cv_file_url,
            "keahlian": list(profile.keahlian or []),
            "sertifikasi": list(profile.sertifikasi or []),
            "bahasa": list(profile.bahasa or []),
            "ekspektasiKerja": profile.ekspektasi_kerja,
        }
    )
    if profile.social_media:
        draft["socialMedia"] = {**draft["socialMedia"], **profile.social_media}
    if profile.informasi_tambahan:
        draft["informasiTambahan"] = {
            **draft["informasiTambahan"],
            **profile.informasi_tambahan,
        }
    if profile.address is not None:
        draft["alamat"] = {
            key: getattr(profile.address, column) or ""
            for key, column in _ADDRESS_FIELDS.items()
        }
    draft["pendidikan"] = [
        {
            "namaInstitusi": row.nama_institusi,
            "jenjangPendidikan": row.jenjang_pendidikan,
            "bidangStudi": row.bidang_studi or "",
            "tanggalLulus": row.tanggal_lulus,
            "lokasi": row.lokasi or "",
            "deskripsiTambahan": row.deskripsi_tambahan or "",
        }
        for row in profile.pendidikan
    ]
    draft["pengalamanKerja"] = [
        {
            "namaPerusahaan": row.nama_perusahaan,
            "posisi": row.posisi,
            "tanggalMulai": row.tanggal_mulai,
            "tanggalSelesai": row.tanggal_selesai,
            "deskripsiPekerjaan": row.deskripsi_pekerjaan or "",
            "lokasi": row.lokasi or "",
            "alasanKeluar": row.alasan_keluar or "",
            "levelPengalaman": row.level_pengalaman or "",
        }
        for row in profile.pengalaman_kerja
    ]
    return draft


# =============================================================================
# Draft Endpoints
# =============================================================================


async def get_draft(db: AsyncSession, user: User) -> DraftState:
    """Saved draft, the completed profile, or a fresh draft."""
    state = await load_progress(db, user.id, JOB_SEEKER_WIZARD)
    if state is not None:
        return state
    profile = await get_profile(db, user.id)
    if profile is not None:
        return completed(JOB_SEEKER_WIZARD, profile_to_draft(profile))
    return not_started(JOB_SEEKER_WIZARD)


async def save_step(
    db: AsyncSession, user: User, *, step: int, data: dict[str, Any]
) -> DraftState:
    """Persist the draft as of a step.

    Raises:
        InvalidStateError: If the user already finished onboarding.
        ValidationError: If step is outside the wizard.
    """
    if user.onboarding_completed:
        raise InvalidStateError(_ALREADY_COMPLETED_MESSAGE)
    return await save_progress(db, user.id, JOB_SEEKER_WIZARD, step=step, data=data)


# =============================================================================
# Finalization
# =============================================================================


def _build_profile(user_id: uuid.UUID, draft: dict[str, Any]) -> UserProfile:
    cv_file_url = text_or_none(draft.get("cvFileUrl"))
    return UserProfile(
        user_id=user_id,
        nama_lengkap=text_value(draft.get("namaLengkap")),
        email=text_value(draft.get("email")).lower(),
        nomor_telepon=text_value(draft.get("nomorTelepon")),
        tanggal_lahir=text_value(draft.get("tanggalLahir")),
        tempat_lahir=text_or_none(draft.get("tempatLahir")),
        jenis_kelamin=text_or_none(draft.get("jenisKelamin")),
        status_pernikahan=text_or_none(draft.get("statusPernikahan")),
        agama=text_or_none(draft.get("agama")),
        berat_badan=int_or_none(draft.get("beratBadan")),
        tinggi_badan=int_or_none(draft.get("tinggiBadan")),
        profile_photo_url=text_or_none(draft.get("profilePhotoUrl")),
        level_pengalaman=text_or_none(draft.get("levelPengalaman")),
        cv_file_url=cv_file_url,
        cv_upload_date=datetime.now(UTC) if cv_file_url else None,
        social_media=section(draft.get("socialMedia")),
        keahlian=present_items(draft.get("keahlian")),
        sertifikasi=present_items(draft.get("sertifikasi")),
        bahasa=present_items(draft.get("bahasa")),
        informasi_tambahan=section(draft.get("informasiTambahan")),
        ekspektasi_kerja=section(draft.get("ekspektasiKerja")),
    )


def _add_address(
    db: AsyncSession, profile_id: uuid.UUID, draft: dict[str, Any]
) -> bool:
    alamat = section(draft.get("alamat"))
    if alamat is None:
        return False
    db.add(
        UserAddress(
            user_profile_id=profile_id,
            **{
                column: text_or_none(alamat.get(key))
                for key, column in _ADDRESS_FIELDS.items()
            },
        )
    )
    return True


def _add_education(
    db: AsyncSession, profile_id: uuid.UUID, draft: dict[str, Any]
) -> int:
    rows = entries(draft.get("pendidikan"))[:_MAX_EDUCATION_ENTRIES]
    for entry in rows:
        db.add(
            UserPendidikan(
                user_profile_id=profile_id,
                nama_institusi=text_value(entry.get("namaInstitusi")),
                jenjang_pendidikan=text_value(entry.get("jenjangPendidikan")),
                bidang_studi=text_or_none(entry.get("bidangStudi")),
                tanggal_lulus=text_value(entry.get("tanggalLulus")),
                lokasi=text_or_none(entry.get("lokasi")),
                deskripsi_tambahan=text_or_none(entry.get("deskripsiTambahan")),
            )
        )
    return len(rows)


def _add_work_history(
    db: AsyncSession, profile_id: uuid.UUID, draft: dict[str, Any]
) -> int:
    rows = entries(draft.get("pengalamanKerja"))[:_MAX_WORK_ENTRIES]
    for entry in rows:
        db.add(
            UserPengalamanKerja(
                user_profile_id=profile_id,
                nama_perusahaan=text_value(entry.get("namaPerusahaan")),
                posisi=text_value(entry.get("posisi")),
                tanggal_mulai=text_value(entry.get("tanggalMulai")),
                tanggal_selesai=text_or_none(entry.get("tanggalSelesai")),
                deskripsi_pekerjaan=text_or_none(entry.get("deskripsiPekerjaan")),
                lokasi=text_or_none(entry.get("lokasi")),
                alasan_keluar=text_or_none(entry.get("alasanKeluar")),
                level_pengalaman=text_or_none(entry.get("levelPengalaman")),
            )
        )
    return len(rows)


async def finalize(
    db: AsyncSession, user: User, draft: dict[str, Any]
) -> SubmissionOutcome:
    """Persist a complete job-seeker draft.

    Args:
        db: Request session; the caller commits.
        user: The submitting job seeker.
        draft: Complete Draft Record from the wizard.

    Returns:
        SubmissionOutcome with the profile ID.

    Raises:
        ValidationError: If any non-optional step does not validate.
        ConflictError: If a concurrent submission created the profile first.
    """
    existing = await get_profile(db, user.id)
    if existing is not None:
        logger.info(
            "Job seeker onboarding already completed",
            user_id=str(user.id),
            profile_id=str(existing.id),
        )
        return SubmissionOutcome(
            entity_id=existing.id,
            redirect_url=JOB_SEEKER_WIZARD.success_route,
            already_completed=True,
        )

    ensure_complete(JOB_SEEKER_WIZARD, draft)

    profile = _build_profile(user.id, draft)
    db.add(profile)
    try:
        await db.flush()
    except IntegrityError as exc:
        raise ConflictError(
            code="ONBOARDING_ALREADY_COMPLETED",
            message=_ALREADY_COMPLETED_MESSAGE,
        ) from exc

    has_address = _add_address(db, profile.id, draft)
    education_count = _add_education(db, profile.id, draft)
    work_count = _add_work_history(db, profile.id, draft)

    await UserRepository.mark_onboarding_completed(db, user.id)
    await clear_progress(db, user.id, JOB_SEEKER_WIZARD)

    logger.info(
        "Job seeker onboarding completed",
        user_id=str(user.id),
        profile_id=str(profile.id),
        has_address=has_address,
        education_count=education_count,
        work_count=work_count,
    )
    return SubmissionOutcome(
        entity_id=profile.id,
        redirect_url=JOB_SEEKER_WIZARD.success_route,
    )
