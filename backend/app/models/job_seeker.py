"""Job-seeker profile models - written by the job-seeker onboarding wizard.

Tier 1 (UserProfile) and Tier 2 (address, education, work experience).
Dates typed into the wizard (tanggalLahir, tanggalLulus, ...) are stored
as entered; the wizard validates their textual format before submission.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.user import User

_DEFAULT_UUID = text("gen_random_uuid()")
_CASCADE_ALL_DELETE_ORPHAN = "all, delete-orphan"
_PROFILE_FK = "user_profiles.id"


class UserProfile(Base, TimestampMixin):
    """Job-seeker profile.

    Tier 1 - references User (one profile per user).

    Free-form wizard sections (social media, skills, certifications,
    languages, additional info, job expectations) are kept as JSONB in the
    shape the wizard submits them.
    """

    __tablename__ = "user_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=_DEFAULT_UUID,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    nama_lengkap: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    nomor_telepon: Mapped[str] = mapped_column(String(20), nullable=False)
    tanggal_lahir: Mapped[str] = mapped_column(String(10), nullable=False)
    tempat_lahir: Mapped[str | None] = mapped_column(String(255), nullable=True)
    jenis_kelamin: Mapped[str | None] = mapped_column(String(20), nullable=True)
    status_pernikahan: Mapped[str | None] = mapped_column(
        String(30), nullable=True
    )
    agama: Mapped[str | None] = mapped_column(String(30), nullable=True)
    berat_badan: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tinggi_badan: Mapped[int | None] = mapped_column(Integer, nullable=True)
    profile_photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    level_pengalaman: Mapped[str | None] = mapped_column(
        String(30), nullable=True
    )
    cv_file_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    cv_upload_date: Mapped[datetime | None] = mapped_column(nullable=True)

    social_media: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    keahlian: Mapped[list] = mapped_column(
        JSONB, server_default=text("'[]'::jsonb"), nullable=False
    )
    sertifikasi: Mapped[list] = mapped_column(
        JSONB, server_default=text("'[]'::jsonb"), nullable=False
    )
    bahasa: Mapped[list] = mapped_column(
        JSONB, server_default=text("'[]'::jsonb"), nullable=False
    )
    informasi_tambahan: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    ekspektasi_kerja: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="profile")
    address: Mapped["UserAddress | None"] = relationship(
        "UserAddress",
        back_populates="profile",
        uselist=False,
        cascade=_CASCADE_ALL_DELETE_ORPHAN,
    )
    pendidikan: Mapped[list["UserPendidikan"]] = relationship(
        "UserPendidikan",
        back_populates="profile",
        cascade=_CASCADE_ALL_DELETE_ORPHAN,
    )
    pengalaman_kerja: Mapped[list["UserPengalamanKerja"]] = relationship(
        "UserPengalamanKerja",
        back_populates="profile",
        cascade=_CASCADE_ALL_DELETE_ORPHAN,
    )


class UserAddress(Base, TimestampMixin):
    """Domicile address of a job seeker.

    Tier 2 - references UserProfile.
    """

    __tablename__ = "user_addresses"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=_DEFAULT_UUID,
    )
    user_profile_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey(_PROFILE_FK, ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    jalan: Mapped[str | None] = mapped_column(Text, nullable=True)
    rt: Mapped[str | None] = mapped_column(String(5), nullable=True)
    rw: Mapped[str | None] = mapped_column(String(5), nullable=True)
    kelurahan: Mapped[str | None] = mapped_column(String(100), nullable=True)
    kecamatan: Mapped[str | None] = mapped_column(String(100), nullable=True)
    kota: Mapped[str | None] = mapped_column(String(100), nullable=True)
    provinsi: Mapped[str | None] = mapped_column(String(100), nullable=True)
    kode_pos: Mapped[str | None] = mapped_column(String(10), nullable=True)

    profile: Mapped["UserProfile"] = relationship(
        "UserProfile", back_populates="address"
    )


class UserPendidikan(Base, TimestampMixin):
    """Education entry.

    Tier 2 - references UserProfile.
    """

    __tablename__ = "user_pendidikan"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=_DEFAULT_UUID,
    )
    user_profile_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey(_PROFILE_FK, ondelete="CASCADE"),
        nullable=False,
    )
    nama_institusi: Mapped[str] = mapped_column(String(255), nullable=False)
    jenjang_pendidikan: Mapped[str] = mapped_column(String(50), nullable=False)
    bidang_studi: Mapped[str | None] = mapped_column(String(255), nullable=True)
    tanggal_lulus: Mapped[str] = mapped_column(String(10), nullable=False)
    lokasi: Mapped[str | None] = mapped_column(String(255), nullable=True)
    deskripsi_tambahan: Mapped[str | None] = mapped_column(Text, nullable=True)

    profile: Mapped["UserProfile"] = relationship(
        "UserProfile", back_populates="pendidikan"
    )


class UserPengalamanKerja(Base, TimestampMixin):
    """Work experience entry.

    Tier 2 - references UserProfile.
    """

    __tablename__ = "user_pengalaman_kerja"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=_DEFAULT_UUID,
    )
    user_profile_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey(_PROFILE_FK, ondelete="CASCADE"),
        nullable=False,
    )
    nama_perusahaan: Mapped[str] = mapped_column(String(255), nullable=False)
    posisi: Mapped[str] = mapped_column(String(255), nullable=False)
    tanggal_mulai: Mapped[str] = mapped_column(String(10), nullable=False)
    tanggal_selesai: Mapped[str | None] = mapped_column(String(10), nullable=True)
    deskripsi_pekerjaan: Mapped[str | None] = mapped_column(Text, nullable=True)
    lokasi: Mapped[str | None] = mapped_column(String(255), nullable=True)
    alasan_keluar: Mapped[str | None] = mapped_column(Text, nullable=True)
    level_pengalaman: Mapped[str | None] = mapped_column(
        String(30), nullable=True
    )

    profile: Mapped["UserProfile"] = relationship(
        "UserProfile", back_populates="pengalaman_kerja"
    )
