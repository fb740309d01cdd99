"""Shared fixtures for unit tests: complete wizard drafts and an employer.

Each draft fixture returns a fresh dict that passes every non-optional
step of its wizard; tests blank or break individual fields from there.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.employer import Employer
from app.models.user import User
from app.wizard.flows.employer import EMPLOYER_WIZARD
from app.wizard.flows.job_posting import JOB_POSTING_WIZARD
from app.wizard.flows.job_seeker import JOB_SEEKER_WIZARD

CV_URL = "http://localhost:8000/uploads/3f2a9c1d0b7e4a55-cv-budi.pdf"


@pytest.fixture
def job_seeker_draft() -> dict:
    """Complete job-seeker Draft Record."""
    draft = JOB_SEEKER_WIZARD.initial_draft()
    draft.update(
        {
            "namaLengkap": "Budi Santoso",
            "email": "budi.santoso@example.com",
            "nomorTelepon": "081234567890",
            "tanggalLahir": "15/08/1995",
            "tempatLahir": "Surabaya",
            "jenisKelamin": "laki-laki",
            "statusPernikahan": "belum_menikah",
            "agama": "islam",
            "beratBadan": 68,
            "tinggiBadan": 172,
            "alamat": {
                "jalan": "Jl. Darmo Permai III No. 12",
                "rt": "003",
                "rw": "007",
                "kelurahan": "Pradah Kalikendal",
                "kecamatan": "Dukuh Pakis",
                "kota": "Surabaya",
                "provinsi": "Jawa Timur",
                "kodePos": "60226",
            },
            "levelPengalaman": "mid_level",
            "pengalamanKerja": [
                {
                    "namaPerusahaan": "PT Maju Bersama",
                    "posisi": "Staff Administrasi",
                    "tanggalMulai": "01/03/2019",
                    "tanggalSelesai": "28/02/2023",
                    "deskripsiPekerjaan": "Mengelola arsip dan laporan bulanan",
                    "lokasi": "Surabaya",
                    "alasanKeluar": "Mencari tantangan baru",
                }
            ],
            "pendidikan": [
                {
                    "namaInstitusi": "Universitas Airlangga",
                    "jenjangPendidikan": "S1",
                    "bidangStudi": "Manajemen",
                    "tanggalLulus": "20/06/2018",
                    "lokasi": "Surabaya",
                }
            ],
            "keahlian": [{"nama": "Microsoft Excel", "level": "mahir"}],
            "bahasa": [{"nama": "Bahasa Inggris", "level": "menengah"}],
            "ekspektasiKerja": {
                "jobTypes": ["full_time"],
                "commuteMethod": "transportasi_umum",
                "willingToTravel": "dalam_kota",
                "minSalary": 6000000,
                "idealSalary": 8000000,
            },
            "cvFileUrl": CV_URL,
        }
    )
    return draft


@pytest.fixture
def employer_draft() -> dict:
    """Complete employer Draft Record."""
    draft = EMPLOYER_WIZARD.initial_draft()
    draft.update(
        {
            "namaPerusahaan": "PT Sinar Logistik Nusantara",
            "merekUsaha": "SinarLog",
            "industri": "Logistik",
            "alamatKantor": "Jl. Raya Rungkut Industri No. 5, Surabaya",
            "email": "hrd@sinarlog.co.id",
            "website": "https://sinarlog.co.id",
            "pic": {"nama": "Siti Rahmawati", "nomorTelepon": "+6281398765432"},
            "isConfirmed": True,
        }
    )
    return draft


@pytest.fixture
def job_posting_draft() -> dict:
    """Complete job-posting Draft Record."""
    draft = JOB_POSTING_WIZARD.initial_draft()
    draft.update(
        {
            "jobTitle": "Admin Gudang",
            "numberOfPositions": 2,
            "contractType": "PKWT",
            "workLocations": [
                {
                    "city": "Surabaya",
                    "province": "Jawa Timur",
                    "isRemote": False,
                    "address": "Gudang Rungkut",
                }
            ],
            "responsibilities": ["Mencatat stok masuk dan keluar", ""],
            "requirements": ["Minimal SMA/SMK"],
            "applicationDeadline": "31/12/2099",
            "expectations": {
                "ageRange": {"min": 20, "max": 35},
                "expectedCharacter": "Teliti dan jujur",
                "foreignLanguage": "",
            },
            "isConfirmed": True,
        }
    )
    return draft


@pytest.fixture
async def employer_profile(db_session: AsyncSession, employer_user: User) -> Employer:
    """Completed company profile for the employer test user."""
    employer = Employer(
        user_id=employer_user.id,
        nama_perusahaan="PT Sinar Logistik Nusantara",
        industri="Logistik",
        alamat_kantor="Jl. Raya Rungkut Industri No. 5, Surabaya",
        email="hrd@sinarlog.co.id",
        pic={"nama": "Siti Rahmawati", "nomorTelepon": "+6281398765432"},
    )
    db_session.add(employer)
    employer_user.onboarding_completed = True
    await db_session.commit()
    await db_session.refresh(employer)
    return employer
