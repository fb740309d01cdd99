"""Job-seeker onboarding wizard.

Fifteen steps under /job-seeker/onboarding/. Optional steps (social media,
photo, certifications, languages, additional info, review) never block
navigation; every other step must validate before the next is reachable.
"""

from collections.abc import Mapping
from typing import Any

from app.wizard.steps import Draft, StepDescriptor, WizardDefinition
from app.wizard.validation import (
    date_text,
    email_format,
    get_path,
    list_entries,
    number_range,
    phone_format,
    require,
    to_number,
    when,
)

FLOW_NAME = "job_seeker"
STORAGE_KEY = "onboardingData"
ROUTE_PREFIX = "/job-seeker/onboarding"
SUCCESS_ROUTE = "/job-seeker/dashboard"

ENTRY_LEVEL = "entry_level"
"""Fresh graduates may finish the work-experience step with no entries."""


def initial_draft() -> Draft:
    """Empty job-seeker Draft Record."""
    return {
        "namaLengkap": "",
        "email": "",
        "nomorTelepon": "",
        "tempatLahir": "",
        "statusPernikahan": None,
        "tanggalLahir": "",
        "jenisKelamin": None,
        "beratBadan": None,
        "tinggiBadan": None,
        "agama": None,
        "alamat": {
            "jalan": "",
            "rt": "",
            "rw": "",
            "kelurahan": "",
            "kecamatan": "",
            "kota": "",
            "provinsi": "",
            "kodePos": "",
        },
        "socialMedia": {
            "instagram": "",
            "twitter": "",
            "facebook": "",
            "tiktok": "",
            "linkedin": "",
            "other": "",
        },
        "profilePhotoUrl": None,
        "levelPengalaman": "",
        "pengalamanKerja": [],
        "pendidikan": [],
        "keahlian": [],
        "sertifikasi": [],
        "bahasa": [],
        "informasiTambahan": {
            "website": "",
            "portfolio": "",
            "tentangSaya": "",
            "hobi": "",
        },
        "ekspektasiKerja": None,
        "cvFileUrl": None,
    }


def _needs_work_history(draft: Mapping[str, Any]) -> bool:
    return get_path(draft, "levelPengalaman") != ENTRY_LEVEL


def _salary_order(draft: Mapping[str, Any]) -> dict[str, str]:
    """Positive salaries, ideal not below minimum, when they are given."""
    errors: dict[str, str] = {}
    min_salary = to_number(get_path(draft, "ekspektasiKerja.minSalary"))
    ideal_salary = to_number(get_path(draft, "ekspektasiKerja.idealSalary"))
    if min_salary is not None and min_salary <= 0:
        errors["minSalary"] = "Gaji minimum harus lebih dari 0"
    if ideal_salary is not None and ideal_salary <= 0:
        errors["idealSalary"] = "Gaji ideal harus lebih dari 0"
    if (
        not errors
        and min_salary is not None
        and ideal_salary is not None
        and ideal_salary < min_salary
    ):
        errors["idealSalary"] = (
            "Gaji ideal harus lebih besar atau sama dengan gaji minimum"
        )
    return errors


def _step(index: int, slug: str, title: str, **kwargs: Any) -> StepDescriptor:
    return StepDescriptor(
        index=index, route=f"{ROUTE_PREFIX}/{slug}", title=title, **kwargs
    )


STEPS: tuple[StepDescriptor, ...] = (
    _step(
        1,
        "informasi-pribadi",
        "Informasi Pribadi",
        required_fields={
            "namaLengkap": "Nama lengkap wajib diisi",
            "email": "Alamat email wajib diisi",
            "nomorTelepon": "Nomor telepon wajib diisi",
        },
        rules=(email_format("email"), phone_format("nomorTelepon")),
    ),
    _step(
        2,
        "informasi-lanjutan",
        "Informasi Lanjutan",
        required_fields={
            "tanggalLahir": "Tanggal lahir wajib diisi",
            "tempatLahir": "Tempat lahir wajib diisi",
        },
        rules=(
            date_text("tanggalLahir"),
            number_range("beratBadan", 30, 200, "Berat badan harus antara 30-200 kg"),
            number_range(
                "tinggiBadan", 100, 250, "Tinggi badan harus antara 100-250 cm"
            ),
        ),
    ),
    _step(
        3,
        "alamat",
        "Alamat",
        required_fields={
            "alamat.jalan": "Alamat jalan wajib diisi",
            "alamat.rt": "RT wajib diisi",
            "alamat.rw": "RW wajib diisi",
            "alamat.kelurahan": "Kelurahan wajib diisi",
            "alamat.kecamatan": "Kecamatan wajib diisi",
            "alamat.kota": "Kota wajib diisi",
            "alamat.provinsi": "Provinsi wajib diisi",
            "alamat.kodePos": "Kode pos wajib diisi",
        },
    ),
    _step(4, "social-media", "Social Media", optional=True),
    _step(5, "upload-foto", "Foto Profil", optional=True),
    _step(
        6,
        "level-pengalaman",
        "Level Pengalaman",
        required_fields={"levelPengalaman": "Level pengalaman wajib diisi"},
    ),
    _step(
        7,
        "pengalaman-kerja",
        "Pengalaman Kerja",
        rules=(
            when(
                _needs_work_history,
                require(
                    "pengalamanKerja", "Minimal satu pengalaman kerja wajib diisi"
                ),
            ),
            list_entries(
                "pengalamanKerja",
                {
                    "namaPerusahaan": "Nama perusahaan wajib diisi",
                    "posisi": "Posisi/Jabatan wajib diisi",
                    "tanggalMulai": "Tanggal mulai wajib diisi",
                },
                dates=("tanggalMulai", "tanggalSelesai"),
            ),
        ),
    ),
    _step(
        8,
        "pendidikan",
        "Pendidikan",
        required_fields={"pendidikan": "Minimal satu pendidikan wajib diisi"},
        rules=(
            list_entries(
                "pendidikan",
                {
                    "namaInstitusi": "Nama institusi wajib diisi",
                    "lokasi": "Lokasi wajib diisi",
                    "jenjangPendidikan": "Jenjang pendidikan wajib diisi",
                    "tanggalLulus": "Tanggal lulus wajib diisi",
                },
                dates=("tanggalLulus",),
                allow_future_dates=True,
            ),
        ),
    ),
    _step(
        9,
        "keahlian",
        "Keahlian",
        required_fields={"keahlian": "Minimal satu keahlian wajib diisi"},
        rules=(list_entries("keahlian", {"nama": "Nama keahlian wajib diisi"}),),
    ),
    _step(10, "sertifikasi", "Sertifikasi", optional=True),
    _step(11, "bahasa", "Bahasa", optional=True),
    _step(12, "informasi-tambahan", "Informasi Tambahan", optional=True),
    _step(
        13,
        "ekspektasi-kerja",
        "Ekspektasi Kerja",
        required_fields={
            "ekspektasiKerja.jobTypes": "Jenis pekerjaan wajib diisi",
            "ekspektasiKerja.commuteMethod": "Pilih salah satu opsi",
            "ekspektasiKerja.willingToTravel": "Pilih salah satu opsi",
        },
        rules=(_salary_order,),
    ),
    _step(
        14,
        "cv-upload",
        "Upload CV",
        required_fields={"cvFileUrl": "CV/Resume wajib diunggah"},
    ),
    _step(15, "ringkasan", "Ringkasan", optional=True),
)

JOB_SEEKER_WIZARD = WizardDefinition(
    flow=FLOW_NAME,
    steps=STEPS,
    storage_key=STORAGE_KEY,
    api_path="/job-seeker/onboarding",
    initial_draft=initial_draft,
    success_route=SUCCESS_ROUTE,
)
