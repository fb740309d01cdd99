"""Employer onboarding wizard.

Four steps under /employer/onboarding/: company information, online
presence (optional), person in charge, confirmation (optional review).
"""

from app.wizard.steps import Draft, StepDescriptor, WizardDefinition
from app.wizard.validation import email_format, phone_format

FLOW_NAME = "employer"
STORAGE_KEY = "employerOnboardingData"
ROUTE_PREFIX = "/employer/onboarding"
SUCCESS_ROUTE = "/employer/dashboard"


def initial_draft() -> Draft:
    """Empty employer Draft Record."""
    return {
        "namaPerusahaan": "",
        "merekUsaha": "",
        "industri": "",
        "alamatKantor": "",
        "email": "",
        "website": "",
        "socialMedia": {
            "instagram": "",
            "linkedin": "",
            "facebook": "",
            "twitter": "",
            "tiktok": "",
        },
        "logoUrl": None,
        "pic": {
            "nama": "",
            "nomorTelepon": "",
        },
        "isConfirmed": False,
    }


STEPS: tuple[StepDescriptor, ...] = (
    StepDescriptor(
        index=1,
        route=f"{ROUTE_PREFIX}/informasi-perusahaan",
        title="Informasi Dasar Badan Usaha",
        required_fields={
            "namaPerusahaan": "Nama perusahaan wajib diisi",
            "industri": "Industri wajib diisi",
            "alamatKantor": "Alamat kantor wajib diisi",
            "email": "Email wajib diisi",
        },
        rules=(email_format("email"),),
    ),
    StepDescriptor(
        index=2,
        route=f"{ROUTE_PREFIX}/kehadiran-online",
        title="Kehadiran Online dan Identitas Merek",
        optional=True,
    ),
    StepDescriptor(
        index=3,
        route=f"{ROUTE_PREFIX}/penanggung-jawab",
        title="Penanggung Jawab",
        required_fields={
            "pic.nama": "Nama PIC wajib diisi",
            "pic.nomorTelepon": "Nomor telepon PIC wajib diisi",
        },
        rules=(
            phone_format(
                "pic.nomorTelepon", "Format nomor telepon Indonesia tidak valid"
            ),
        ),
    ),
    StepDescriptor(
        index=4,
        route=f"{ROUTE_PREFIX}/konfirmasi",
        title="Konfirmasi",
        optional=True,
    ),
)

EMPLOYER_WIZARD = WizardDefinition(
    flow=FLOW_NAME,
    steps=STEPS,
    storage_key=STORAGE_KEY,
    api_path="/employer/onboarding",
    initial_draft=initial_draft,
    success_route=SUCCESS_ROUTE,
)
