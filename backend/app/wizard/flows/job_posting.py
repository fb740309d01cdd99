"""Employer job-posting wizard.

Four steps under /employer/job-posting/. Each successful submission
creates one job posting, so unlike the onboarding flows this wizard is
reused for every vacancy an employer publishes.
"""

from collections.abc import Mapping
from typing import Any

from app.wizard.steps import Draft, StepDescriptor, WizardDefinition
from app.wizard.validation import (
    date_text,
    get_path,
    is_present,
    list_entries,
    to_number,
)

FLOW_NAME = "job_posting"
STORAGE_KEY = "jobPostingData"
ROUTE_PREFIX = "/employer/job-posting"
SUCCESS_ROUTE = "/employer/jobs"

MIN_WORKER_AGE = 15


def initial_draft() -> Draft:
    """Empty job-posting Draft Record with one blank work location."""
    return {
        "jobTitle": "",
        "numberOfPositions": None,
        "contractType": "",
        "workLocations": [
            {"city": "", "province": "", "isRemote": False, "address": ""}
        ],
        "responsibilities": [],
        "requirements": [],
        "salaryRange": {"min": None, "max": None, "isNegotiable": False},
        "minWorkExperience": 0,
        "applicationDeadline": None,
        "expectations": {
            "ageRange": {"min": 18, "max": 45},
            "expectedCharacter": "",
            "foreignLanguage": "",
        },
        "additionalRequirements": {
            "gender": "ANY",
            "requiredDocuments": "",
            "specialSkills": "",
            "technologicalSkills": "",
            "suitableForDisability": False,
        },
        "isConfirmed": False,
    }


def _positions(draft: Mapping[str, Any]) -> dict[str, str]:
    count = to_number(get_path(draft, "numberOfPositions"))
    if count is None or count < 1:
        return {"numberOfPositions": "Jumlah tenaga kerja wajib diisi"}
    return {}


def _responsibilities(draft: Mapping[str, Any]) -> dict[str, str]:
    items = get_path(draft, "responsibilities")
    if not isinstance(items, list) or not any(is_present(item) for item in items):
        return {"responsibilities": "Tugas dan tanggung jawab wajib diisi"}
    return {}


def _age_range(draft: Mapping[str, Any]) -> dict[str, str]:
    age_range = get_path(draft, "expectations.ageRange")
    if not isinstance(age_range, Mapping):
        return {"ageRange": "Harapan umur wajib diisi"}
    low = to_number(age_range.get("min"))
    high = to_number(age_range.get("max"))
    if not low or low < MIN_WORKER_AGE:
        return {"ageRange": "Umur minimal tidak valid (minimal 15 tahun)"}
    if not high or high < low:
        return {"ageRange": "Umur maksimal harus lebih besar dari umur minimal"}
    return {}


STEPS: tuple[StepDescriptor, ...] = (
    StepDescriptor(
        index=1,
        route=f"{ROUTE_PREFIX}/basic-info",
        title="Informasi Dasar",
        required_fields={
            "jobTitle": "Jenis pekerjaan wajib diisi",
            "workLocations": "Minimal satu lokasi kerja wajib diisi",
        },
        rules=(
            _positions,
            _responsibilities,
            list_entries(
                "workLocations",
                {"city": "Kota wajib diisi", "province": "Provinsi wajib diisi"},
            ),
        ),
    ),
    StepDescriptor(
        index=2,
        route=f"{ROUTE_PREFIX}/requirements",
        title="Persyaratan",
        required_fields={"contractType": "Jenis kontrak wajib diisi"},
        rules=(date_text("applicationDeadline", allow_future=True),),
    ),
    StepDescriptor(
        index=3,
        route=f"{ROUTE_PREFIX}/expectations",
        title="Harapan",
        required_fields={
            "expectations.expectedCharacter": "Karakter yang diharapkan wajib diisi",
        },
        rules=(_age_range,),
    ),
    StepDescriptor(
        index=4,
        route=f"{ROUTE_PREFIX}/confirmation",
        title="Konfirmasi",
        optional=True,
    ),
)

JOB_POSTING_WIZARD = WizardDefinition(
    flow=FLOW_NAME,
    steps=STEPS,
    storage_key=STORAGE_KEY,
    api_path="/employer/job-postings/wizard",
    initial_draft=initial_draft,
    success_route=SUCCESS_ROUTE,
)
