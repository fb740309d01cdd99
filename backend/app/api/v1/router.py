"""API v1 router aggregator.

All v1 endpoint routers are included here, mounted under /api/v1.
"""

from fastapi import APIRouter

from app.api.v1 import (
    employer_onboarding,
    job_posting_wizard,
    job_seeker_onboarding,
    uploads,
)

router = APIRouter()

# =============================================================================
# Onboarding Wizards
# =============================================================================

router.include_router(
    job_seeker_onboarding.router,
    prefix="/job-seeker/onboarding",
    tags=["job-seeker-onboarding"],
)
router.include_router(
    employer_onboarding.router,
    prefix="/employer/onboarding",
    tags=["employer-onboarding"],
)
router.include_router(
    job_posting_wizard.router,
    prefix="/employer/job-postings/wizard",
    tags=["job-posting-wizard"],
)

# =============================================================================
# Files
# =============================================================================

router.include_router(uploads.router, tags=["uploads"])
