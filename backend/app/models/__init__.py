"""SQLAlchemy ORM models for the job board onboarding service.

All models are exported from this module for convenient imports:
    from app.models import User, UserProfile, Employer, ...

Models are organized by domain:
- user.py: User (Tier 0)
- job_seeker.py: UserProfile (Tier 1), UserAddress, UserPendidikan,
  UserPengalamanKerja (Tier 2)
- employer.py: Employer (Tier 1)
- job_posting.py: JobPosting (Tier 2), JobPostingLocation (Tier 3)
- onboarding_progress.py: OnboardingProgress (Tier 1 - wizard drafts)
"""

from app.models.base import Base, TimestampMixin
from app.models.employer import Employer
from app.models.job_posting import JobPosting, JobPostingLocation
from app.models.job_seeker import (
    UserAddress,
    UserPendidikan,
    UserPengalamanKerja,
    UserProfile,
)
from app.models.onboarding_progress import OnboardingProgress
from app.models.user import User

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    # Tier 0
    "User",
    # Tier 1
    "UserProfile",
    "Employer",
    "OnboardingProgress",
    # Tier 2
    "UserAddress",
    "UserPendidikan",
    "UserPengalamanKerja",
    "JobPosting",
    # Tier 3
    "JobPostingLocation",
]
