"""Onboarding wizard engine.

Multi-step form controller shared by the job-seeker onboarding, employer
onboarding and job-posting flows:

- steps: StepDescriptor / WizardDefinition (static flow description)
- store: WizardStateStore (Draft Record + current step)
- validation: StepValidator (field-level Indonesian error messages)
- navigator: StepNavigator (advance / retreat / go_to, soft-fail saves)
- finalizer: SubmissionFinalizer (single final submit)
- wizard: OnboardingWizard (composes the above for one session)
"""

from app.wizard.client import WizardApiClient, WizardClientError
from app.wizard.finalizer import SubmissionFinalizer, SubmissionResult
from app.wizard.navigator import (
    CollectingNotifier,
    NavigationResult,
    Notifier,
    StepNavigator,
)
from app.wizard.steps import StepDescriptor, WizardDefinition
from app.wizard.storage import InMemoryDraftStorage, LocalDraftStorage
from app.wizard.store import WizardStateStore, WizardStatus
from app.wizard.validation import StepValidator, validate_step
from app.wizard.wizard import OnboardingWizard

__all__ = [
    "CollectingNotifier",
    "InMemoryDraftStorage",
    "LocalDraftStorage",
    "NavigationResult",
    "Notifier",
    "OnboardingWizard",
    "StepDescriptor",
    "StepNavigator",
    "StepValidator",
    "SubmissionFinalizer",
    "SubmissionResult",
    "WizardApiClient",
    "WizardClientError",
    "WizardDefinition",
    "WizardStateStore",
    "WizardStatus",
    "validate_step",
]
