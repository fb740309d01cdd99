"""Wizard definitions shipped with the service.

WIZARDS maps the flow name (also stored in onboarding_progress.flow) to its
definition.
"""

from app.wizard.flows.employer import EMPLOYER_WIZARD
from app.wizard.flows.job_posting import JOB_POSTING_WIZARD
from app.wizard.flows.job_seeker import JOB_SEEKER_WIZARD
from app.wizard.steps import WizardDefinition

WIZARDS: dict[str, WizardDefinition] = {
    definition.flow: definition
    for definition in (JOB_SEEKER_WIZARD, EMPLOYER_WIZARD, JOB_POSTING_WIZARD)
}

__all__ = [
    "EMPLOYER_WIZARD",
    "JOB_POSTING_WIZARD",
    "JOB_SEEKER_WIZARD",
    "WIZARDS",
]
