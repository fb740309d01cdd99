"""Submission Finalizer.

Sends the accumulated draft to the backend once. Every non-optional step
is validated locally first, so a submission the server would reject for
a missing field never leaves the wizard.

A second submit() after success is refused locally, and so is a submit
while another one is still in flight. The backend guards duplicates as
well (see app.services.*_onboarding).
"""

from dataclasses import dataclass, field
from typing import Any

import structlog

from app.wizard.client import WizardApiClient, WizardClientError
from app.wizard.navigator import StepNavigator
from app.wizard.steps import Draft
from app.wizard.store import WizardStatus

logger = structlog.get_logger()

ALREADY_SUBMITTED = "Formulir sudah dikirim"
SUBMIT_IN_PROGRESS = "Pengiriman sedang diproses"
INCOMPLETE_DRAFT = "Masih ada data yang belum lengkap"


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a final submission.

    Attributes:
        success: True when the backend persisted the entity.
        entity_id: ID of the persisted profile or job posting.
        redirect_url: Where the wizard routes after success.
        field_errors: Field key -> message, from local or server validation.
        error: Human-readable failure reason.
        failed_step: Step holding the first local validation failure.
        already_completed: Backend reported an earlier identical submission.
    """

    success: bool
    entity_id: str | None = None
    redirect_url: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)
    error: str | None = None
    failed_step: int | None = None
    already_completed: bool = False


class SubmissionFinalizer:
    """Final submit for one wizard instance.

    Args:
        navigator: The wizard's navigator; supplies the store, validator,
            local draft and router.
        client: Backend client used for the submit call.
    """

    def __init__(self, navigator: StepNavigator, client: WizardApiClient) -> None:
        self.navigator = navigator
        self.client = client
        self._in_flight = False

    async def submit(self, draft: Draft | None = None) -> SubmissionResult:
        """Validate the whole draft and send it to the backend.

        Args:
            draft: Draft to submit; defaults to the store's draft.

        Returns:
            SubmissionResult. On failure the wizard stays on its current
            step and may retry.
        """
        store = self.navigator.store
        definition = store.definition

        if store.status is WizardStatus.SUBMITTED:
            return SubmissionResult(success=False, error=ALREADY_SUBMITTED)
        if self._in_flight:
            return SubmissionResult(success=False, error=SUBMIT_IN_PROGRESS)

        payload = draft if draft is not None else store.get()
        failures = self.navigator.validator.validate_all(payload)
        if failures:
            first = min(failures)
            return SubmissionResult(
                success=False,
                field_errors=failures[first],
                error=INCOMPLETE_DRAFT,
                failed_step=first,
            )

        self._in_flight = True
        try:
            data = await self.client.submit(payload)
        except WizardClientError as exc:
            logger.warning(
                "Wizard submission failed",
                flow=definition.flow,
                status_code=exc.status_code,
                error=exc.message,
                fields=sorted(exc.field_errors),
            )
            return SubmissionResult(
                success=False,
                field_errors=exc.field_errors,
                error=exc.message,
            )
        finally:
            self._in_flight = False

        result = _success_result(data, definition.success_route)
        store.mark_submitted()
        self.navigator.clear_local()
        logger.info(
            "Wizard submitted",
            flow=definition.flow,
            entity_id=result.entity_id,
            already_completed=result.already_completed,
        )
        await self.navigator.route(result.redirect_url or definition.success_route)
        return result


def _success_result(data: dict[str, Any], default_redirect: str) -> SubmissionResult:
    entity_id = data.get("entity_id")
    return SubmissionResult(
        success=True,
        entity_id=str(entity_id) if entity_id is not None else None,
        redirect_url=data.get("redirect_url") or default_redirect,
        already_completed=bool(data.get("already_completed", False)),
    )
