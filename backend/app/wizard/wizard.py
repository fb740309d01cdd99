"""Onboarding wizard facade.

Composes the state store, validator, navigator and finalizer for a single
wizard lifetime. Each OnboardingWizard owns its own store; create one per
user session.

Usage:
    async with WizardApiClient(JOB_SEEKER_WIZARD, cookies=cookies) as client:
        wizard = OnboardingWizard(
            JOB_SEEKER_WIZARD,
            client=client,
            local_storage=LocalDraftStorage(settings.wizard_draft_dir),
        )
        await wizard.start()
        result = await wizard.advance({"namaLengkap": "Budi", ...})
"""

from collections.abc import Mapping
from typing import Any

import structlog

from app.wizard.client import WizardApiClient, WizardClientError
from app.wizard.finalizer import SubmissionFinalizer, SubmissionResult
from app.wizard.navigator import NavigationResult, Notifier, Router, StepNavigator
from app.wizard.steps import Draft, WizardDefinition
from app.wizard.storage import DraftStorage
from app.wizard.store import WizardStateStore, WizardStatus
from app.wizard.validation import StepValidator, is_present

logger = structlog.get_logger()

REMOTE_LOAD_FAILED = "Gagal memuat data dari server. Melanjutkan dengan data lokal."

_REMOTE_COMPLETED = "COMPLETED"
_REMOTE_NOT_STARTED = "NOT_STARTED"

# Draft field -> upload category accepted by POST /upload
UPLOAD_FIELDS: dict[str, str] = {
    "cvFileUrl": "document",
    "profilePhotoUrl": "image",
    "logoUrl": "image",
}


class OnboardingWizard:
    """One running onboarding wizard.

    Args:
        definition: Flow to run.
        client: Backend client; without one the wizard is local-only and
            cannot submit.
        local_storage: Storage for resume-after-restart drafts.
        router: Called with each route the wizard navigates to.
        notifier: Receives user-visible warnings.
    """

    def __init__(
        self,
        definition: WizardDefinition,
        *,
        client: WizardApiClient | None = None,
        local_storage: DraftStorage | None = None,
        router: Router | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.definition = definition
        self.client = client
        self.local_storage = local_storage
        self.notifier = notifier
        self.store = WizardStateStore(definition)
        self.validator = StepValidator(definition)
        self.navigator = StepNavigator(
            self.store,
            self.validator,
            client=client,
            local_storage=local_storage,
            router=router,
            notifier=notifier,
        )
        self.finalizer = (
            SubmissionFinalizer(self.navigator, client) if client is not None else None
        )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def current_step(self) -> int:
        return self.store.current_step

    @property
    def status(self) -> WizardStatus:
        return self.store.status

    def get(self) -> Draft:
        """Copy of the current draft."""
        return self.store.get()

    def validate(self, step_index: int | None = None) -> dict[str, str]:
        """Validate a step (default: the current one) against the draft."""
        return self.validator.validate(
            step_index or self.store.current_step, self.store.get()
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> NavigationResult:
        """Hydrate from local storage, then from the backend, and route.

        Local storage is read first; the backend's draft is merged on top
        so that a value saved remotely wins field by field. Blank remote
        fields are skipped, and a backend with nothing saved (NOT_STARTED)
        leaves the local draft as it is. A failed remote load is a warning
        only. The wizard then lands on the saved step, or on the first
        earlier step that no longer validates.
        """
        if self.local_storage is not None:
            snapshot = self.local_storage.load(self.definition.storage_key)
            if snapshot:
                self.store.hydrate(snapshot.get("data"), snapshot.get("currentStep"))

        if self.client is not None:
            try:
                remote = await self.client.load_draft()
            except WizardClientError as exc:
                logger.warning(
                    "Wizard remote load failed",
                    flow=self.definition.flow,
                    status_code=exc.status_code,
                    error=exc.message,
                )
                if self.notifier is not None:
                    self.notifier.notify("warning", REMOTE_LOAD_FAILED)
                remote = None
            status = remote.get("status") if remote else None
            if status == _REMOTE_COMPLETED:
                return await self._already_completed()
            if remote and status != _REMOTE_NOT_STARTED:
                # Blank remote fields must not erase values kept locally
                draft = remote.get("draft") or {}
                self.store.hydrate(
                    {key: value for key, value in draft.items() if is_present(value)},
                    remote.get("current_step"),
                )

        return await self.navigator.go_to(self.store.current_step)

    async def sign_out(self) -> None:
        """Discard the draft, locally and in memory."""
        self.store.reset()
        self.navigator.clear_local()

    async def _already_completed(self) -> NavigationResult:
        self.store.mark_submitted()
        self.navigator.clear_local()
        route = self.definition.success_route
        await self.navigator.route(route)
        return NavigationResult(moved=False, step=self.store.current_step, route=route)

    # -------------------------------------------------------------------------
    # Navigation and submission
    # -------------------------------------------------------------------------

    async def advance(
        self, step_data: Mapping[str, Any] | None = None
    ) -> NavigationResult:
        return await self.navigator.advance(step_data)

    async def retreat(self) -> NavigationResult:
        return await self.navigator.retreat()

    async def go_to(self, step_index: int) -> NavigationResult:
        return await self.navigator.go_to(step_index)

    async def submit(self, draft: Draft | None = None) -> SubmissionResult:
        """Final submission; see SubmissionFinalizer.submit.

        Raises:
            RuntimeError: If the wizard was built without a client.
        """
        if self.finalizer is None:
            msg = f"Wizard '{self.definition.flow}' has no API client to submit with"
            raise RuntimeError(msg)
        return await self.finalizer.submit(draft)

    async def upload_file(
        self,
        field: str,
        filename: str,
        content: bytes,
        content_type: str,
    ) -> str:
        """Upload a file and store its URL in the given draft field.

        Raises:
            ValueError: If the field does not take an upload.
            RuntimeError: If the wizard was built without a client.
            WizardClientError: If the upload fails.
        """
        if field not in UPLOAD_FIELDS:
            msg = f"Field '{field}' does not accept uploads"
            raise ValueError(msg)
        if self.client is None:
            msg = f"Wizard '{self.definition.flow}' has no API client to upload with"
            raise RuntimeError(msg)
        url = await self.client.upload(
            filename, content, content_type, category=UPLOAD_FIELDS[field]
        )
        self.store.update({field: url})
        return url
