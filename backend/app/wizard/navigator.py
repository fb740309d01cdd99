"""Step Navigator.

Moves a wizard between steps. Forward moves are gated by the Step
Validator; backward moves never are. Every move persists the draft
locally and, when a client is configured, to the backend.

Remote saves are optimistic: a failed save is logged, pushed to the
Notifier as a warning, and navigation proceeds anyway. The draft is still
in local storage, and the next successful save carries it to the backend.
"""

import inspect
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

import structlog

from app.wizard.client import WizardApiClient, WizardClientError
from app.wizard.steps import WizardDefinition
from app.wizard.storage import DraftStorage
from app.wizard.store import WizardStateStore
from app.wizard.validation import StepValidator

logger = structlog.get_logger()

NoticeLevel = Literal["info", "success", "warning", "error"]

Router = Callable[[str], None | Awaitable[None]]
"""Receives the route of the step to display."""

REMOTE_SAVE_FAILED = (
    "Gagal menyimpan progres ke server. Data tetap tersimpan di perangkat ini."
)
LOCAL_SAVE_FAILED = "Gagal menyimpan progres di perangkat ini."


class Notifier(Protocol):
    """User-visible notices (toasts in the web UI)."""

    def notify(self, level: NoticeLevel, message: str) -> None:
        """Show a notice to the user."""
        ...


@dataclass
class Notice:
    level: NoticeLevel
    message: str


class CollectingNotifier:
    """Notifier that keeps notices in a list, for CLIs and tests."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def notify(self, level: NoticeLevel, message: str) -> None:
        self.notices.append(Notice(level=level, message=message))


@dataclass(frozen=True)
class NavigationResult:
    """Outcome of a navigation request.

    Attributes:
        moved: Whether the current step index changed.
        step: Current step index after the request.
        route: Route of that step.
        errors: Field errors that blocked the move (empty when not blocked).
        blocked_step: Step whose errors are reported; a forward move is
            also blocked by an earlier step that no longer validates.
        remote_saved: True/False for the backend save, None when no save
            was attempted.
    """

    moved: bool
    step: int
    route: str
    errors: dict[str, str] = field(default_factory=dict)
    blocked_step: int | None = None
    remote_saved: bool | None = None


class StepNavigator:
    """Step transitions for one wizard instance.

    Args:
        store: The wizard's state store.
        validator: Validator for the same wizard definition.
        client: Backend client; None keeps the wizard local-only.
        local_storage: Draft storage; None disables local persistence.
        router: Called with the route of each step navigated to.
        notifier: Receives warnings about failed saves.
    """

    def __init__(
        self,
        store: WizardStateStore,
        validator: StepValidator,
        *,
        client: WizardApiClient | None = None,
        local_storage: DraftStorage | None = None,
        router: Router | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.store = store
        self.validator = validator
        self.client = client
        self.local_storage = local_storage
        self.router = router
        self.notifier = notifier

    @property
    def definition(self) -> WizardDefinition:
        return self.store.definition

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    async def advance(
        self, step_data: Mapping[str, Any] | None = None
    ) -> NavigationResult:
        """Validate the current step and move to the next one.

        The step's form values are validated together with the stored
        draft, and so is every earlier non-optional step: step_data that
        blanks a field of an earlier step blocks the move as well. On
        errors nothing is merged, persisted or routed and the step index
        stays where it is.

        On the last step the draft is merged and persisted but the index
        does not move; finishing the wizard is the finalizer's job.

        Args:
            step_data: Values entered on the current step.
        """
        current = self.store.current_step
        partial = dict(step_data or {})
        candidate = {**self.store.get(), **partial}

        blocked_step = current
        errors = self.validator.validate(current, candidate)
        if not errors:
            earlier = self.validator.validate_through(current, candidate)
            if earlier is not None:
                blocked_step = earlier
                errors = self.validator.validate(earlier, candidate)
        if errors:
            logger.info(
                "Wizard step blocked by validation",
                flow=self.definition.flow,
                step=current,
                blocked_step=blocked_step,
                fields=sorted(errors),
            )
            return NavigationResult(
                moved=False,
                step=current,
                route=self.definition.route_for(current),
                errors=errors,
                blocked_step=blocked_step,
            )

        self.store.update(partial)
        moved = current < self.definition.last_index
        if moved:
            self.store.current_step = current + 1

        remote_saved = await self.persist()
        route = self.definition.route_for(self.store.current_step)
        if moved:
            await self.route(route)
        return NavigationResult(
            moved=moved,
            step=self.store.current_step,
            route=route,
            remote_saved=remote_saved,
        )

    async def retreat(self) -> NavigationResult:
        """Move to the previous step without validating.

        The possibly incomplete draft is persisted first so nothing typed
        on the current step is lost.
        """
        current = self.store.current_step
        moved = current > 1
        if moved:
            self.store.current_step = current - 1

        remote_saved = await self.persist()
        route = self.definition.route_for(self.store.current_step)
        if moved:
            await self.route(route)
        return NavigationResult(
            moved=moved,
            step=self.store.current_step,
            route=route,
            remote_saved=remote_saved,
        )

    async def go_to(self, step_index: int) -> NavigationResult:
        """Jump to a step, e.g. "edit" links on the review page.

        The jump only lands on step_index when every lower non-optional
        step validates. Otherwise the wizard is routed to the first failing
        step and its errors are returned.

        Raises:
            IndexError: If step_index is outside the flow.
        """
        self.definition.step(step_index)
        previous = self.store.current_step
        draft = self.store.get()

        target = step_index
        errors: dict[str, str] = {}
        blocking = self.validator.validate_through(step_index, draft)
        if blocking is not None:
            target = blocking
            errors = self.validator.validate(blocking, draft)

        self.store.current_step = target
        self._persist_locally()
        route = self.definition.route_for(target)
        await self.route(route)
        return NavigationResult(
            moved=target != previous,
            step=target,
            route=route,
            errors=errors,
        )

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    async def persist(self) -> bool | None:
        """Save the draft locally, then remotely when a client is set.

        Returns:
            True when the backend save succeeded, False when it failed,
            None when there is no client.
        """
        self._persist_locally()
        if self.client is None:
            return None

        step = self.store.current_step
        try:
            await self.client.save_step(step, self.store.get())
        except WizardClientError as exc:
            logger.warning(
                "Wizard remote save failed",
                flow=self.definition.flow,
                step=step,
                status_code=exc.status_code,
                error=exc.message,
            )
            self._notify("warning", REMOTE_SAVE_FAILED)
            return False
        return True

    def clear_local(self) -> None:
        """Remove the locally stored draft."""
        if self.local_storage is not None:
            self.local_storage.clear(self.definition.storage_key)

    def _persist_locally(self) -> None:
        if self.local_storage is None:
            return
        try:
            self.local_storage.save(self.definition.storage_key, self.store.snapshot())
        except OSError as exc:
            logger.warning(
                "Wizard local save failed",
                flow=self.definition.flow,
                error=str(exc),
            )
            self._notify("warning", LOCAL_SAVE_FAILED)

    async def route(self, route: str) -> None:
        """Hand a route to the router, awaiting it when it is async."""
        if self.router is None:
            return
        result = self.router(route)
        if inspect.isawaitable(result):
            await result

    def _notify(self, level: NoticeLevel, message: str) -> None:
        if self.notifier is not None:
            self.notifier.notify(level, message)
