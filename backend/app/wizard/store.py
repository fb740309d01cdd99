"""Wizard State Store.

Holds the Draft Record and current step for one wizard instance. There is
exactly one store per OnboardingWizard; nothing here is process-global.

Merging is shallow and last-write-wins per top-level field: updating
"alamat" replaces the whole address mapping. Concurrent writers (two tabs
of the same wizard) are not reconciled; the last save wins.
"""

import copy
from collections.abc import Mapping
from enum import Enum
from typing import Any

from app.wizard.steps import Draft, WizardDefinition


class WizardStatus(str, Enum):
    """Lifecycle of one wizard instance."""

    IN_PROGRESS = "IN_PROGRESS"
    """Draft is being filled in, step by step."""

    SUBMITTED = "SUBMITTED"
    """Final submission succeeded; the draft has been discarded."""


class WizardStateStore:
    """Draft Record plus current step index for one wizard lifetime.

    Args:
        definition: The wizard flow this store belongs to.
    """

    def __init__(self, definition: WizardDefinition) -> None:
        self.definition = definition
        self._draft: Draft = definition.initial_draft()
        self._current_step = 1
        self.status = WizardStatus.IN_PROGRESS

    # -------------------------------------------------------------------------
    # Draft access
    # -------------------------------------------------------------------------

    def get(self) -> Draft:
        """Return a copy of the current draft.

        Callers may mutate the returned dict freely; use update() to change
        the stored draft.
        """
        return copy.deepcopy(self._draft)

    def update(self, partial: Mapping[str, Any]) -> Draft:
        """Merge fields into the draft, last write wins per field.

        Returns:
            Copy of the updated draft.
        """
        for key, value in partial.items():
            self._draft[key] = copy.deepcopy(value)
        return self.get()

    def reset(self) -> None:
        """Restore the initial empty draft and step 1."""
        self._draft = self.definition.initial_draft()
        self._current_step = 1
        self.status = WizardStatus.IN_PROGRESS

    def hydrate(
        self,
        data: Mapping[str, Any] | None,
        current_step: int | None = None,
    ) -> Draft:
        """Merge a saved session into the current draft.

        Fields whose saved value is None are skipped so that a sparse
        snapshot never blanks out fields already present. Unknown keys are
        kept; the backend may know fields this flow does not render.

        Args:
            data: Saved draft (local storage or GET endpoint).
            current_step: Saved step index; clamped into the flow's range.

        Returns:
            Copy of the hydrated draft.
        """
        if data:
            self.update({key: value for key, value in data.items() if value is not None})
        if current_step is not None:
            self._current_step = self._clamp(current_step)
        return self.get()

    # -------------------------------------------------------------------------
    # Step index
    # -------------------------------------------------------------------------

    @property
    def current_step(self) -> int:
        """1-based index of the step the user is on."""
        return self._current_step

    @current_step.setter
    def current_step(self, index: int) -> None:
        # Raises IndexError for out-of-range steps
        self.definition.step(index)
        self._current_step = index

    def mark_submitted(self) -> None:
        """Discard the draft after a successful final submission."""
        self.reset()
        self.status = WizardStatus.SUBMITTED

    def snapshot(self) -> dict[str, Any]:
        """Serializable view used for local persistence."""
        return {
            "currentStep": self._current_step,
            "status": self.status.value,
            "data": self.get(),
        }

    def _clamp(self, index: int) -> int:
        return max(1, min(index, self.definition.last_index))
