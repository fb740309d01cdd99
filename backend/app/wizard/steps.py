"""Step descriptors and wizard definitions.

A WizardDefinition is the static, immutable description of one onboarding
flow: its ordered steps, where its draft is persisted and which backend
endpoints it talks to. Flows are declared once in app.wizard.flows.

Step indices are 1-based, matching the step numbers the backend stores in
onboarding_progress.current_step.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

Draft = dict[str, Any]
"""Draft Record: camelCase field name -> value, accumulated across steps."""

Rule = Callable[[Mapping[str, Any]], dict[str, str]]
"""Shape check over the whole draft; returns field -> message for failures."""


@dataclass(frozen=True)
class StepDescriptor:
    """One wizard step.

    Attributes:
        index: 1-based position in the flow.
        route: Client route of the step page.
        title: Human-readable step title.
        required_fields: Field path -> message when the field is missing.
            Nested fields use dots ("alamat.kota").
        optional: Optional steps always validate (social media, review...).
        rules: Additional shape checks run after the presence checks.
    """

    index: int
    route: str
    title: str
    required_fields: Mapping[str, str] = field(default_factory=dict)
    optional: bool = False
    rules: tuple[Rule, ...] = ()

    def __post_init__(self) -> None:
        if self.index < 1:
            msg = f"Step index must be >= 1, got {self.index}"
            raise ValueError(msg)
        # Freeze the mapping so descriptors stay immutable once built
        object.__setattr__(
            self, "required_fields", MappingProxyType(dict(self.required_fields))
        )


@dataclass(frozen=True)
class WizardDefinition:
    """Static description of one onboarding flow.

    Attributes:
        flow: Flow name, also the onboarding_progress.flow value.
        steps: Ordered step descriptors, indices 1..N without gaps.
        storage_key: Key of the locally persisted draft.
        api_path: Backend path for save (POST), hydrate (GET) and submit.
        initial_draft: Factory for a fresh, empty Draft Record.
        success_route: Route to land on after a successful submission.
    """

    flow: str
    steps: tuple[StepDescriptor, ...]
    storage_key: str
    api_path: str
    initial_draft: Callable[[], Draft]
    success_route: str

    def __post_init__(self) -> None:
        if not self.steps:
            msg = f"Wizard '{self.flow}' has no steps"
            raise ValueError(msg)
        indices = [step.index for step in self.steps]
        if indices != list(range(1, len(self.steps) + 1)):
            msg = f"Wizard '{self.flow}' step indices must be 1..N in order, got {indices}"
            raise ValueError(msg)

    @property
    def last_index(self) -> int:
        """Index of the final step."""
        return len(self.steps)

    @property
    def submit_path(self) -> str:
        """Backend path of the final submission endpoint."""
        return f"{self.api_path}/submit"

    def step(self, index: int) -> StepDescriptor:
        """Return the descriptor for a 1-based step index.

        Raises:
            IndexError: If the index is outside 1..N.
        """
        if not 1 <= index <= self.last_index:
            msg = f"Step {index} is outside 1..{self.last_index} for '{self.flow}'"
            raise IndexError(msg)
        return self.steps[index - 1]

    def route_for(self, index: int) -> str:
        """Client route of a step."""
        return self.step(index).route

    def index_for_route(self, route: str) -> int | None:
        """Reverse lookup used when a client lands directly on a step page."""
        for step in self.steps:
            if step.route == route:
                return step.index
        return None
