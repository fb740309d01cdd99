"""Onboarding wizard schemas.

Request/response bodies shared by the job-seeker onboarding, employer
onboarding and job-posting wizard endpoints. Draft contents stay as free
JSON objects; the wizard's step rules (app.wizard.validation) decide what a
complete draft looks like.
"""

import uuid
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ProgressStatus = Literal["NOT_STARTED", "IN_PROGRESS", "COMPLETED"]


class SaveStepRequest(BaseModel):
    """Body of POST <wizard>: persist the draft as of a step.

    Attributes:
        step: 1-based step index the user is on after the save.
        data: Draft fields; merged shallowly over the stored draft.
    """

    model_config = ConfigDict(extra="forbid")

    step: int = Field(..., ge=1)
    data: dict[str, Any] = Field(default_factory=dict)


class DraftStateResponse(BaseModel):
    """Saved wizard progress for the current user.

    Attributes:
        current_step: Step to resume on.
        status: NOT_STARTED, IN_PROGRESS or COMPLETED.
        draft: Accumulated draft fields.
    """

    model_config = ConfigDict(extra="forbid")

    current_step: int
    status: ProgressStatus
    draft: dict[str, Any]


class SubmissionResponse(BaseModel):
    """Result of a final wizard submission.

    Attributes:
        success: Always True; failures are returned as error envelopes.
        entity_id: ID of the persisted profile, employer or job posting.
        redirect_url: Route the wizard navigates to next.
        already_completed: True when an earlier submission was returned
            instead of creating a second entity.
    """

    model_config = ConfigDict(extra="forbid")

    success: bool = True
    entity_id: uuid.UUID
    redirect_url: str
    already_completed: bool = False


class UploadResponse(BaseModel):
    """Public URL of an uploaded file."""

    model_config = ConfigDict(extra="forbid")

    url: str
