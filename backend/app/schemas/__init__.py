"""Pydantic request/response schemas for API endpoints."""

from app.schemas.onboarding import (
    DraftStateResponse,
    SaveStepRequest,
    SubmissionResponse,
    UploadResponse,
)

__all__ = [
    "DraftStateResponse",
    "SaveStepRequest",
    "SubmissionResponse",
    "UploadResponse",
]
