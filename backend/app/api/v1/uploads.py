"""File upload API router.

Endpoints:
- POST /upload — Store a CV, profile photo or company logo and return its URL.

The response is the bare ``{"url": ...}`` object the wizard's file fields
store directly in the draft.
"""

from typing import Annotated

from fastapi import APIRouter, File, Form, Request, UploadFile

from app.api.deps import CurrentUserId
from app.core.config import settings
from app.core.file_validation import FileCategory
from app.core.rate_limiting import limiter
from app.schemas.onboarding import UploadResponse
from app.services.upload_storage import store_upload

router = APIRouter()


@router.post("/upload")
@limiter.limit(settings.rate_limit_upload)
async def upload_file(
    request: Request,  # noqa: ARG001
    file: Annotated[UploadFile, File(...)],
    user_id: CurrentUserId,  # noqa: ARG001
    category: Annotated[FileCategory | None, Form()] = None,
) -> UploadResponse:
    """Upload a wizard file.

    Args:
        request: HTTP request (required by rate limiter).
        file: The uploaded file.
        user_id: Current authenticated user (injected, ensures auth).
        category: "image" (JPG, PNG, WebP up to 2 MB) or "document"
            (PDF, DOC, DOCX up to 5 MB); omitted accepts either.

    Returns:
        UploadResponse with the public URL of the stored file.

    Raises:
        ValidationError: If the file is too large or of an unaccepted type.
    """
    stored = await store_upload(file, category)
    return UploadResponse(url=stored.url)
