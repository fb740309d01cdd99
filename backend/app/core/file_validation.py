"""File validation utilities for secure file uploads.

Security: Validates file content (magic bytes), enforces size limits,
and sanitizes filenames before they are used in storage keys.
"""

import re
from typing import TYPE_CHECKING, Literal

import magic
import structlog

if TYPE_CHECKING:
    from fastapi import UploadFile

from app.core.errors import ValidationError

logger = structlog.get_logger()

FileCategory = Literal["image", "document"]

# Chunk size for reading files (64 KB)
CHUNK_SIZE_BYTES = 64 * 1024

# Allowed MIME types per upload category, mapped to the stored extension
IMAGE_MIMES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

DOCUMENT_MIMES: dict[str, str] = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}

ALLOWED_MIMES: dict[str, str] = {**IMAGE_MIMES, **DOCUMENT_MIMES}

_ALLOWED_BY_CATEGORY: dict[str | None, dict[str, str]] = {
    "image": IMAGE_MIMES,
    "document": DOCUMENT_MIMES,
    None: ALLOWED_MIMES,
}


async def read_file_with_size_limit(
    file: "UploadFile",
    max_size: int,
) -> bytes:
    """Read file content with size limit to prevent DoS.

    Args:
        file: UploadFile from FastAPI.
        max_size: Maximum allowed file size in bytes.

    Returns:
        File content as bytes.

    Raises:
        ValidationError: If file exceeds size limit.
    """
    content = b""
    total_size = 0

    while True:
        chunk = await file.read(CHUNK_SIZE_BYTES)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > max_size:
            raise ValidationError(
                message=f"File size exceeds {max_size // (1024 * 1024)}MB limit",
                details=[{"field": "file", "error": "FILE_TOO_LARGE"}],
            )
        content += chunk

    return content


def detect_category(content: bytes) -> FileCategory | None:
    """Return the upload category implied by the content's magic bytes."""
    detected_mime = magic.from_buffer(content, mime=True)
    if detected_mime in IMAGE_MIMES:
        return "image"
    if detected_mime in DOCUMENT_MIMES:
        return "document"
    return None


def validate_file_content(
    content: bytes,
    filename: str,
    category: FileCategory | None = None,
) -> tuple[str, str]:
    """Validate file content using magic bytes (not just extension).

    Args:
        content: File binary content.
        filename: Original filename (for server-side logging).
        category: Restrict to images or documents; None accepts both.

    Returns:
        Tuple of (detected MIME type, storage extension).

    Raises:
        ValidationError: If file content doesn't match allowed MIME types.
    """
    allowed = _ALLOWED_BY_CATEGORY[category]
    detected_mime = magic.from_buffer(content, mime=True)

    if detected_mime not in allowed:
        # Log detected MIME for server-side debugging; do NOT expose to client
        logger.warning(
            "File content validation failed",
            detected_mime=detected_mime,
            filename=filename,
            category=category,
        )
        raise ValidationError(
            message=(
                "File must be an image (JPG, PNG, WebP) "
                "or document (PDF, DOC, DOCX)"
            ),
            details=[{"field": "file", "error": "INVALID_FILE_CONTENT"}],
        )

    return detected_mime, allowed[detected_mime]


def sanitize_filename(filename: str, max_length: int = 100) -> str:
    """Sanitize an uploaded filename for use inside a storage key.

    Whitespace becomes "-", anything outside [A-Za-z0-9._-] becomes "_",
    and path separators can never survive.

    Args:
        filename: Original filename from the client.
        max_length: Maximum allowed filename length.

    Returns:
        Sanitized filename, "upload" if nothing usable remains.
    """
    safe = re.sub(r"\s+", "-", filename.strip())
    safe = re.sub(r"[^A-Za-z0-9._-]", "_", safe)
    safe = safe.lstrip(".")

    if len(safe) > max_length:
        # Preserve extension if present
        if "." in safe:
            name, ext = safe.rsplit(".", 1)
            ext = f".{ext}"
            safe = name[: max_length - len(ext)] + ext
        else:
            safe = safe[:max_length]

    if not safe:
        safe = "upload"

    return safe
