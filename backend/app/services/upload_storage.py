"""Upload storage for wizard files (CV, profile photo, company logo).

Files are validated by content, not extension, then written under
settings.upload_dir with a random prefix so names never collide and are
not guessable. The public URL is settings.upload_base_url + stored name;
the API app serves that directory as static files.
"""

import asyncio
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from app.core.config import settings
from app.core.errors import ValidationError
from app.core.file_validation import (
    FileCategory,
    detect_category,
    read_file_with_size_limit,
    sanitize_filename,
    validate_file_content,
)

if TYPE_CHECKING:
    from fastapi import UploadFile

logger = structlog.get_logger()

_BYTES_PER_MB = 1024 * 1024
_PREFIX_BYTES = 8
_MAX_STEM_LENGTH = 60


@dataclass(frozen=True)
class StoredUpload:
    """A file written to upload storage."""

    url: str
    stored_name: str
    mime_type: str
    category: FileCategory
    size_bytes: int


def max_size_for(category: FileCategory | None) -> int:
    """Byte limit for a category; uncategorized uploads get the larger one."""
    if category == "image":
        return settings.upload_max_image_mb * _BYTES_PER_MB
    return settings.upload_max_document_mb * _BYTES_PER_MB


def build_stored_name(filename: str, extension: str) -> str:
    """Random-prefixed, sanitized storage name with the detected extension."""
    stem = sanitize_filename(Path(filename).stem, max_length=_MAX_STEM_LENGTH)
    return f"{secrets.token_hex(_PREFIX_BYTES)}-{stem}.{extension}"


def _write(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


async def store_upload(
    file: "UploadFile",
    category: FileCategory | None = None,
) -> StoredUpload:
    """Validate and store an uploaded file.

    Args:
        file: Multipart upload.
        category: "image" or "document" to restrict the accepted types;
            None accepts either and applies the limit of the detected type.

    Returns:
        StoredUpload with the public URL.

    Raises:
        ValidationError: If the file is too large or not an accepted type.
    """
    content = await read_file_with_size_limit(file, max_size_for(category))
    filename = file.filename or "upload"

    if category is None:
        category = detect_category(content)
        if category is not None and len(content) > max_size_for(category):
            raise ValidationError(
                message=(
                    f"File size exceeds {max_size_for(category) // _BYTES_PER_MB}MB "
                    "limit"
                ),
                details=[{"field": "file", "error": "FILE_TOO_LARGE"}],
            )

    mime_type, extension = validate_file_content(content, filename, category)
    detected: FileCategory = category or (
        "image" if mime_type.startswith("image/") else "document"
    )

    stored_name = build_stored_name(filename, extension)
    await asyncio.to_thread(_write, Path(settings.upload_dir) / stored_name, content)

    url = f"{settings.upload_base_url.rstrip('/')}/{stored_name}"
    logger.info(
        "Upload stored",
        stored_name=stored_name,
        mime_type=mime_type,
        category=detected,
        size_bytes=len(content),
    )
    return StoredUpload(
        url=url,
        stored_name=stored_name,
        mime_type=mime_type,
        category=detected,
        size_bytes=len(content),
    )
