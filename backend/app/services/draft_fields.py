"""Coercion helpers for reading validated drafts into ORM columns.

Drafts arrive as free JSON from the wizard. By the time a flow service
reads them the step rules have passed, but optional fields can still be
blank strings, numbers sent as text, or missing sections.
"""

from collections.abc import Mapping
from typing import Any

from app.wizard.validation import is_present, to_number


def text_or_none(value: Any) -> str | None:
    """Stripped string, or None for blanks and non-strings."""
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


def text_value(value: Any) -> str:
    """Stripped string for NOT NULL text columns."""
    return text_or_none(value) or ""


def int_or_none(value: Any) -> int | None:
    """Integer from a number or numeric text; None when blank or invalid."""
    number = to_number(value)
    return int(number) if number is not None else None


def section(value: Any) -> dict[str, Any] | None:
    """A nested draft object, or None when it is absent or all blank."""
    if not isinstance(value, Mapping):
        return None
    if not any(is_present(item) for item in value.values()):
        return None
    return dict(value)


def entries(value: Any) -> list[dict[str, Any]]:
    """Object entries of a draft list, skipping anything malformed."""
    if not isinstance(value, list):
        return []
    return [dict(item) for item in value if isinstance(item, Mapping)]


def present_items(value: Any) -> list[Any]:
    """Non-blank items of a draft list."""
    if not isinstance(value, list):
        return []
    return [item for item in value if is_present(item)]
