"""Step validation for onboarding wizards.

Validation is a pure function of a step descriptor and the Draft Record:
presence checks for the step's required fields first, then the step's
shape rules (email, phone, date text, numeric ranges, list entries).
Errors map a field key to an Indonesian message, as the forms display it.

Error keys:
    - Top-level and nested fields report under their leaf name
      ("alamat.kota" -> "kota").
    - List entries report as "<list>[<i>].<field>" ("pendidikan[0].lokasi").
    - The first error recorded for a key wins.

The same validator runs in the wizard before each advance and in the
backend before a final submission is persisted.
"""

import re
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from typing import Any

from app.wizard.steps import Rule, StepDescriptor, WizardDefinition

# =============================================================================
# Constants
# =============================================================================

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
"""Same shape check the registration and onboarding forms use."""

PHONE_PATTERN = re.compile(r"^(\+62|62|0)8[1-9][0-9]{6,9}$")
"""Indonesian mobile number: +62/62/0 prefix, 8, operator digit, 7-10 digits."""

_DATE_SHAPE = re.compile(r"^(\d{1,2}[/-]\d{1,2}[/-]\d{4}|\d{4}-\d{2}-\d{2})$")
_DATE_FORMATS = ("%d/%m/%Y", "%d-%m-%Y", "%Y-%m-%d")

MIN_DATE_YEAR = 1900

MSG_INVALID_EMAIL = "Format email tidak valid"
MSG_INVALID_PHONE = "Format nomor telepon tidak valid"
MSG_INVALID_DATE = "Format tanggal tidak valid. Gunakan format DD/MM/YYYY"
MSG_FUTURE_DATE = "Tanggal tidak boleh lebih dari hari ini"
MSG_DATE_TOO_OLD = "Tanggal tidak boleh kurang dari tahun 1900"


# =============================================================================
# Draft access helpers
# =============================================================================


def get_path(draft: Mapping[str, Any], path: str) -> Any:
    """Read a dotted path from the draft; missing segments yield None."""
    value: Any = draft
    for segment in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(segment)
    return value


def leaf_key(path: str) -> str:
    """Error key of a dotted path ("alamat.kota" -> "kota")."""
    return path.rsplit(".", 1)[-1]


def is_present(value: Any) -> bool:
    """Whether a required field counts as filled in.

    Blank strings, empty collections, None and zero count as missing.
    Booleans are always present (an unchecked box is still an answer).
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return True
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def to_number(value: Any) -> float | None:
    """Coerce form input to a number; None when it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value.strip():
        try:
            return float(value.strip().replace(",", "."))
        except ValueError:
            return None
    return None


def parse_date_text(value: str) -> date | None:
    """Parse DD/MM/YYYY, D/M/YYYY, DD-MM-YYYY, D-M-YYYY or YYYY-MM-DD.

    Returns:
        The parsed date, or None when the text matches none of the formats
        or names an impossible day (31/02/2020).
    """
    text = value.strip()
    if not _DATE_SHAPE.match(text):
        return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def check_date_text(
    value: Any,
    *,
    allow_future: bool = False,
    today: date | None = None,
) -> str | None:
    """Return the error message for a date field, or None when it is valid."""
    if not isinstance(value, str):
        return MSG_INVALID_DATE
    parsed = parse_date_text(value)
    if parsed is None:
        return MSG_INVALID_DATE
    if not allow_future and parsed > (today or date.today()):
        return MSG_FUTURE_DATE
    if parsed.year < MIN_DATE_YEAR:
        return MSG_DATE_TOO_OLD
    return None


# =============================================================================
# Rule factories
# =============================================================================


def email_format(path: str, message: str = MSG_INVALID_EMAIL) -> Rule:
    """Email shape check; blank values are left to the presence check."""

    def rule(draft: Mapping[str, Any]) -> dict[str, str]:
        value = get_path(draft, path)
        if is_present(value) and not EMAIL_PATTERN.match(str(value).strip()):
            return {leaf_key(path): message}
        return {}

    return rule


def phone_format(path: str, message: str = MSG_INVALID_PHONE) -> Rule:
    """Indonesian mobile phone check; blank values are left to presence."""

    def rule(draft: Mapping[str, Any]) -> dict[str, str]:
        value = get_path(draft, path)
        if is_present(value) and not PHONE_PATTERN.match(str(value).strip()):
            return {leaf_key(path): message}
        return {}

    return rule


def date_text(path: str, *, allow_future: bool = False) -> Rule:
    """Textual date check for a present date field."""

    def rule(draft: Mapping[str, Any]) -> dict[str, str]:
        value = get_path(draft, path)
        if not is_present(value):
            return {}
        error = check_date_text(value, allow_future=allow_future)
        return {leaf_key(path): error} if error else {}

    return rule


def number_range(path: str, low: float, high: float, message: str) -> Rule:
    """Inclusive numeric range for an optional numeric field.

    Unset values (see is_present, so 0 as well) are not range-checked.
    """

    def rule(draft: Mapping[str, Any]) -> dict[str, str]:
        value = get_path(draft, path)
        if not is_present(value):
            return {}
        number = to_number(value)
        if number is None or not low <= number <= high:
            return {leaf_key(path): message}
        return {}

    return rule


def list_entries(
    path: str,
    required: Mapping[str, str],
    *,
    dates: Iterable[str] = (),
    allow_future_dates: bool = False,
) -> Rule:
    """Check every entry of a list field.

    Args:
        path: Dotted path of the list in the draft.
        required: Entry field -> message when the entry field is blank.
        dates: Entry fields holding date text; checked when present.
        allow_future_dates: Accept dates after today (e.g. deadlines).
    """
    date_fields = tuple(dates)

    def rule(draft: Mapping[str, Any]) -> dict[str, str]:
        entries = get_path(draft, path)
        if not isinstance(entries, list):
            return {}
        errors: dict[str, str] = {}
        list_name = leaf_key(path)
        for i, entry in enumerate(entries):
            entry_map = entry if isinstance(entry, Mapping) else {}
            for field_name, message in required.items():
                if not is_present(entry_map.get(field_name)):
                    errors.setdefault(f"{list_name}[{i}].{field_name}", message)
            for field_name in date_fields:
                value = entry_map.get(field_name)
                if not is_present(value):
                    continue
                error = check_date_text(value, allow_future=allow_future_dates)
                if error:
                    errors.setdefault(f"{list_name}[{i}].{field_name}", error)
        return errors

    return rule


def when(predicate: Callable[[Mapping[str, Any]], bool], *rules: Rule) -> Rule:
    """Run rules only when the predicate holds for the draft."""

    def rule(draft: Mapping[str, Any]) -> dict[str, str]:
        if not predicate(draft):
            return {}
        errors: dict[str, str] = {}
        for inner in rules:
            for key, message in inner(draft).items():
                errors.setdefault(key, message)
        return errors

    return rule


def require(path: str, message: str) -> Rule:
    """Presence check as a rule, for use inside when()."""

    def rule(draft: Mapping[str, Any]) -> dict[str, str]:
        if is_present(get_path(draft, path)):
            return {}
        return {leaf_key(path): message}

    return rule


# =============================================================================
# Validation
# =============================================================================


def validate_step(step: StepDescriptor, draft: Mapping[str, Any]) -> dict[str, str]:
    """Validate one step against the draft.

    Args:
        step: Step descriptor.
        draft: Draft Record (not modified).

    Returns:
        Field key -> message. Empty when the step is valid or optional.
    """
    if step.optional:
        return {}

    errors: dict[str, str] = {}
    for path, message in step.required_fields.items():
        if not is_present(get_path(draft, path)):
            errors.setdefault(leaf_key(path), message)
    for rule in step.rules:
        for key, message in rule(draft).items():
            errors.setdefault(key, message)
    return errors


class StepValidator:
    """Validator bound to one wizard definition."""

    def __init__(self, definition: WizardDefinition) -> None:
        self.definition = definition

    def validate(self, step_index: int, draft: Mapping[str, Any]) -> dict[str, str]:
        """Validate a step by its 1-based index.

        Raises:
            IndexError: If the index is outside the flow.
        """
        return validate_step(self.definition.step(step_index), draft)

    def validate_through(
        self, step_index: int, draft: Mapping[str, Any]
    ) -> int | None:
        """Find the first step below step_index that does not validate.

        Returns:
            Index of the first failing lower step, or None when step_index
            is reachable.
        """
        for step in self.definition.steps:
            if step.index >= step_index:
                break
            if validate_step(step, draft):
                return step.index
        return None

    def validate_all(self, draft: Mapping[str, Any]) -> dict[int, dict[str, str]]:
        """Validate every step; returns only the failing ones by index."""
        failures: dict[int, dict[str, str]] = {}
        for step in self.definition.steps:
            errors = validate_step(step, draft)
            if errors:
                failures[step.index] = errors
        return failures
