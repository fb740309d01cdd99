"""Local draft persistence for wizards.

Web clients keep the draft in localStorage under the flow's storage key so
a reload resumes the wizard. Here a draft is one JSON file per storage key
in a configured directory; anything that is not JSON-serializable (an open
file handle, a File object picked in a form) is left out of the snapshot.
"""

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Protocol

import structlog

logger = structlog.get_logger()

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")

# Marks a value left out of a snapshot
_DROP = object()


class DraftStorage(Protocol):
    """Key/value storage for wizard snapshots."""

    def load(self, key: str) -> dict[str, Any] | None:
        """Return the saved snapshot, or None when nothing is stored."""
        ...

    def save(self, key: str, snapshot: dict[str, Any]) -> None:
        """Store a snapshot under key, replacing any previous one."""
        ...

    def clear(self, key: str) -> None:
        """Remove the snapshot stored under key, if any."""
        ...


class InMemoryDraftStorage:
    """DraftStorage kept in a dict; for tests and short-lived scripts."""

    def __init__(self) -> None:
        self.items: dict[str, dict[str, Any]] = {}

    def load(self, key: str) -> dict[str, Any] | None:
        snapshot = self.items.get(key)
        return json.loads(json.dumps(snapshot)) if snapshot is not None else None

    def save(self, key: str, snapshot: dict[str, Any]) -> None:
        self.items[key] = json.loads(json.dumps(_serializable(snapshot)))

    def clear(self, key: str) -> None:
        self.items.pop(key, None)


class LocalDraftStorage:
    """DraftStorage backed by one JSON file per key.

    Args:
        directory: Directory holding the draft files; created on first save.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            msg = f"Invalid draft storage key: {key!r}"
            raise ValueError(msg)
        return self.directory / f"{key}.json"

    def load(self, key: str) -> dict[str, Any] | None:
        path = self._path(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            snapshot = json.loads(raw)
        except json.JSONDecodeError:
            # A torn or hand-edited file must not break wizard start
            logger.warning("Discarding unreadable wizard draft", key=key, path=str(path))
            return None
        return snapshot if isinstance(snapshot, dict) else None

    def save(self, key: str, snapshot: dict[str, Any]) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(_serializable(snapshot), ensure_ascii=False)
        # Write-then-rename so a crash never leaves half a draft behind
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def clear(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def _serializable(value: Any) -> Any:
    """Copy of value with non-JSON leaves dropped."""
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            cleaned = _serializable(item)
            if cleaned is not _DROP:
                result[str(key)] = cleaned
        return result
    if isinstance(value, (list, tuple)):
        return [item for item in map(_serializable, value) if item is not _DROP]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return _DROP

