"""String key-value storage backing the order store.

``KeyValueStorage`` mirrors the browser ``localStorage`` surface the
data layout was designed for: string keys, string values, and a missing
key reads as ``None``.  ``JsonFileStorage`` keeps all keys in a single
JSON object on disk.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from eoms.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored string, or None if the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``; absent keys are ignored."""


class JsonFileStorage(KeyValueStorage):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- KeyValueStorage interface --------------------------------------------

    def get_item(self, key: str) -> str | None:
        value = self._load_raw().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        records = self._load_raw()
        records[key] = value
        self._persist_raw(records)

    def remove_item(self, key: str) -> None:
        records = self._load_raw()
        if records.pop(key, None) is not None:
            self._persist_raw(records)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, str]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self._file_path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self._file_path)
            return {}
        return raw

    def _persist_raw(self, records: dict[str, str]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(f"Could not write {self._file_path}: {exc}") from exc
        logger.debug("Wrote %d keys to %s", len(records), self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("{}", encoding="utf-8")
            except OSError as exc:
                raise PersistenceError(
                    f"Could not create {self._file_path}: {exc}"
                ) from exc
