"""Key/value persistence for preferences, the in-flight session and result history.

Every read tolerates a missing or malformed entry by returning the default,
and every write failure is logged instead of raised: the exam keeps running
from memory even when the durable copy is stale.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from threading import Lock
from typing import Protocol

from pydantic import TypeAdapter

from exam_app.constants.exam_constants import (
    CLOCK_SETTINGS_KEY,
    COUNTDOWN_SETTINGS_KEY,
    DEFAULT_STORAGE_DIRNAME,
    DEFAULT_STORAGE_FILENAME,
    EXAM_RESULTS_KEY,
    EXAM_SESSION_KEY,
    RESULT_HISTORY_LIMIT,
    STORAGE_PATH_ENV_VAR,
)
from exam_app.core.models import ClockSettings, CountdownSettings, ExamResult, ExamSession
from exam_app.core.records import (
    ClockSettingsRecord,
    CountdownSettingsRecord,
    ResultRecord,
    SessionRecord,
)

logger = logging.getLogger(__name__)

_RESULT_LIST = TypeAdapter(list[ResultRecord])


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """Process-local store, mainly for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Stores all keys in a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = Lock()

    @classmethod
    def from_environment(cls) -> "JsonFileStore":
        override = os.environ.get(STORAGE_PATH_ENV_VAR)
        if override:
            return cls(Path(override).expanduser())
        return cls(Path.home() / DEFAULT_STORAGE_DIRNAME / DEFAULT_STORAGE_FILENAME)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read_document().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                document = self._read_document()
            except ValueError:
                logger.warning("Storage file %s is corrupt; starting a new one", self._path)
                document = {}
            document[key] = value
            self._write_document(document)

    def delete(self, key: str) -> None:
        with self._lock:
            document = self._read_document()
            if key in document:
                del document[key]
                self._write_document(document)

    def _read_document(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self._path} does not contain a JSON object")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_document(self, document: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        temp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        temp_path.replace(self._path)


class ExamStorage:
    """Typed access to the four persisted entries."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    # --- Clock settings ---

    def get_clock_settings(self) -> ClockSettings:
        raw = self._read(CLOCK_SETTINGS_KEY)
        if raw is None:
            return ClockSettings()
        try:
            return ClockSettingsRecord.model_validate_json(raw).to_domain()
        except ValueError:
            logger.warning("Ignoring malformed clock settings")
            return ClockSettings()

    def save_clock_settings(self, settings: ClockSettings) -> bool:
        return self._write(CLOCK_SETTINGS_KEY, ClockSettingsRecord.from_domain(settings).model_dump_json())

    # --- Countdown settings ---

    def get_countdown_settings(self) -> CountdownSettings:
        raw = self._read(COUNTDOWN_SETTINGS_KEY)
        if raw is None:
            return CountdownSettings()
        try:
            return CountdownSettingsRecord.model_validate_json(raw).to_domain()
        except ValueError:
            logger.warning("Ignoring malformed countdown settings")
            return CountdownSettings()

    def save_countdown_settings(self, settings: CountdownSettings) -> bool:
        record = CountdownSettingsRecord.from_domain(settings)
        return self._write(COUNTDOWN_SETTINGS_KEY, record.model_dump_json())

    # --- In-flight session ---

    def load_session(self) -> ExamSession | None:
        raw = self._read(EXAM_SESSION_KEY)
        if raw is None:
            return None
        try:
            return SessionRecord.model_validate_json(raw).to_domain()
        except ValueError:
            logger.warning("Ignoring malformed saved exam session")
            return None

    def save_session(self, session: ExamSession) -> bool:
        return self._write(EXAM_SESSION_KEY, SessionRecord.from_domain(session).model_dump_json())

    def clear_session(self) -> bool:
        try:
            self._store.delete(EXAM_SESSION_KEY)
        except (OSError, ValueError):
            logger.exception("Error clearing exam session")
            return False
        return True

    # --- Result history ---

    def load_results(self) -> list[ExamResult]:
        """Stored results, newest first."""
        raw = self._read(EXAM_RESULTS_KEY)
        if raw is None:
            return []
        try:
            records = _RESULT_LIST.validate_json(raw)
        except ValueError:
            logger.warning("Ignoring malformed result history")
            return []
        return [record.to_domain() for record in records]

    def append_result(self, result: ExamResult) -> bool:
        """Prepend ``result`` and keep only the newest entries."""
        history = [result, *self.load_results()][:RESULT_HISTORY_LIMIT]
        records = [ResultRecord.from_domain(item) for item in history]
        return self._write(EXAM_RESULTS_KEY, _RESULT_LIST.dump_json(records).decode("utf-8"))

    def _read(self, key: str) -> str | None:
        try:
            return self._store.get(key)
        except (OSError, ValueError):
            logger.exception("Error reading %s", key)
            return None

    def _write(self, key: str, value: str) -> bool:
        try:
            self._store.set(key, value)
        except (OSError, ValueError):
            logger.exception("Error saving %s", key)
            return False
        return True
