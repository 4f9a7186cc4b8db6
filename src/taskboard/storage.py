"""Persistence helpers: a small key-value store kept in one JSON file.

Values are strings, like browser local storage. Two keys are used:
``tasks`` (a JSON-encoded array of task records) and ``dark-mode``
("true"/"false"). Failures surface as StorageError; callers do not retry.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from taskboard.errors import StorageError

TASKS_KEY = "tasks"
DARK_MODE_KEY = "dark-mode"

TaskEntry = Dict[str, Any]

log = structlog.get_logger(__name__)


class Storage:
    def __init__(self, path: Path):
        self.path = Path(path)

    # -------------------- raw key-value access --------------------
    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Cannot read {self.path}: expected an object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=4)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        log.debug("storage_saved", key=key, path=str(self.path))

    # -------------------- typed helpers --------------------
    def load_tasks(self) -> Optional[List[TaskEntry]]:
        """Return the stored task records, or None when nothing was saved yet."""
        raw = self.get_item(TASKS_KEY)
        if raw is None:
            return None
        try:
            records = json.loads(raw)
        except ValueError as exc:
            raise StorageError(f"Corrupt '{TASKS_KEY}' entry: {exc}") from exc
        if not isinstance(records, list):
            raise StorageError(f"Corrupt '{TASKS_KEY}' entry: expected an array")
        return records

    def save_tasks(self, records: List[TaskEntry]) -> None:
        self.set_item(TASKS_KEY, json.dumps(records))

    def load_dark_mode(self) -> bool:
        return self.get_item(DARK_MODE_KEY) == "true"

    def save_dark_mode(self, enabled: bool) -> None:
        self.set_item(DARK_MODE_KEY, "true" if enabled else "false")
