# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskboard.store import TaskStore

from .fakes import NOW, CountingStorage, write_tasks


@pytest.fixture()
def clock():
    return lambda: NOW


@pytest.fixture()
def storage(tmp_path: Path) -> CountingStorage:
    return CountingStorage(tmp_path / "data" / "storage.json")


@pytest.fixture()
def store(storage: CountingStorage, clock) -> TaskStore:
    """Store seeded with the sample tasks (nothing stored yet)."""
    return TaskStore(storage, clock=clock).load()


@pytest.fixture()
def empty_store(storage: CountingStorage, clock) -> TaskStore:
    write_tasks(storage, [])
    return TaskStore(storage, clock=clock).load()
