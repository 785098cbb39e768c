from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Makes the taskapi package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from taskapi.core import config as core_config  # noqa: E402
from taskapi.repositories import JsonTaskStore, TaskRepository  # noqa: E402


@pytest.fixture()
def tasks_file(tmp_path) -> Path:
    """Path of a not-yet-existing task file inside a missing directory."""
    return tmp_path / "data" / "tasks.json"


@pytest.fixture()
def store(tasks_file) -> JsonTaskStore:
    return JsonTaskStore(tasks_file)


@pytest.fixture()
def repo(store) -> TaskRepository:
    return TaskRepository(store)


@pytest.fixture()
def clean_settings():
    """Reset the cached Settings before and after a test that edits env vars."""
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()
