"""
Store tests: missing file, corrupt file detection and atomic writes.
"""
from __future__ import annotations

import json
import os
import stat

import pytest

from taskapi.core.errors import CorruptStoreError, StoreWriteError
from taskapi.repositories import json_storage
from taskapi.repositories.json_storage import JsonTaskStore


def test_missing_file_loads_as_empty(store, tasks_file):
    assert not tasks_file.exists()
    assert store.load() == []
    assert not store.exists()


def test_save_creates_directory_and_writes_json_array(store, tasks_file):
    tasks = [{"id": 1, "title": "Buy milk", "completed": False}]
    store.save(tasks)

    assert tasks_file.exists()
    assert json.loads(tasks_file.read_text(encoding="utf-8")) == tasks
    assert store.load() == tasks


def test_save_load_round_trip_is_byte_identical(store, tasks_file):
    store.save([
        {"id": 3, "title": "Café", "completed": True, "category": "errands"},
        {"id": 1, "title": "Walk dog", "completed": False, "priority": None},
    ])
    before = tasks_file.read_bytes()

    store.save(store.load())

    assert tasks_file.read_bytes() == before


def test_load_keeps_key_order_and_extension_fields(store, tasks_file):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(
        '[{"title": "x", "id": 7, "completed": false, "due": "2026-11-01"}]',
        encoding="utf-8",
    )
    task = store.load()[0]
    assert list(task) == ["title", "id", "completed", "due"]
    assert task["due"] == "2026-11-01"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"tasks": []}',
        '[1, 2, 3]',
        '[{"title": "no id"}]',
        '[{"id": 0, "title": "zero"}]',
        '[{"id": true, "title": "bool"}]',
        '[{"id": 1, "title": "a"}, {"id": 1, "title": "b"}]',
    ],
)
def test_unparseable_or_malformed_file_is_corrupt(store, tasks_file, content):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(content, encoding="utf-8")

    with pytest.raises(CorruptStoreError) as exc_info:
        store.load()
    assert exc_info.value.path == tasks_file


def test_empty_file_is_corrupt_not_empty(store, tasks_file):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text("", encoding="utf-8")
    with pytest.raises(CorruptStoreError):
        store.load()


def test_failed_replace_keeps_previous_file_and_cleans_temp(store, tasks_file, monkeypatch):
    store.save([{"id": 1, "title": "keep me", "completed": False}])
    before = tasks_file.read_bytes()

    def boom(src, dst):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(json_storage.os, "replace", boom)

    with pytest.raises(StoreWriteError) as exc_info:
        store.save([{"id": 1, "title": "lost", "completed": False}])

    assert "No space left" in exc_info.value.reason
    assert tasks_file.read_bytes() == before
    assert os.listdir(tasks_file.parent) == ["tasks.json"]


def test_unwritable_directory_raises_store_write_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = JsonTaskStore(blocker / "tasks.json")

    with pytest.raises(StoreWriteError):
        store.save([])


def test_unserialisable_value_raises_store_write_error(store, tasks_file):
    with pytest.raises(StoreWriteError):
        store.save([{"id": 1, "title": "x", "completed": False, "when": object()}])
    assert not tasks_file.exists()


def test_indent_zero_writes_compact_json(tmp_path):
    path = tmp_path / "tasks.json"
    JsonTaskStore(path, indent=0).save([{"id": 1, "title": "a", "completed": False}])
    assert path.read_text(encoding="utf-8") == '[{"id": 1, "title": "a", "completed": false}]\n'


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_numbers_are_never_written(store, tasks_file, value):
    store.save([{"id": 1, "title": "ok", "completed": False}])
    before = tasks_file.read_bytes()

    with pytest.raises(StoreWriteError):
        store.save([{"id": 1, "title": "ok", "completed": False, "score": value}])
    assert tasks_file.read_bytes() == before


@pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
def test_file_with_non_standard_constant_is_corrupt(store, tasks_file, constant):
    tasks_file.parent.mkdir(parents=True)
    tasks_file.write_text(
        f'[{{"id": 1, "title": "x", "completed": false, "score": {constant}}}]',
        encoding="utf-8",
    )
    with pytest.raises(CorruptStoreError) as exc_info:
        store.load()
    assert constant.lstrip("-") in exc_info.value.reason


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
@pytest.mark.parametrize("mode", [0o644, 0o640, 0o600])
def test_save_keeps_existing_file_mode(store, tasks_file, mode):
    store.save([{"id": 1, "title": "a", "completed": False}])
    os.chmod(tasks_file, mode)

    store.save(store.load())

    assert stat.S_IMODE(os.stat(tasks_file).st_mode) == mode


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_new_file_gets_umask_default_mode(store, tasks_file):
    store.save([])
    assert stat.S_IMODE(os.stat(tasks_file).st_mode) == 0o666 & ~json_storage._UMASK


@pytest.mark.skipif(os.name != "posix", reason="directory fsync is POSIX only")
def test_save_fsyncs_file_and_containing_directory(store, monkeypatch):
    real_fsync = os.fsync
    synced = []

    def recording_fsync(fd):
        synced.append(stat.S_ISDIR(os.fstat(fd).st_mode))
        real_fsync(fd)

    monkeypatch.setattr(json_storage.os, "fsync", recording_fsync)
    store.save([{"id": 1, "title": "a", "completed": False}])

    assert synced == [False, True]
