"""
CRUD over the task collection.

Every call re-reads the file through the store; nothing is cached between
calls. Mutations (create, update, delete, reorder) run their whole
load -> mutate -> save cycle under one lock per store file, shared by every
repository in the process that points at that file.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from taskapi.core.errors import NotFoundError
from taskapi.domain.tasks import (
    Task,
    build_task,
    check_reorder,
    check_task_id,
    find_task,
    next_task_id,
    validate_new_task,
    validate_patch,
)
from taskapi.repositories.json_storage import JsonTaskStore

logger = logging.getLogger(__name__)

_registry_lock = threading.Lock()
_path_locks: Dict[Path, threading.Lock] = {}


def _lock_for(path: Path) -> threading.Lock:
    key = Path(path).resolve()
    with _registry_lock:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _path_locks[key] = threading.Lock()
        return lock


class TaskRepository:
    """Task CRUD built on a JsonTaskStore; owns id assignment and merges."""

    def __init__(self, store: JsonTaskStore) -> None:
        self.store = store
        self._lock = _lock_for(store.path)

    # -------------------- reads --------------------
    def list(self) -> List[Task]:
        return self.store.load()

    def get(self, task_id: int) -> Task:
        check_task_id(task_id)
        tasks = self.store.load()
        pos = find_task(tasks, task_id)
        if pos is None:
            raise NotFoundError(task_id)
        return tasks[pos]

    def stats(self) -> Dict[str, Any]:
        """Completion counts overall, per category and per priority."""
        tasks = self.store.load()
        by_category: Dict[str, Dict[str, int]] = {}
        by_priority: Dict[str, Dict[str, int]] = {}
        done = 0
        for task in tasks:
            completed = bool(task.get("completed"))
            done += completed
            for bucket, key in (
                (by_category, task.get("category") or "uncategorized"),
                (by_priority, task.get("priority") or "none"),
            ):
                entry = bucket.setdefault(str(key), {"total": 0, "completed": 0})
                entry["total"] += 1
                entry["completed"] += completed
        return {
            "total": len(tasks),
            "completed": done,
            "pending": len(tasks) - done,
            "by_category": by_category,
            "by_priority": by_priority,
        }

    # -------------------- mutations --------------------
    def create(self, fields: Mapping[str, Any]) -> Task:
        cleaned = validate_new_task(fields)
        with self._lock:
            tasks = self.store.load()
            task = build_task(next_task_id(tasks), cleaned)
            tasks.append(task)
            self.store.save(tasks)
        logger.info("Created task", extra={"task_id": task["id"]})
        return task

    def update(self, task_id: int, fields: Mapping[str, Any]) -> Task:
        check_task_id(task_id)
        patch = validate_patch(task_id, fields)
        with self._lock:
            tasks = self.store.load()
            pos = find_task(tasks, task_id)
            if pos is None:
                raise NotFoundError(task_id)
            merged = {**tasks[pos], **patch}
            tasks[pos] = merged
            self.store.save(tasks)
        logger.info("Updated task", extra={"task_id": task_id})
        return merged

    def delete(self, task_id: int) -> bool:
        check_task_id(task_id)
        with self._lock:
            tasks = self.store.load()
            remaining = [t for t in tasks if t.get("id") != task_id]
            if len(remaining) == len(tasks):
                return False
            self.store.save(remaining)
        logger.info("Deleted task", extra={"task_id": task_id})
        return True

    def reorder(self, ordered_ids: Sequence[int]) -> List[Task]:
        with self._lock:
            tasks = self.store.load()
            ids = check_reorder(tasks, ordered_ids)
            by_id = {t["id"]: t for t in tasks}
            reordered = [by_id[i] for i in ids]
            self.store.save(reordered)
        logger.info("Reordered tasks", extra={"count": len(reordered)})
        return reordered
