"""
JSON-file persistence for the task collection.

The whole collection lives in one file holding a JSON array of task objects.
A missing file means "no tasks yet". Writes go to a temporary file in the same
directory which then replaces the target, so readers see either the old
collection or the new one, never a partial file.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import List, Sequence

from taskapi.core.errors import CorruptStoreError, StoreWriteError
from taskapi.domain.tasks import Task, collection_problem

logger = logging.getLogger(__name__)

_UMASK = os.umask(0)
os.umask(_UMASK)


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


class JsonTaskStore:
    """Loads and saves the full task collection. Performs no locking."""

    def __init__(self, path: Path | str, indent: int = 2) -> None:
        self.path = Path(path)
        self.indent = indent

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> List[Task]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f, parse_constant=_reject_constant)
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            logger.error("Task file unreadable: %s", exc, extra={"path": self.path})
            raise CorruptStoreError(self.path, str(exc)) from exc

        problem = collection_problem(data)
        if problem:
            logger.error("Task file malformed: %s", problem, extra={"path": self.path})
            raise CorruptStoreError(self.path, problem)
        logger.debug("Loaded %d tasks", len(data), extra={"path": self.path, "count": len(data)})
        return data

    def dumps(self, tasks: Sequence[Task]) -> str:
        return json.dumps(
            list(tasks), ensure_ascii=False, allow_nan=False, indent=self.indent or None
        ) + "\n"

    def save(self, tasks: Sequence[Task]) -> None:
        try:
            payload = self.dumps(tasks)
        except (TypeError, ValueError) as exc:
            raise StoreWriteError(self.path, f"not serialisable: {exc}") from exc

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, self._target_mode())
            os.replace(tmp_name, self.path)
            tmp_name = None
            self._sync_directory()
        except OSError as exc:
            logger.error("Task file write failed: %s", exc, extra={"path": self.path})
            raise StoreWriteError(self.path, str(exc)) from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temporary file %s", tmp_name)
        logger.debug("Saved %d tasks", len(tasks), extra={"path": self.path, "count": len(tasks)})

    def _target_mode(self) -> int:
        """Keep the permissions of the file being replaced; umask default for a new one."""
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            return 0o666 & ~_UMASK

    def _sync_directory(self) -> None:
        # makes the rename itself durable; directories cannot be opened on Windows
        if os.name != "posix":
            return
        dir_fd = os.open(self.path.parent, os.O_RDONLY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)
