"""Error hierarchy for the task store.

Client errors (400/404) are correctable by the caller; store errors (5xx)
signal a problem with the backing file and are never retried by the core.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class TaskStoreError(Exception):
    """Base exception for all task persistence failures."""

    code = "TASK_STORE_ERROR"
    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(TaskStoreError):
    """Caller-supplied data violates record invariants."""

    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field

    def to_response(self) -> dict:
        body = super().to_response()
        if self.field:
            body["error"]["field"] = self.field
        return body


class NotFoundError(TaskStoreError):
    """Referenced task id does not exist."""

    code = "TASK_NOT_FOUND"
    http_status = 404

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class CorruptStoreError(TaskStoreError):
    """Backing file exists but cannot be read or parsed."""

    code = "STORE_CORRUPT"
    http_status = 500

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Task file {path} is unreadable: {reason}")
        self.path = path
        self.reason = reason

    def to_response(self) -> dict:
        # the path is operator detail, not client detail
        return {"error": {"code": self.code, "message": "Task storage is unreadable"}}


class StoreWriteError(TaskStoreError):
    """Persisting the collection failed; the previous file is intact."""

    code = "STORE_WRITE_FAILED"
    http_status = 503

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not write task file {path}: {reason}")
        self.path = path
        self.reason = reason

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": "Task storage is unavailable"}}
