"""
Persistence adapters.

JsonTaskStore owns the file; TaskRepository owns the CRUD rules on top of it.
Routers should depend on the repository rather than touching the file.
"""

from taskapi.repositories.json_storage import JsonTaskStore
from taskapi.repositories.task_repository import TaskRepository

__all__ = ["JsonTaskStore", "TaskRepository"]
