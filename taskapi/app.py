from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from taskapi.core.config import Settings, get_settings
from taskapi.core.logging_setup import setup_logging
from taskapi.error_handlers import register_error_handlers
from taskapi.repositories import JsonTaskStore, TaskRepository
from taskapi.routers import health as health_router
from taskapi.routers import tasks as tasks_router


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (--factory)."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(title="Task List API")
    store = JsonTaskStore(settings.tasks_file, indent=settings.json_indent)
    app.state.settings = settings
    app.state.task_repository = TaskRepository(store)

    register_error_handlers(app)
    app.include_router(health_router.router)
    app.include_router(tasks_router.router)
    return app
