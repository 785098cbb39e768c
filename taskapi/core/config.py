"""
Configuration helpers for the task list backend.

Routers, repositories and scripts read settings through get_settings()
instead of fetching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_TASKS_FILE = Path(__file__).resolve().parents[2] / "data" / "tasks.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    tasks_file: Path
    json_indent: int
    log_level: str
    log_format: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    tasks_file = (os.getenv("TASKS_FILE") or "").strip()
    log_format = (os.getenv("LOG_FORMAT") or "").strip().lower()
    if log_format not in {"json", "text"}:
        log_format = "json" if app_env == "prod" else "text"

    return Settings(
        app_env=app_env,
        tasks_file=Path(tasks_file).expanduser() if tasks_file else DEFAULT_TASKS_FILE,
        json_indent=max(0, _int(os.getenv("TASKS_JSON_INDENT", "2"), 2)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_format=log_format,
    )
