#!/usr/bin/env python3
"""
Verify the task file: parse it through the store and print a summary.

Exits with status 1 when the file is corrupt, so it can gate a deploy or be
run by an operator after a CorruptStoreError shows up in the logs.

Usage:
  python scripts/check_tasks_file.py [--path data/tasks.json]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from taskapi.core.config import get_settings
from taskapi.core.errors import CorruptStoreError
from taskapi.repositories.json_storage import JsonTaskStore


def summarize(store: JsonTaskStore) -> dict:
    tasks = store.load()
    return {
        "exists": store.exists(),
        "count": len(tasks),
        "max_id": max((t["id"] for t in tasks), default=0),
        "completed": sum(1 for t in tasks if t.get("completed")),
    }


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Check the task list JSON file")
    ap.add_argument("--path", help="Task file (default: TASKS_FILE / settings)")
    args = ap.parse_args(argv)

    path = Path(args.path) if args.path else get_settings().tasks_file
    store = JsonTaskStore(path)
    try:
        info = summarize(store)
    except CorruptStoreError as exc:
        print(f"CORRUPT: {exc.path}")
        print(f"  {exc.reason}")
        return 1

    print(f"OK: {path}" + ("" if info["exists"] else " (missing, treated as empty)"))
    print(f"  Tasks: {info['count']}")
    print(f"  Completed: {info['completed']}")
    print(f"  Next id: {info['max_id'] + 1}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
