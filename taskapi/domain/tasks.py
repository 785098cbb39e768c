"""Domain helpers for task records: validation, id assignment and lookups."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from taskapi.core.errors import ValidationError

Task = Dict[str, Any]

PRIORITIES = ("low", "medium", "high")


def is_valid_task_id(value: Any) -> bool:
    """Return True for positive integers (bools are rejected)."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def check_task_id(value: Any) -> int:
    if not is_valid_task_id(value):
        raise ValidationError(f"task id must be a positive integer, got {value!r}", field="id")
    return value


def collection_problem(data: Any) -> Optional[str]:
    """Describe why decoded JSON is not a task collection, or return None."""
    if not isinstance(data, list):
        return f"expected a JSON array, got {type(data).__name__}"
    seen = set()
    for pos, item in enumerate(data):
        if not isinstance(item, dict):
            return f"entry {pos} is not an object"
        tid = item.get("id")
        if not is_valid_task_id(tid):
            return f"entry {pos} has invalid id {tid!r}"
        if tid in seen:
            return f"duplicate id {tid}"
        seen.add(tid)
    return None


def next_task_id(tasks: Sequence[Mapping[str, Any]]) -> int:
    return max((t["id"] for t in tasks), default=0) + 1


def find_task(tasks: Sequence[Mapping[str, Any]], task_id: int) -> Optional[int]:
    """Return the position of the task with task_id, or None."""
    for pos, task in enumerate(tasks):
        if task.get("id") == task_id:
            return pos
    return None


def _clean_title(value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError("title must be a string", field="title")
    title = value.strip()
    if not title:
        raise ValidationError("title cannot be empty", field="title")
    return title


def _clean_fields(fields: Mapping[str, Any]) -> Task:
    """Type-check the known keys and make sure extension values serialise."""
    cleaned: Task = {}
    for key, value in fields.items():
        if not isinstance(key, str):
            raise ValidationError(f"field names must be strings, got {key!r}")
        if key == "title":
            value = _clean_title(value)
        elif key == "completed":
            if not isinstance(value, bool):
                raise ValidationError("completed must be a boolean", field="completed")
        elif key == "priority":
            if value is not None and value not in PRIORITIES:
                raise ValidationError(
                    f"priority must be one of {', '.join(PRIORITIES)}", field="priority"
                )
        elif key == "category":
            if value is not None and not isinstance(value, str):
                raise ValidationError("category must be a string", field="category")
        else:
            try:
                json.dumps(value, allow_nan=False)
            except (TypeError, ValueError):
                raise ValidationError(
                    f"{key} must be plain JSON (NaN and Infinity are not allowed)", field=key
                ) from None
        cleaned[key] = value
    return cleaned


def validate_new_task(fields: Mapping[str, Any]) -> Task:
    """Check the fields of a task about to be created; returns a cleaned copy."""
    if not isinstance(fields, Mapping):
        raise ValidationError("task fields must be an object")
    if "id" in fields:
        raise ValidationError("id is assigned by the store", field="id")
    if "title" not in fields:
        raise ValidationError("title is required", field="title")
    return _clean_fields(fields)


def validate_patch(task_id: int, fields: Mapping[str, Any]) -> Task:
    """Check a partial update for task_id; an id equal to task_id is dropped."""
    if not isinstance(fields, Mapping):
        raise ValidationError("task fields must be an object")
    patch = dict(fields)
    if "id" in patch:
        if patch.pop("id") != task_id:
            raise ValidationError("id cannot be changed", field="id")
    return _clean_fields(patch)


def build_task(task_id: int, fields: Mapping[str, Any]) -> Task:
    """New record: id first, then title/completed, then the remaining fields."""
    task: Task = {"id": task_id, "title": fields["title"], "completed": False}
    for key, value in fields.items():
        if key != "title":
            task[key] = value
    return task


def check_reorder(tasks: Sequence[Mapping[str, Any]], ordered_ids: Sequence[Any]) -> List[int]:
    """ordered_ids must name every live task exactly once."""
    if isinstance(ordered_ids, (str, bytes)) or not isinstance(ordered_ids, Sequence):
        raise ValidationError("ids must be a list", field="ids")
    ids = list(ordered_ids)
    if not all(is_valid_task_id(i) for i in ids):
        raise ValidationError("ids must be positive integers", field="ids")
    if len(set(ids)) != len(ids):
        raise ValidationError("ids contain duplicates", field="ids")
    if set(ids) != {t["id"] for t in tasks}:
        raise ValidationError("ids must list every task exactly once", field="ids")
    return ids
