from __future__ import annotations

from fastapi import APIRouter, Request, Response

from taskapi.core.errors import NotFoundError
from taskapi.repositories.task_repository import TaskRepository
from taskapi.schemas import TaskCreate, TaskOrder, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _get_repository(request: Request) -> TaskRepository:
    repo = getattr(getattr(request.app, "state", None), "task_repository", None)
    if not repo:
        raise RuntimeError("TaskRepository not configured")
    return repo


@router.get("")
def list_tasks(request: Request):
    return _get_repository(request).list()


@router.post("", status_code=201)
def create_task(payload: TaskCreate, request: Request):
    return _get_repository(request).create(payload.model_dump(exclude_unset=True))


# declared before /{task_id} so "stats" and "order" are not parsed as ids
@router.get("/stats")
def task_stats(request: Request):
    return _get_repository(request).stats()


@router.put("/order")
def reorder_tasks(payload: TaskOrder, request: Request):
    return _get_repository(request).reorder(payload.ids)


@router.get("/{task_id}")
def get_task(task_id: int, request: Request):
    return _get_repository(request).get(task_id)


@router.patch("/{task_id}")
def update_task(task_id: int, payload: TaskUpdate, request: Request):
    return _get_repository(request).update(task_id, payload.model_dump(exclude_unset=True))


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: int, request: Request):
    if not _get_repository(request).delete(task_id):
        raise NotFoundError(task_id)
    return Response(status_code=204)
