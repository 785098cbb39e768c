from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    repo = request.app.state.task_repository
    return {"status": "ok", "store_exists": repo.store.exists()}
