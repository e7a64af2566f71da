# =========================================================
# FILE: aibuilder/api/projects.py
# =========================================================

import logging

from fastapi import APIRouter, Depends

from aibuilder.api.deps import get_current_user, get_project_store
from aibuilder.schemas.envelope import ok
from aibuilder.schemas.projects import ProjectCreate, ProjectUpdate
from aibuilder.services.auth_service import Identity

router = APIRouter(prefix="/api", tags=["projects"])
logger = logging.getLogger("aibuilder.projects")


@router.get("/projects")
async def projects(
        user: Identity = Depends(get_current_user),
        store=Depends(get_project_store),
):
    items = await store.list(user.user_id)
    return ok([p.model_dump(mode="json") for p in items])


@router.get("/projects/{pid}")
async def project(
        pid: str,
        user: Identity = Depends(get_current_user),
        store=Depends(get_project_store),
):
    p = await store.get(user.user_id, pid)
    return ok(p.model_dump(mode="json"))


@router.post("/projects", status_code=201)
async def create_project(
        data: ProjectCreate,
        user: Identity = Depends(get_current_user),
        store=Depends(get_project_store),
):
    p = await store.create(user.user_id, data)
    logger.info(f"Project {p.id} created for {user.user_id}")
    return ok(p.model_dump(mode="json"))


@router.put("/projects/{pid}")
async def update_project(
        pid: str,
        changes: ProjectUpdate,
        user: Identity = Depends(get_current_user),
        store=Depends(get_project_store),
):
    p = await store.update(user.user_id, pid, changes)
    return ok(p.model_dump(mode="json"))


@router.delete("/projects/{pid}")
async def delete_project(
        pid: str,
        user: Identity = Depends(get_current_user),
        store=Depends(get_project_store),
):
    await store.delete(user.user_id, pid)
    return ok(message="Project deleted successfully")
