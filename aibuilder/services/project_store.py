# FILE: aibuilder/services/project_store.py
"""Project persistence, scoped per owner.

Two stores share one interface:

- ``SqlProjectStore`` keeps real users' projects in the ``projects`` table.
- ``DemoProjectStore`` keeps the demo identity's projects in process memory.
  It is non-durable and single-instance only: contents vanish on restart and
  are not shared between workers. The application factory owns the instance.

A project owned by somebody else is reported exactly like a missing one.
"""

import logging
import secrets
import time
import uuid
from datetime import datetime
from typing import Dict, List

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from aibuilder.core.config import FREE_PLAN_PROJECT_LIMIT
from aibuilder.core.errors import LimitError, NotFoundError, StoreError
from aibuilder.models.project import Project
from aibuilder.models.user import User
from aibuilder.schemas.projects import ProjectCreate, ProjectResponse, ProjectUpdate

logger = logging.getLogger("aibuilder.projects")

LIMITED_PLANS = {"free"}


def _not_found() -> NotFoundError:
    return NotFoundError("Project not found")


class DemoProjectStore:
    def __init__(self, limit: int = FREE_PLAN_PROJECT_LIMIT):
        self.limit = limit
        self._projects: Dict[str, ProjectResponse] = {}

    def _owned(self, user_id: str, project_id: str) -> ProjectResponse:
        project = self._projects.get(project_id)
        if project is None or project.user_id != user_id:
            raise _not_found()
        return project

    async def list(self, user_id: str) -> List[ProjectResponse]:
        owned = [p for p in self._projects.values() if p.user_id == user_id]
        return sorted(owned, key=lambda p: p.updated_at, reverse=True)

    async def get(self, user_id: str, project_id: str) -> ProjectResponse:
        return self._owned(user_id, project_id)

    async def create(self, user_id: str, data: ProjectCreate) -> ProjectResponse:
        count = sum(1 for p in self._projects.values() if p.user_id == user_id)
        if count >= self.limit:
            raise LimitError()

        now = datetime.utcnow()
        project = ProjectResponse(
            id=f"proj_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}",
            user_id=user_id,
            name=data.name,
            description=data.description or "",
            framework=data.framework or "react",
            template=data.template,
            code="",
            published=False,
            created_at=now,
            updated_at=now,
        )
        self._projects[project.id] = project
        return project

    async def update(self, user_id: str, project_id: str, changes: ProjectUpdate) -> ProjectResponse:
        existing = self._owned(user_id, project_id)
        fields = changes.model_dump(exclude_unset=True)
        fields["updated_at"] = datetime.utcnow()
        updated = existing.model_copy(update=fields)
        self._projects[project_id] = updated
        return updated

    async def delete(self, user_id: str, project_id: str) -> None:
        self._owned(user_id, project_id)
        del self._projects[project_id]


class SqlProjectStore:
    def __init__(self, db: AsyncSession, limit: int = FREE_PLAN_PROJECT_LIMIT):
        self.db = db
        self.limit = limit

    async def _owned(self, user_id: str, project_id: str) -> Project:
        row = (
            await self.db.execute(
                select(Project)
                .where(
                    Project.id == project_id,
                    Project.user_id == user_id,
                )
            )
        ).scalar_one_or_none()
        if row is None:
            raise _not_found()
        return row

    async def _check_limit(self, user_id: str) -> None:
        count = (
            await self.db.execute(
                select(func.count(Project.id)).where(Project.user_id == user_id)
            )
        ).scalar_one()
        if int(count or 0) < self.limit:
            return

        plan = (
            await self.db.execute(select(User.plan).where(User.id == user_id))
        ).scalar_one_or_none()
        if plan is None:
            raise NotFoundError("User profile not found")
        if plan in LIMITED_PLANS:
            raise LimitError()

    async def list(self, user_id: str) -> List[ProjectResponse]:
        try:
            rows = (
                await self.db.execute(
                    select(Project)
                    .where(Project.user_id == user_id)
                    .order_by(Project.updated_at.desc())
                )
            ).scalars().all()
        except SQLAlchemyError as e:
            raise StoreError("Failed to fetch projects") from e
        return [ProjectResponse.model_validate(p) for p in rows]

    async def get(self, user_id: str, project_id: str) -> ProjectResponse:
        try:
            row = await self._owned(user_id, project_id)
        except SQLAlchemyError as e:
            raise StoreError("Failed to fetch project") from e
        return ProjectResponse.model_validate(row)

    async def create(self, user_id: str, data: ProjectCreate) -> ProjectResponse:
        try:
            await self._check_limit(user_id)
            now = datetime.utcnow()
            project = Project(
                id=str(uuid.uuid4()),
                user_id=user_id,
                name=data.name,
                description=data.description or "",
                framework=data.framework or "react",
                template=data.template,
                code="",
                published=False,
                created_at=now,
                updated_at=now,
            )
            self.db.add(project)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Create project failed for {user_id}: {e}")
            raise StoreError("Failed to create project") from e
        return ProjectResponse.model_validate(project)

    async def update(self, user_id: str, project_id: str, changes: ProjectUpdate) -> ProjectResponse:
        try:
            project = await self._owned(user_id, project_id)
            for key, value in changes.model_dump(exclude_unset=True).items():
                setattr(project, key, value)
            project.updated_at = datetime.utcnow()
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("Failed to update project") from e
        return ProjectResponse.model_validate(project)

    async def delete(self, user_id: str, project_id: str) -> None:
        try:
            project = await self._owned(user_id, project_id)
            await self.db.delete(project)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("Failed to delete project") from e
