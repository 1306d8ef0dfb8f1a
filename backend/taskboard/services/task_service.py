"""Task Service - create and update tasks inside a project.

Invariants:
    - The owning project must exist (404 otherwise)
    - An assignee, when given, must reference an existing user (404 otherwise)
    - created_by is always the requesting principal
    - Partial updates apply only provided fields; null clears description or
      assigned_to and is ignored for title and status
    - Every update bumps updated_at
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import Principal, ProjectId, TaskId, UserId
from taskboard.core.errors import ErrorContext, ResourceNotFoundError
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.services.project_service import plain_values

logger = logging.getLogger(__name__)

UPDATABLE_TASK_FIELDS = ("title", "description", "status", "assigned_to")
CLEARABLE_TASK_FIELDS = ("description", "assigned_to")


class TaskService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _ensure_exists(self, model, resource_type: str, resource_id) -> None:
        if not await self.db.get(model, resource_id):
            raise ResourceNotFoundError(resource_type, str(resource_id))

    async def get_or_404(self, task_id: TaskId) -> Task:
        task = await self.db.get(Task, task_id)
        if not task:
            raise ResourceNotFoundError(
                "Task", str(task_id), context=ErrorContext(task_id=str(task_id)),
            )
        return task

    async def create_task(
        self, principal: Principal, project_id: ProjectId, data: dict,
    ) -> Task:
        await self._ensure_exists(Project, "Project", project_id)
        values = plain_values(data)
        if values.get("assigned_to"):
            await self._ensure_exists(User, "User", values["assigned_to"])
        task = Task(**values, project_id=project_id, created_by=principal.id)
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task, ["assignee"])
        logger.info(
            f"Task '{task.title}' created",
            extra={"task_id": task.id, "project_id": project_id, "user_id": principal.id},
        )
        return task

    async def update_task(self, task_id: TaskId, changes: dict) -> Task:
        task = await self.get_or_404(task_id)
        applied = {
            name: value for name, value in plain_values(changes).items()
            if name in UPDATABLE_TASK_FIELDS
            and (value is not None or name in CLEARABLE_TASK_FIELDS)
        }
        if applied.get("assigned_to"):
            await self._ensure_exists(User, "User", UserId(applied["assigned_to"]))
        for name, value in applied.items():
            setattr(task, name, value)
        await self.db.commit()
        await self.db.refresh(task, ["assignee"])
        logger.info(
            f"Task updated: {sorted(applied)}",
            extra={"task_id": task_id},
        )
        return task
