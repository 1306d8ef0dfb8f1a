"""Task Routes - create tasks in a project and update them.

Invariants:
    - Every route requires a principal (get_principal)
    - Task writes bump updated_at, which feeds the activity feed
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_principal
from taskboard.core.domain_types import Principal, ProjectId, TaskId
from taskboard.infrastructure.database import get_db
from taskboard.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from taskboard.services.task_service import TaskService

router = APIRouter(prefix="/api/v1", tags=["tasks"])


@router.post(
    "/projects/{project_id}/tasks", response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    project_id: UUID,
    body: TaskCreate,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await TaskService(db).create_task(
        principal, ProjectId(project_id), body.model_dump(),
    )


@router.put("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: UUID,
    body: TaskUpdate,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """Partial update: omitted fields keep their value; null clears the assignee or description."""
    return await TaskService(db).update_task(
        TaskId(task_id), body.model_dump(exclude_unset=True),
    )
