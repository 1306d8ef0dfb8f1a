"""Project Routes - CRUD, archive, membership and authorized deletion.

Invariants:
    - Every route requires a principal (get_principal)
    - 404 for unknown projects comes from ProjectService before any mutation
    - DELETE /{project_id} is the only route gated by the authorization evaluator
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_principal
from taskboard.core.domain_types import Principal, ProjectId, UserId
from taskboard.infrastructure.database import get_db
from taskboard.schemas.project import (
    MemberChange, ProjectCreate, ProjectDetailResponse, ProjectListItem,
    ProjectResponse, ProjectUpdate,
)
from taskboard.services.project_service import ProjectService

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """Create a project; the creator becomes its first member."""
    project = await ProjectService(db).create_project(principal, body.model_dump())
    return {
        "message": "Project created",
        "project": ProjectResponse.model_validate(project),
    }


@router.get("", response_model=list[ProjectListItem])
async def list_projects(
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """List non-archived projects with their members."""
    return await ProjectService(db).list_active_projects()


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: UUID,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """Project detail with members and tasks."""
    return await ProjectService(db).get_project_detail(ProjectId(project_id))


@router.put("/{project_id}")
async def update_project(
    project_id: UUID,
    body: ProjectUpdate,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """Partial update: omitted or null fields keep their current value."""
    project = await ProjectService(db).update_project(
        ProjectId(project_id), body.model_dump(exclude_unset=True),
    )
    return {
        "message": "Project updated",
        "project": ProjectResponse.model_validate(project),
    }


@router.put("/{project_id}/archive")
async def archive_project(
    project_id: UUID,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    await ProjectService(db).archive_project(ProjectId(project_id))
    return {"message": "Project archived"}


@router.post("/{project_id}/members")
async def add_project_member(
    project_id: UUID,
    body: MemberChange,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """Add a member. Adding an existing member succeeds without change."""
    await ProjectService(db).add_member(ProjectId(project_id), UserId(body.user_id))
    return {"message": "Member added to project"}


@router.delete("/{project_id}/members")
async def remove_project_member(
    project_id: UUID,
    body: MemberChange,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """Remove a member. Removing a non-member succeeds without change."""
    await ProjectService(db).remove_member(ProjectId(project_id), UserId(body.user_id))
    return {"message": "Member removed from project"}


@router.delete("/{project_id}")
async def delete_project(
    project_id: UUID,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """Delete a project. Allowed for its creator, any member, or an admin."""
    await ProjectService(db).delete_project(principal, ProjectId(project_id))
    return {"message": "Project deleted"}
