"""Project Service - project lifecycle: create, list, detail, update, archive, members, delete.

Invariants:
    - Creator is added as a member in the same transaction as the project row
    - Existence is checked (404) before any mutation, including membership changes
    - Only delete is gated by core.authorization; update/archive/member changes are
      open to any authenticated principal
    - Refused deletions leave project, tasks and memberships untouched

Design Decisions:
    - Membership goes through the MembershipRepository protocol, never through ORM
      collection appends
    - Deletion is three bulk DELETEs (tasks, memberships, project) in one commit
"""

import logging
from enum import Enum

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskboard.core.authorization import ProjectAccess, ensure_can_delete
from taskboard.core.domain_types import Principal, ProjectId, UserId
from taskboard.core.errors import (
    ErrorContext, ResourceNotFoundError, UnauthorizedError,
)
from taskboard.core.project_rules import check_project_dates, merge_project_changes
from taskboard.core.repository_protocols import MembershipRepository
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.services.membership_manager import MembershipManager

logger = logging.getLogger(__name__)


def plain_values(values: dict) -> dict:
    """Replace str Enums by their values before they reach a column."""
    return {
        k: (v.value if isinstance(v, Enum) else v) for k, v in values.items()
    }


class ProjectService:
    """Project operations scoped to one request's AsyncSession."""

    def __init__(
        self, db: AsyncSession, memberships: MembershipRepository | None = None,
    ):
        self.db = db
        self.memberships = memberships or MembershipManager(db)

    async def get_or_404(self, project_id: ProjectId) -> Project:
        project = await self.db.get(Project, project_id)
        if not project:
            raise ResourceNotFoundError(
                "Project", str(project_id),
                context=ErrorContext(project_id=str(project_id)),
            )
        return project

    async def _ensure_user_exists(self, user_id: UserId) -> None:
        if not await self.db.get(User, user_id):
            raise ResourceNotFoundError(
                "User", str(user_id), context=ErrorContext(user_id=str(user_id)),
            )

    async def create_project(self, principal: Principal, data: dict) -> Project:
        """Persist a project owned by the principal and enroll the creator."""
        values = plain_values(data)
        check_project_dates(values.get("start_date"), values.get("end_date"))
        project = Project(**values, created_by=principal.id)
        self.db.add(project)
        await self.db.flush()
        await self.memberships.add_member(ProjectId(project.id), principal.id)
        await self.db.commit()
        logger.info(
            f"Project '{project.name}' created",
            extra={"project_id": project.id, "user_id": principal.id},
        )
        return project

    async def list_active_projects(self) -> list[Project]:
        """Non-archived projects with their members, newest first."""
        result = await self.db.execute(
            select(Project)
            .where(Project.is_archived.is_(False))
            .options(selectinload(Project.memberships))
            .order_by(Project.created_at.desc(), Project.id),
        )
        return list(result.scalars().all())

    async def get_project_detail(self, project_id: ProjectId) -> Project:
        """Project with members and tasks (tasks carry their assignee)."""
        result = await self.db.execute(
            select(Project)
            .where(Project.id == project_id)
            .options(
                selectinload(Project.memberships),
                selectinload(Project.tasks),
            ),
        )
        project = result.scalar_one_or_none()
        if not project:
            raise ResourceNotFoundError(
                "Project", str(project_id),
                context=ErrorContext(project_id=str(project_id)),
            )
        return project

    async def update_project(self, project_id: ProjectId, changes: dict) -> Project:
        """Apply provided, non-null fields; everything else is preserved."""
        project = await self.get_or_404(project_id)
        current = {
            "start_date": project.start_date, "end_date": project.end_date,
        }
        applied = merge_project_changes(current, plain_values(changes))
        for name, value in applied.items():
            setattr(project, name, value)
        await self.db.commit()
        logger.info(
            f"Project updated: {sorted(applied)}",
            extra={"project_id": project_id},
        )
        return project

    async def archive_project(self, project_id: ProjectId) -> Project:
        project = await self.get_or_404(project_id)
        project.is_archived = True
        await self.db.commit()
        logger.info("Project archived", extra={"project_id": project_id})
        return project

    async def add_member(self, project_id: ProjectId, user_id: UserId) -> bool:
        await self.get_or_404(project_id)
        await self._ensure_user_exists(user_id)
        added = await self.memberships.add_member(project_id, user_id)
        await self.db.commit()
        return added

    async def remove_member(self, project_id: ProjectId, user_id: UserId) -> bool:
        await self.get_or_404(project_id)
        removed = await self.memberships.remove_member(project_id, user_id)
        await self.db.commit()
        return removed

    async def list_member_ids(self, project_id: ProjectId) -> list[UserId]:
        await self.get_or_404(project_id)
        return await self.memberships.list_member_ids(project_id)

    async def access_for(self, project: Project) -> ProjectAccess:
        member_ids = await self.memberships.list_member_ids(ProjectId(project.id))
        return ProjectAccess(
            project_id=ProjectId(project.id),
            created_by=UserId(project.created_by),
            member_ids=frozenset(member_ids),
        )

    async def delete_project(self, principal: Principal, project_id: ProjectId) -> None:
        """404 if absent, 403 unless creator/admin/member, then cascade delete."""
        project = await self.get_or_404(project_id)
        access = await self.access_for(project)
        try:
            ensure_can_delete(principal, access)
        except UnauthorizedError:
            logger.warning(
                "Project deletion refused",
                extra={"project_id": project_id, "user_id": principal.id},
            )
            raise
        await self.db.execute(delete(Task).where(Task.project_id == project_id))
        await self.memberships.remove_all(project_id)
        await self.db.execute(delete(Project).where(Project.id == project_id))
        await self.db.commit()
        logger.info(
            "Project deleted",
            extra={"project_id": project_id, "user_id": principal.id},
        )
