"""Membership Manager - owns the user/project relation (project_members table).

Invariants:
    - add_member is idempotent: an existing pair is a no-op success, never an error
    - remove_member is idempotent: removing a non-member is a no-op success
    - Never commits: the caller owns the transaction boundary
    - No side effects beyond the relation (tasks keep their assignees)

Design Decisions:
    - INSERT ... ON CONFLICT DO NOTHING on the composite primary key, so concurrent
      duplicate adds converge without a read-then-write race
    - Dialect-specific insert chosen from the bound engine (PostgreSQL in production,
      SQLite in tests); both support the conflict clause
"""

import logging

from sqlalchemy import delete, exists, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import ProjectId, UserId
from taskboard.core.errors import DatabaseError
from taskboard.models.project_member import ProjectMember

logger = logging.getLogger(__name__)

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class MembershipManager:
    """Add, remove and query project members. Implements MembershipRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _INSERTS[dialect](ProjectMember.__table__)
        except KeyError:
            raise DatabaseError(
                f"membership insert unsupported on dialect '{dialect}'", "insert",
            ) from None

    async def add_member(self, project_id: ProjectId, user_id: UserId) -> bool:
        """Insert the pair if absent. Returns True if a row was created."""
        stmt = self._insert().values(
            project_id=project_id, user_id=user_id,
        ).on_conflict_do_nothing(
            index_elements=["project_id", "user_id"],
        )
        result = await self.db.execute(stmt)
        added = (result.rowcount or 0) > 0
        logger.info(
            f"Member {'added' if added else 'already present'}",
            extra={"project_id": project_id, "user_id": user_id},
        )
        return added

    async def remove_member(self, project_id: ProjectId, user_id: UserId) -> bool:
        """Delete the pair if present. Returns True if a row was removed."""
        result = await self.db.execute(
            delete(ProjectMember)
            .where(ProjectMember.project_id == project_id)
            .where(ProjectMember.user_id == user_id),
        )
        removed = (result.rowcount or 0) > 0
        logger.info(
            f"Member {'removed' if removed else 'was not a member'}",
            extra={"project_id": project_id, "user_id": user_id},
        )
        return removed

    async def remove_all(self, project_id: ProjectId) -> None:
        """Drop every membership of a project (used by project deletion)."""
        await self.db.execute(
            delete(ProjectMember).where(ProjectMember.project_id == project_id),
        )

    async def list_member_ids(self, project_id: ProjectId) -> list[UserId]:
        result = await self.db.execute(
            select(ProjectMember.user_id)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at, ProjectMember.user_id),
        )
        return [UserId(uid) for uid in result.scalars().all()]

    async def is_member(self, project_id: ProjectId, user_id: UserId) -> bool:
        result = await self.db.execute(
            select(
                exists()
                .where(ProjectMember.project_id == project_id)
                .where(ProjectMember.user_id == user_id),
            ),
        )
        return bool(result.scalar())
