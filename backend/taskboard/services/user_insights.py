"""User Insights - statistics and activity feed for one user (read-only).

Invariants:
    - Never writes: no add, no flush, no commit
    - Stats: projects scoped by membership (archived included), tasks by
      assigned_to OR created_by; both histograms read in the same session
    - Activity: at most ACTIVITY_SOURCE_LIMIT rows per source, merged and
      truncated to ACTIVITY_FEED_LIMIT by core.activity_feed
    - Recomputed on every call (no cache)

Design Decisions:
    - Column-only selects for the feed: the relationship loaders on Project and
      Task never run during aggregation
    - Read consistency is best-effort (read committed): a status changed between
      the two queries shows up as either its old or its new value
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.activity_feed import ActivityRecord, compose_activity_feed
from taskboard.core.domain_types import (
    ACTIVITY_FEED_LIMIT, ACTIVITY_SOURCE_LIMIT, UserId,
)
from taskboard.core.user_stats import UserStats, compute_user_stats
from taskboard.models.project import Project
from taskboard.models.project_member import ProjectMember
from taskboard.models.task import Task

logger = logging.getLogger(__name__)


def _involves(user_id: UserId):
    return or_(Task.assigned_to == user_id, Task.created_by == user_id)


class UserInsightsService:
    """Statistics Aggregator and Activity Feed Composer over the store."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def project_status_counts(self, user_id: UserId) -> dict[str, int]:
        result = await self.db.execute(
            select(Project.status, func.count(Project.id))
            .join(ProjectMember, ProjectMember.project_id == Project.id)
            .where(ProjectMember.user_id == user_id)
            .group_by(Project.status),
        )
        return {status: count for status, count in result.all()}

    async def task_status_counts(self, user_id: UserId) -> dict[str, int]:
        result = await self.db.execute(
            select(Task.status, func.count(Task.id))
            .where(_involves(user_id))
            .group_by(Task.status),
        )
        return {status: count for status, count in result.all()}

    async def compute_user_stats(self, user_id: UserId) -> UserStats:
        stats = compute_user_stats(
            await self.project_status_counts(user_id),
            await self.task_status_counts(user_id),
        )
        logger.debug(f"Stats computed: {stats}", extra={"user_id": user_id})
        return stats

    async def recent_projects(self, user_id: UserId, limit: int = ACTIVITY_SOURCE_LIMIT):
        result = await self.db.execute(
            select(Project.id, Project.name, Project.status, Project.updated_at)
            .join(ProjectMember, ProjectMember.project_id == Project.id)
            .where(ProjectMember.user_id == user_id)
            .order_by(Project.updated_at.desc(), Project.id)
            .limit(limit),
        )
        return result.all()

    async def recent_tasks(self, user_id: UserId, limit: int = ACTIVITY_SOURCE_LIMIT):
        result = await self.db.execute(
            select(Task.id, Task.title, Task.status, Task.updated_at)
            .where(_involves(user_id))
            .order_by(Task.updated_at.desc(), Task.id)
            .limit(limit),
        )
        return result.all()

    async def compute_activity(
        self, user_id: UserId, limit: int = ACTIVITY_FEED_LIMIT,
    ) -> list[ActivityRecord]:
        feed = compose_activity_feed(
            await self.recent_projects(user_id),
            await self.recent_tasks(user_id),
            limit=limit,
        )
        logger.debug(
            f"Activity feed composed: {len(feed)} records",
            extra={"user_id": user_id},
        )
        return feed
