"""Activity Feed - normalizes project and task changes into one ranked feed.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Output length <= limit (default ACTIVITY_FEED_LIMIT)
    - Records sorted by date descending; equal dates ordered by (type, id) ascending,
      so identical input always yields identical output
    - Naive datetimes are read as UTC (SQLite returns naive values)

Design Decisions:
    - ActivityRecord is a tagged value with a common `date` key extracted before
      the merge, so ranking does not care which source a record came from
    - Two-pass stable sort (tie-break key first, then date with reverse=True)
      keeps the secondary order ascending while dates descend
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from taskboard.core.domain_types import (
    ACTIVITY_FEED_LIMIT, ActivityType, ProjectStatus, TaskStatus,
)
from taskboard.core.repository_protocols import (
    ProjectActivitySource, TaskActivitySource,
)

PROJECT_COMPLETED = "project completed"
PROJECT_UPDATED = "project updated"
TASK_COMPLETED = "task completed"
TASK_UPDATED = "task updated"


@dataclass(frozen=True)
class ActivityRecord:
    """One normalized entry of the activity feed."""
    id: UUID
    type: ActivityType
    title: str
    action: str
    date: datetime

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "type": self.type.value,
            "title": self.title,
            "action": self.action,
            "date": self.date.isoformat(),
        }


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def project_to_activity(project: ProjectActivitySource) -> ActivityRecord:
    completed = project.status == ProjectStatus.COMPLETED.value
    return ActivityRecord(
        id=project.id,
        type=ActivityType.PROJECT,
        title=project.name,
        action=PROJECT_COMPLETED if completed else PROJECT_UPDATED,
        date=_as_utc(project.updated_at),
    )


def task_to_activity(task: TaskActivitySource) -> ActivityRecord:
    done = task.status == TaskStatus.DONE.value
    return ActivityRecord(
        id=task.id,
        type=ActivityType.TASK,
        title=task.title,
        action=TASK_COMPLETED if done else TASK_UPDATED,
        date=_as_utc(task.updated_at),
    )


def _tie_break_key(record: ActivityRecord) -> tuple[str, str]:
    return (record.type.value, str(record.id))


def rank_activity(
    records: Iterable[ActivityRecord], limit: int = ACTIVITY_FEED_LIMIT,
) -> list[ActivityRecord]:
    """Sort by recency (newest first) with deterministic ties, then truncate."""
    ordered = sorted(records, key=_tie_break_key)
    ordered.sort(key=lambda r: r.date, reverse=True)
    return ordered[:max(limit, 0)]


def compose_activity_feed(
    projects: Iterable[ProjectActivitySource],
    tasks: Iterable[TaskActivitySource],
    limit: int = ACTIVITY_FEED_LIMIT,
) -> list[ActivityRecord]:
    """Map both sources to ActivityRecords, merge, rank and truncate."""
    records = [project_to_activity(p) for p in projects]
    records.extend(task_to_activity(t) for t in tasks)
    return rank_activity(records, limit)
