"""User Stats - pure computation of per-user project and task counts.

Invariants:
    - Inputs are status histograms ({status: count}) already scoped to the user:
      projects by membership, tasks by assignment OR authorship
    - Totals are the sum of their histogram, so partitions never exceed totals
    - Archived projects are counted (the histogram query does not filter them)
    - Never raises on unknown statuses; they count toward totals only

Design Decisions:
    - Histograms over five separate COUNT queries: two grouped queries give one
      coherent partition per entity
    - Unknown status strings are tolerated so a row written by a newer schema
      still yields a well-formed result
"""

from collections.abc import Mapping
from dataclasses import dataclass, asdict

from taskboard.core.domain_types import ProjectStatus, TaskStatus


@dataclass(frozen=True)
class UserStats:
    total_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def _count(histogram: Mapping[str, int], status: str) -> int:
    return int(histogram.get(status, 0) or 0)


def compute_user_stats(
    project_status_counts: Mapping[str, int],
    task_status_counts: Mapping[str, int],
) -> UserStats:
    """Derive the five user counts from two status histograms. Pure, no IO."""
    return UserStats(
        total_projects=sum(int(n or 0) for n in project_status_counts.values()),
        active_projects=_count(project_status_counts, ProjectStatus.ACTIVE.value),
        completed_projects=_count(project_status_counts, ProjectStatus.COMPLETED.value),
        total_tasks=sum(int(n or 0) for n in task_status_counts.values()),
        completed_tasks=_count(task_status_counts, TaskStatus.DONE.value),
    )
