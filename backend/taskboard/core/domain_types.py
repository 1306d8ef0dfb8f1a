"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ProjectId, TaskId wrap UUIDs
    - All valid states encoded as Enums (no raw string matching in core)
    - Principal is immutable once built by the API boundary

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ProjectId = NewType("ProjectId", UUID)
TaskId = NewType("TaskId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    """Global role carried by the principal."""
    MEMBER = "member"
    ADMIN = "admin"


class ProjectStatus(str, Enum):
    """Project lifecycle states - maps to DB `status` column."""
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"


class ProjectPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    """Task board columns."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class ActivityType(str, Enum):
    """Source tag of an activity record."""
    PROJECT = "project"
    TASK = "task"


# ─── Feed Limits ─────────────────────────────────────────────────

ACTIVITY_SOURCE_LIMIT = 5   # rows pulled per source (projects, tasks)
ACTIVITY_FEED_LIMIT = 10    # records returned after the merge


# ─── Principal ───────────────────────────────────────────────────

@dataclass(frozen=True)
class Principal:
    """Authenticated actor performing a request."""
    id: UserId
    role: UserRole = UserRole.MEMBER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
