"""Project Schemas - request and response shapes for /projects.

Invariants:
    - ProjectCreate.name: 1-200 chars, stripped, non-empty
    - ProjectUpdate fields are all optional; None means "keep current value"
    - MemberChange carries the target user id for add/remove
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.core.domain_types import ProjectPriority, ProjectStatus
from taskboard.schemas.task import TaskResponse
from taskboard.schemas.user import UserSummary


def _strip_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=10_000)
    start_date: date | None = None
    end_date: date | None = None
    priority: ProjectPriority = ProjectPriority.MEDIUM
    color: str | None = Field(None, max_length=20)
    status: ProjectStatus = ProjectStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _strip_name(v)


class ProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=10_000)
    start_date: date | None = None
    end_date: date | None = None
    priority: ProjectPriority | None = None
    color: str | None = Field(None, max_length=20)
    status: ProjectStatus | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _strip_name(v)


class MemberChange(BaseModel):
    user_id: UUID


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    start_date: date | None
    end_date: date | None
    priority: str
    color: str | None
    status: str
    is_archived: bool
    created_by: UUID
    created_at: datetime
    updated_at: datetime


class ProjectListItem(ProjectResponse):
    members: list[UserSummary] = []


class ProjectDetailResponse(ProjectResponse):
    members: list[UserSummary] = []
    tasks: list[TaskResponse] = []
