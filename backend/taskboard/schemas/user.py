"""User Schemas - profile, statistics and activity shapes for /users.

Invariants:
    - email validated with EmailStr on every write
    - Registration never takes a role from the body: new users are members
    - UserStatsResponse mirrors core.user_stats.UserStats field-for-field
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from taskboard.core.domain_types import ActivityType


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=150)
    email: EmailStr
    full_name: str = Field("", max_length=255)


class UserUpdate(BaseModel):
    username: str | None = Field(None, min_length=1, max_length=150)
    email: EmailStr | None = None
    full_name: str | None = Field(None, max_length=255)


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    full_name: str


class UserResponse(UserSummary):
    email: str
    role: str
    created_at: datetime


class UserStatsResponse(BaseModel):
    total_projects: int
    active_projects: int
    completed_projects: int
    total_tasks: int
    completed_tasks: int


class ActivityRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: ActivityType
    title: str
    action: str
    date: datetime
