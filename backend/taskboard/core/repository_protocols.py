"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Row-shaped inputs to pure functions are typed structurally (ORM rows,
      SQLAlchemy Row tuples and test doubles all qualify)
    - Implementations provided by shell (services/) via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the core functions that consume their results are never async
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from taskboard.core.domain_types import ProjectId, UserId


class ProjectActivitySource(Protocol):
    """Fields of a project row needed to build an activity record."""
    id: UUID
    name: str
    status: str
    updated_at: datetime


class TaskActivitySource(Protocol):
    """Fields of a task row needed to build an activity record."""
    id: UUID
    title: str
    status: str
    updated_at: datetime


class MembershipRepository(Protocol):
    """Contract for the user/project relation - implemented by MembershipManager."""
    async def add_member(self, project_id: ProjectId, user_id: UserId) -> bool: ...
    async def remove_member(self, project_id: ProjectId, user_id: UserId) -> bool: ...
    async def remove_all(self, project_id: ProjectId) -> None: ...
    async def list_member_ids(self, project_id: ProjectId) -> list[UserId]: ...
    async def is_member(self, project_id: ProjectId, user_id: UserId) -> bool: ...
