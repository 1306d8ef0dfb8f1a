"""Project ORM - aggregate root owning memberships and tasks.

Invariants:
    - created_by references the user who created the project
    - is_archived hides the project from the active listing only
    - updated_at moves on every UPDATE (drives the activity feed)
    - status transitions are free: active <-> on_hold <-> completed

Design Decisions:
    - Deletion runs as explicit bulk DELETEs (tasks, memberships, project) in
      ProjectService, so it works with or without database-level ON DELETE
    - Relationships are lazy="raise": every query states what it loads, so
      aggregate queries never pull members or tasks by accident
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Boolean, Date, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from taskboard.db.base import Base


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default="medium",
    )
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active",
    )
    is_archived: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_by: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    memberships: Mapped[list["ProjectMember"]] = relationship(
        "ProjectMember", back_populates="project",
        passive_deletes=True, lazy="raise",
    )
    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="project",
        passive_deletes=True, lazy="raise",
        order_by="Task.created_at",
    )

    @property
    def members(self) -> list["User"]:
        """Member users; requires memberships to be eagerly loaded."""
        return [m.user for m in self.memberships]
