"""ORM Models - SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Project is the aggregate root for memberships and tasks

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from taskboard.models.user import User  # noqa: F401
from taskboard.models.project import Project  # noqa: F401
from taskboard.models.project_member import ProjectMember  # noqa: F401
from taskboard.models.task import Task  # noqa: F401
