"""Authorization Evaluator - decides who may delete a project.

Invariants:
    - can_delete is PURE: no IO, no async, no DB, no side effects
    - Allowed iff principal is the creator, an admin, or a member (logical OR)
    - ensure_can_delete raises before any mutation; state is never touched on refusal

Design Decisions:
    - ProjectAccess carries only what the predicate needs (creator + member ids),
      so callers load membership once and the rule stays testable without a DB
    - Only deletion is gated here; update/archive stay open to any authenticated principal
"""

from dataclasses import dataclass, field

from taskboard.core.domain_types import Principal, ProjectId, UserId
from taskboard.core.errors import ErrorContext, UnauthorizedError


@dataclass(frozen=True)
class ProjectAccess:
    """Access-relevant snapshot of a project."""
    project_id: ProjectId
    created_by: UserId
    member_ids: frozenset[UserId] = field(default_factory=frozenset)


def can_delete(principal: Principal, project: ProjectAccess) -> bool:
    """True if the principal may delete the project."""
    return (
        principal.id == project.created_by
        or principal.is_admin
        or principal.id in project.member_ids
    )


def ensure_can_delete(principal: Principal, project: ProjectAccess) -> None:
    """Raise UnauthorizedError when can_delete refuses."""
    if not can_delete(principal, project):
        raise UnauthorizedError(
            "delete", "Project", str(project.project_id),
            context=ErrorContext(
                user_id=str(principal.id), project_id=str(project.project_id),
            ),
        )
