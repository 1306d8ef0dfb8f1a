"""Authorization Evaluator - tests for the pure project-deletion predicate.

Tests cover:
    - Truth table: creator, admin, member allowed; unrelated member refused
    - Overlapping grants (creator who is also a member, admin who is a member)
    - ensure_can_delete raises UnauthorizedError (403) only on refusal
"""

from uuid import uuid4

import pytest

from taskboard.core.authorization import ProjectAccess, can_delete, ensure_can_delete
from taskboard.core.domain_types import Principal, UserRole
from taskboard.core.errors import UnauthorizedError

CREATOR = uuid4()
MEMBER = uuid4()
OUTSIDER = uuid4()
ADMIN = uuid4()


def _project(member_ids=(CREATOR, MEMBER)) -> ProjectAccess:
    return ProjectAccess(
        project_id=uuid4(), created_by=CREATOR, member_ids=frozenset(member_ids),
    )


# ─── can_delete ──────────────────────────────────────────────────

def test_creator_can_delete():
    assert can_delete(Principal(CREATOR), _project()) is True


def test_creator_can_delete_after_leaving_members():
    assert can_delete(Principal(CREATOR), _project(member_ids=[MEMBER])) is True


def test_admin_can_delete_without_membership():
    assert can_delete(Principal(ADMIN, UserRole.ADMIN), _project()) is True


def test_member_can_delete():
    assert can_delete(Principal(MEMBER), _project()) is True


def test_outsider_cannot_delete():
    assert can_delete(Principal(OUTSIDER), _project()) is False


def test_outsider_with_member_role_and_empty_project_cannot_delete():
    assert can_delete(Principal(OUTSIDER, UserRole.MEMBER), _project(member_ids=[])) is False


# ─── ensure_can_delete ───────────────────────────────────────────

def test_ensure_can_delete_passes_for_member():
    ensure_can_delete(Principal(MEMBER), _project())


def test_ensure_can_delete_raises_forbidden_for_outsider():
    project = _project()
    with pytest.raises(UnauthorizedError) as exc_info:
        ensure_can_delete(Principal(OUTSIDER), project)
    err = exc_info.value
    assert err.http_status == 403
    assert err.code == "FORBIDDEN"
    assert err.context.project_id == str(project.project_id)
    assert err.context.user_id == str(OUTSIDER)
