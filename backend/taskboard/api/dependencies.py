"""Request Dependencies - principal extraction for authenticated routes.

Invariants:
    - Token verification happens upstream (credential service / gateway); this
      layer only reads the verified identity it forwards
    - X-User-Id must be a UUID; X-User-Role defaults to "member"
    - Missing or malformed identity -> AuthenticationRequiredError (401)
"""

from uuid import UUID

from fastapi import Header

from taskboard.core.domain_types import Principal, UserId, UserRole
from taskboard.core.errors import AuthenticationRequiredError


async def get_principal(
    x_user_id: str | None = Header(None),
    x_user_role: str | None = Header(None),
) -> Principal:
    """FastAPI dependency: build the Principal for the current request."""
    if not x_user_id:
        raise AuthenticationRequiredError()
    try:
        user_id = UserId(UUID(x_user_id))
    except ValueError:
        raise AuthenticationRequiredError("Malformed X-User-Id header") from None
    try:
        role = UserRole(x_user_role or UserRole.MEMBER.value)
    except ValueError:
        raise AuthenticationRequiredError(
            f"Unknown role '{x_user_role}'",
        ) from None
    return Principal(id=user_id, role=role)
