"""User Profile Service - registration and profile maintenance.

Invariants:
    - Email uniqueness is checked before any write (ConflictError, 409)
    - Only provided, non-null fields are changed on update
    - Credentials are never stored here
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import Principal, UserId
from taskboard.core.errors import ConflictError, ErrorContext, ResourceNotFoundError
from taskboard.models.user import User
from taskboard.services.project_service import plain_values

logger = logging.getLogger(__name__)

UPDATABLE_PROFILE_FIELDS = ("full_name", "username", "email")


class UserProfileService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _email_taken(self, email: str, exclude: UserId | None = None) -> bool:
        query = select(User.id).where(User.email == email)
        if exclude is not None:
            query = query.where(User.id != exclude)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def register_user(self, data: dict) -> User:
        values = plain_values(data)
        if await self._email_taken(values["email"]):
            raise ConflictError("Email address is already in use", field="email")
        user = User(**values)
        self.db.add(user)
        await self.db.commit()
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def get_profile(self, principal: Principal) -> User:
        user = await self.db.get(User, principal.id)
        if not user:
            raise ResourceNotFoundError(
                "User", str(principal.id),
                context=ErrorContext(user_id=str(principal.id)),
            )
        return user

    async def update_profile(self, principal: Principal, changes: dict) -> User:
        user = await self.get_profile(principal)
        applied = {
            name: value for name, value in plain_values(changes).items()
            if name in UPDATABLE_PROFILE_FIELDS and value is not None
        }
        new_email = applied.get("email")
        if new_email and new_email != user.email:
            if await self._email_taken(new_email, exclude=principal.id):
                raise ConflictError(
                    "Email address is already in use", field="email",
                    context=ErrorContext(user_id=str(principal.id)),
                )
        for name, value in applied.items():
            setattr(user, name, value)
        await self.db.commit()
        logger.info(
            f"Profile updated: {sorted(applied)}",
            extra={"user_id": principal.id},
        )
        return user
