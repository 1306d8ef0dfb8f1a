"""User Routes - registration, own profile, statistics and activity feed.

Invariants:
    - /me routes act on the principal's own user id, never on a path parameter
    - stats and activity are read-only and recomputed on every request
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_principal
from taskboard.core.domain_types import Principal
from taskboard.infrastructure.database import get_db
from taskboard.schemas.user import (
    ActivityRecordResponse, UserCreate, UserResponse, UserStatsResponse, UserUpdate,
)
from taskboard.services.user_insights import UserInsightsService
from taskboard.services.user_profile import UserProfileService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(body: UserCreate, db: AsyncSession = Depends(get_db)):
    """Create a user profile. Credentials are handled by the credential service."""
    return await UserProfileService(db).register_user(body.model_dump())


@router.get("/me", response_model=UserResponse)
async def get_profile(
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    return await UserProfileService(db).get_profile(principal)


@router.put("/me")
async def update_profile(
    body: UserUpdate,
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    user = await UserProfileService(db).update_profile(
        principal, body.model_dump(exclude_unset=True),
    )
    return {
        "message": "Profile updated",
        "user": UserResponse.model_validate(user),
    }


@router.get("/me/stats", response_model=UserStatsResponse)
async def get_stats(
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """Project and task counts for the current user."""
    stats = await UserInsightsService(db).compute_user_stats(principal.id)
    return stats.to_dict()


@router.get("/me/activity", response_model=list[ActivityRecordResponse])
async def get_activity(
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_db),
):
    """Up to 10 most recent project and task changes, newest first."""
    return await UserInsightsService(db).compute_activity(principal.id)
