"""User profile endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentUser
from app.domains.user.schemas import ProfileResponse, ProfileUpdate
from app.domains.user.services import ProfileService
from app.infra.database import get_db

router = APIRouter()


def get_profile_service(session: AsyncSession = Depends(get_db)) -> ProfileService:
    return ProfileService(session)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the requester's profile."""
    return await service.get_profile(user)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Set the requester's display name. An empty name clears it."""
    return await service.update_profile(user, data)
