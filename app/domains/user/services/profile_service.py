"""Profile service for reading and editing a user's public profile."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Identity
from app.core.exceptions import NotFoundError
from app.domains.user.repository import UserProfileRepository
from app.domains.user.schemas import ProfileResponse, ProfileUpdate

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for the requester's own profile."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with database session."""
        self._session = session
        self._repo = UserProfileRepository(session)

    async def get_profile(self, identity: Identity) -> ProfileResponse:
        """Get the requester's profile.

        Raises:
            NotFoundError: If no profile row exists yet
        """
        profile = await self._repo.get_by_id(identity.id)
        if profile is None:
            raise NotFoundError("Profile not found")
        return ProfileResponse.model_validate(profile)

    async def update_profile(
        self, identity: Identity, data: ProfileUpdate
    ) -> ProfileResponse:
        """Set the requester's display name.

        The profile row is created first if this is the user's first write.
        """
        await self._repo.ensure_profile(identity.id, identity.email)
        profile = await self._repo.get_by_id(identity.id)
        if profile is None:
            raise NotFoundError("Profile not found")

        await self._repo.update(profile, {"display_name": data.display_name})
        await self._session.commit()
        logger.info("Updated profile %s", identity.id)
        return ProfileResponse.model_validate(profile)
