"""Repository for User domain.

This module provides data access operations for the UserProfile model
following the Repository pattern with async SQLAlchemy.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.itinerary.constants import AVATAR_COLORS
from app.domains.shared.repository import GenericRepository
from app.domains.user.models import UserProfile
from app.domains.user.schemas import ProfileCreate, ProfileUpdate

logger = logging.getLogger(__name__)


def avatar_color_for(user_id: UUID) -> str:
    """Pick a stable palette colour for a user id."""
    return AVATAR_COLORS[user_id.int % len(AVATAR_COLORS)]


class UserProfileRepository(
    GenericRepository[UserProfile, ProfileCreate, ProfileUpdate]
):
    """Repository for UserProfile operations.

    Example:
        repo = UserProfileRepository(session)
        await repo.ensure_profile(identity.id, identity.email)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session."""
        super().__init__(UserProfile, session)

    async def ensure_profile(self, user_id: UUID, email: str | None) -> bool:
        """Create the profile row for a user unless it already exists.

        Runs in a savepoint so that losing a creation race to a concurrent
        request does not abort the caller's transaction.

        Args:
            user_id: Identity-provider subject id
            email: Email claim from the token

        Returns:
            True if a row was created
        """
        if await self.exists(UserProfile.id == user_id):
            return False

        try:
            async with self._session.begin_nested():
                await self.create(
                    ProfileCreate(
                        id=user_id,
                        email=email,
                        avatar_color=avatar_color_for(user_id),
                    )
                )
        except IntegrityError:
            logger.info("Profile %s created concurrently; continuing", user_id)
            return False
        return True
