"""User domain module.

This module contains the public profile kept for each identity-provider
user: display name, avatar colour and lazy creation on first write.

Note: Use direct imports to avoid circular dependencies:

    from app.domains.user.models import UserProfile
    from app.domains.user.repository import UserProfileRepository
    from app.domains.user.schemas import ProfileUpdate, ProfileResponse
    from app.domains.user.services import ProfileService
"""

__all__ = [
    "ProfileCreate",
    "ProfileResponse",
    "ProfileService",
    "ProfileUpdate",
    "UserProfile",
    "UserProfileRepository",
]
