"""User domain services."""

from app.domains.user.services.profile_service import ProfileService

__all__ = ["ProfileService"]
