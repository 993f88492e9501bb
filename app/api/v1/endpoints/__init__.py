"""API v1 endpoints."""

from app.api.v1.endpoints import health, itinerary, share, upload, users

__all__ = ["health", "itinerary", "share", "upload", "users"]
