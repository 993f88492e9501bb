"""Upload domain module: cover photos for itineraries.

    from app.domains.upload.service import CoverUploadService
"""

__all__ = ["CoverUploadService"]
