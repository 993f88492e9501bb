"""Domain modules - Business logic organized by bounded contexts.

Note: Domain modules are imported lazily to avoid circular imports.
Import them directly where needed:

    from app.domains.itinerary.models import Itinerary
    from app.domains.itinerary.services import ItineraryService
    from app.domains.share.service import ShareService
    from app.domains.upload.service import CoverUploadService
    from app.domains.user.services import ProfileService
"""

__all__ = [
    # Import directly from app.domains.<domain>.*
    "CoverUploadService",
    "Itinerary",
    "ItineraryService",
    "ProfileService",
    "ShareService",
]
