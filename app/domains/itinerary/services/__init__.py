"""Itinerary domain services."""

from app.domains.itinerary.services.itinerary_service import (
    ItineraryService,
    parse_itinerary_payload,
)

__all__ = [
    "ItineraryService",
    "parse_itinerary_payload",
]
