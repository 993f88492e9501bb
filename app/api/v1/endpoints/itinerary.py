"""Itinerary API endpoints."""

import logging
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import CurrentUser, OptionalUser
from app.domains.itinerary.schemas import (
    DeleteResponse,
    ExploreQuery,
    ExploreResponse,
    ItineraryResponse,
    ItineraryWriteResponse,
)
from app.domains.itinerary.services import ItineraryService, parse_itinerary_payload
from app.infra.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()

# Bodies are validated by the service so that ownership is checked first
RawBody = Annotated[dict[str, Any], Body()]


def get_itinerary_service(
    session: AsyncSession = Depends(get_db),
) -> ItineraryService:
    """Dependency for getting ItineraryService."""
    return ItineraryService(session)


ServiceDep = Annotated[ItineraryService, Depends(get_itinerary_service)]


@router.get(
    "",
    response_model=list[ItineraryResponse],
    summary="List the requester's itineraries",
)
async def list_itineraries(
    user: CurrentUser,
    service: ServiceDep,
) -> list[ItineraryResponse]:
    """All of the requester's itineraries, newest first."""
    logger.info("Listing itineraries for user %s", user.id)
    return await service.list_own(user)


@router.post(
    "",
    response_model=ItineraryWriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an itinerary",
    description="""
    Create a `daily` itinerary with `days`, or a `guide` itinerary with
    `sections`. A missing `type` means `daily`.

    If tags could not be saved, the itinerary is still created and the
    response carries a `warnings` entry.
    """,
)
async def create_itinerary(
    body: RawBody,
    user: CurrentUser,
    service: ServiceDep,
) -> ItineraryWriteResponse:
    payload = parse_itinerary_payload(body)
    logger.info("Creating %s itinerary for user %s", payload.type, user.id)
    return await service.create_itinerary(user, payload)


@router.get(
    "/explore",
    response_model=ExploreResponse,
    summary="Browse other users' public itineraries",
)
async def explore_itineraries(
    requester: OptionalUser,
    service: ServiceDep,
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
    destination: Annotated[str | None, Query()] = None,
    tags: Annotated[str | None, Query()] = None,
    type: Annotated[str | None, Query()] = None,
    sort: Annotated[str | None, Query()] = None,
) -> ExploreResponse:
    """Paged public listing. Out-of-range values are clamped, not rejected."""
    query = ExploreQuery(
        page=page,
        limit=limit,
        destination=destination,
        tags=tags,
        type=type,
        sort=sort,
    )
    logger.info(
        "Explore page=%d limit=%d destination=%s tags=%s type=%s",
        query.page,
        query.limit,
        query.destination,
        query.tags,
        query.type,
    )
    return await service.explore(query, requester)


@router.get(
    "/public/{slug}",
    response_model=ItineraryResponse,
    summary="Get a public itinerary by slug",
)
async def get_public_itinerary(
    slug: str,
    service: ServiceDep,
) -> ItineraryResponse:
    return await service.get_public_by_slug(slug)


@router.get(
    "/{itinerary_id}",
    response_model=ItineraryResponse,
    summary="Get an itinerary",
)
async def get_itinerary(
    itinerary_id: UUID,
    requester: OptionalUser,
    service: ServiceDep,
) -> ItineraryResponse:
    """Get a fully assembled itinerary. Private ones are owner-only."""
    return await service.get_itinerary(itinerary_id, requester)


@router.put(
    "/{itinerary_id}",
    response_model=ItineraryWriteResponse,
    summary="Update an itinerary",
)
async def update_itinerary(
    itinerary_id: UUID,
    body: RawBody,
    user: CurrentUser,
    service: ServiceDep,
) -> ItineraryWriteResponse:
    """Replace fields and tags; replace days or sections when sent."""
    logger.info("Updating itinerary %s for user %s", itinerary_id, user.id)
    return await service.update_itinerary(itinerary_id, user, body)


@router.delete(
    "/{itinerary_id}",
    response_model=DeleteResponse,
    summary="Delete an itinerary",
)
async def delete_itinerary(
    itinerary_id: UUID,
    user: CurrentUser,
    service: ServiceDep,
) -> DeleteResponse:
    logger.info("Deleting itinerary %s for user %s", itinerary_id, user.id)
    await service.delete_itinerary(itinerary_id, user)
    return DeleteResponse()
