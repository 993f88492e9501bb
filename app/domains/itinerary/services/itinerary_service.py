"""Services for the Itinerary domain - Business logic layer."""

import logging
from math import ceil
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import Identity
from app.core.exceptions import (
    Forbidden,
    InternalError,
    NotFoundError,
    ValidationError,
    first_error_message,
)
from app.domains.itinerary.constants import ANONYMOUS_DISPLAY_NAME
from app.domains.itinerary.models import (
    Activity,
    Category,
    CategoryItem,
    Day,
    Itinerary,
)
from app.domains.itinerary.repository import (
    ItineraryByDestinationSpec,
    ItineraryByTypeSpec,
    ItineraryByUserSpec,
    ItineraryRepository,
    ItineraryWithAnyTagSpec,
    PublicItinerarySpec,
    TripTagRepository,
)
from app.domains.itinerary.schemas import (
    CategoryInput,
    Creator,
    DailyItineraryInput,
    DayInput,
    ExploreItem,
    ExploreQuery,
    ExploreResponse,
    GuideItineraryInput,
    ItineraryResponse,
    ItineraryWriteResponse,
    Pagination,
    itinerary_payload_adapter,
)
from app.domains.itinerary.slug import generate_unique_slug
from app.domains.shared.specifications import all_of
from app.domains.user.repository import UserProfileRepository
from app.infra.database import utcnow

logger = logging.getLogger(__name__)

ItineraryPayloadModel = DailyItineraryInput | GuideItineraryInput

TAGS_WARNING = "Tags could not be saved"


def parse_itinerary_payload(data: Any) -> ItineraryPayloadModel:
    """Validate a raw request body as a daily or guide itinerary.

    Raises:
        ValidationError: With the first failing message
    """
    try:
        return itinerary_payload_adapter.validate_python(data)
    except PydanticValidationError as e:
        raise ValidationError(first_error_message(e.errors())) from e


def build_days(days: list[DayInput]) -> list[Day]:
    """Build Day rows with their activities attached."""
    return [
        Day(
            day_number=day.day_number,
            date=day.date,
            title=day.title,
            sort_order=position,
            activities=[
                Activity(
                    title=activity.title,
                    location=activity.location,
                    start_time=activity.start_time,
                    end_time=activity.end_time,
                    notes=activity.notes,
                    sort_order=index,
                )
                for index, activity in enumerate(day.activities)
            ],
        )
        for position, day in enumerate(days)
    ]


def build_categories(sections: list[CategoryInput]) -> list[Category]:
    """Build Category rows with their items attached."""
    return [
        Category(
            name=section.name,
            icon=section.icon,
            sort_order=section.sort_order,
            items=[
                CategoryItem(
                    title=item.title,
                    location=item.location,
                    notes=item.notes,
                    sort_order=item.sort_order,
                )
                for item in section.items
            ],
        )
        for section in sections
    ]


def _row_fields(payload: ItineraryPayloadModel) -> dict[str, Any]:
    return {
        "title": payload.title,
        "description": payload.description,
        "destination": payload.destination,
        "is_public": payload.is_public,
        "budget_level": payload.budget_level,
        "type": payload.type,
        "cover_photo_url": payload.cover_photo_url,
    }


class ItineraryService:
    """Service for Itinerary business logic.

    Every write runs in the request's session and commits once. Tag writes
    run in a savepoint: if they fail, the itinerary and its children are
    still saved and the response carries a warning.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async database session
        """
        self.session = session
        self.repository = ItineraryRepository(session)
        self.tag_repository = TripTagRepository(session)
        self.profile_repository = UserProfileRepository(session)

    # ==================== Read Operations ====================

    async def get_itinerary(
        self,
        itinerary_id: UUID,
        requester: Identity | None,
    ) -> ItineraryResponse:
        """Get a fully assembled itinerary.

        Private itineraries are only returned to their owner.

        Raises:
            NotFoundError: If it does not exist
            Forbidden: If it is private and the requester is not the owner
        """
        itinerary = await self.repository.get_full(itinerary_id)
        if itinerary is None:
            raise NotFoundError("Itinerary not found")
        if not itinerary.is_public and (
            requester is None or requester.id != itinerary.user_id
        ):
            raise Forbidden("Forbidden")
        return ItineraryResponse.model_validate(itinerary)

    async def get_public_by_slug(self, slug: str) -> ItineraryResponse:
        """Get a public itinerary by its share slug."""
        itinerary = await self.repository.get_public_by_slug(slug)
        if itinerary is None:
            raise NotFoundError("Trip not found")
        return ItineraryResponse.model_validate(itinerary)

    async def list_own(self, identity: Identity) -> list[ItineraryResponse]:
        """All of the requester's itineraries, newest first."""
        itineraries = await self.repository.find_by_user(identity.id)
        return [ItineraryResponse.model_validate(i) for i in itineraries]

    # ==================== Write Operations ====================

    async def create_itinerary(
        self,
        identity: Identity,
        payload: ItineraryPayloadModel,
    ) -> ItineraryWriteResponse:
        """Create an itinerary with its days or sections and tags.

        Args:
            identity: The authenticated owner
            payload: Validated itinerary payload

        Returns:
            The stored itinerary plus any warnings

        Raises:
            InternalError: If the itinerary or its children could not be stored
        """
        warnings: list[str] = []
        try:
            await self.profile_repository.ensure_profile(identity.id, identity.email)
            slug = await generate_unique_slug(payload.title, self.repository.slug_exists)

            itinerary = Itinerary(user_id=identity.id, slug=slug, **_row_fields(payload))
            if isinstance(payload, GuideItineraryInput):
                itinerary.categories = build_categories(payload.sections or [])
            else:
                itinerary.days = build_days(payload.days or [])
            await self.repository.add(itinerary)
        except (SQLAlchemyError, RuntimeError) as e:
            await self.session.rollback()
            logger.exception("Failed to create itinerary for user %s", identity.id)
            raise InternalError("Failed to create itinerary") from e

        if payload.tags:
            await self._write_tags(itinerary.id, payload.tags, warnings)

        await self._commit("Failed to create itinerary")
        logger.info("Created itinerary %s (%s) for user %s", itinerary.id, slug, identity.id)
        return await self._written_response(itinerary, warnings)

    async def update_itinerary(
        self,
        itinerary_id: UUID,
        identity: Identity,
        data: Any,
    ) -> ItineraryWriteResponse:
        """Replace an itinerary's fields, tags and submitted children.

        Only the collection matching the payload's type is replaced, and only
        when it was sent; an absent collection is left as stored.

        Raises:
            NotFoundError: If it does not exist
            Forbidden: If the requester is not the owner
            ValidationError: If the payload is invalid
            InternalError: If the update could not be stored
        """
        itinerary = await self._get_owned(itinerary_id, identity)
        payload = parse_itinerary_payload(data)

        warnings: list[str] = []
        try:
            await self.repository.update(
                itinerary, {**_row_fields(payload), "updated_at": utcnow()}
            )
            if isinstance(payload, GuideItineraryInput):
                if payload.sections is not None:
                    itinerary.categories = build_categories(payload.sections)
            elif payload.days is not None:
                itinerary.days = build_days(payload.days)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("Failed to update itinerary %s", itinerary_id)
            raise InternalError("Failed to update itinerary") from e

        await self._write_tags(itinerary.id, payload.tags, warnings)
        await self._commit("Failed to update itinerary")
        logger.info("Updated itinerary %s", itinerary_id)
        return await self._written_response(itinerary, warnings)

    async def delete_itinerary(self, itinerary_id: UUID, identity: Identity) -> None:
        """Delete an itinerary with its children and tags.

        Raises:
            NotFoundError: If it does not exist
            Forbidden: If the requester is not the owner
            InternalError: If the delete failed
        """
        itinerary = await self._get_owned(itinerary_id, identity)
        try:
            await self.repository.delete(itinerary)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("Failed to delete itinerary %s", itinerary_id)
            raise InternalError("Failed to delete itinerary") from e
        await self._commit("Failed to delete itinerary")
        logger.info("Deleted itinerary %s", itinerary_id)

    # ==================== Explore ====================

    async def explore(
        self,
        query: ExploreQuery,
        requester: Identity | None,
    ) -> ExploreResponse:
        """Page through other users' public itineraries.

        Filters are applied in the query, before pagination, so every page
        except the last is full. "popular" currently orders like "recent".
        """
        spec = all_of(
            PublicItinerarySpec(),
            ~ItineraryByUserSpec(requester.id) if requester else None,
            ItineraryByDestinationSpec(query.destination) if query.destination else None,
            ItineraryWithAnyTagSpec(query.tags) if query.tags else None,
            ItineraryByTypeSpec(query.type) if query.type != "all" else None,
        )

        total = await self.repository.count_matching(spec)
        rows = await self.repository.explore(
            spec,
            skip=(query.page - 1) * query.limit,
            limit=query.limit,
        )

        items = [
            ExploreItem(
                id=itinerary.id,
                title=itinerary.title,
                description=itinerary.description,
                destination=itinerary.destination,
                slug=itinerary.slug,
                budget_level=itinerary.budget_level,
                type=itinerary.type,
                cover_photo_url=itinerary.cover_photo_url,
                created_at=itinerary.created_at,
                day_count=day_count,
                tags=itinerary.tag_names,
                creator=Creator(
                    id=itinerary.user_id,
                    display_name=itinerary.owner.display_name or ANONYMOUS_DISPLAY_NAME,
                    avatar_color=itinerary.owner.avatar_color,
                ),
            )
            for itinerary, day_count in rows
        ]
        total_pages = ceil(total / query.limit) if total else 0
        return ExploreResponse(
            itineraries=items,
            pagination=Pagination(
                page=query.page,
                limit=query.limit,
                total_count=total,
                total_pages=total_pages,
                has_more=query.page < total_pages,
            ),
        )

    # ==================== Helpers ====================

    async def _get_owned(self, itinerary_id: UUID, identity: Identity) -> Itinerary:
        itinerary = await self.repository.get_full(itinerary_id)
        if itinerary is None:
            raise NotFoundError("Itinerary not found")
        if itinerary.user_id != identity.id:
            raise Forbidden("Forbidden - you do not own this itinerary")
        return itinerary

    async def _write_tags(
        self, itinerary_id: UUID, tags: list[str], warnings: list[str]
    ) -> None:
        try:
            async with self.session.begin_nested():
                await self.tag_repository.replace_for(itinerary_id, tags)
        except SQLAlchemyError:
            logger.warning(
                "Failed to save tags for itinerary %s", itinerary_id, exc_info=True
            )
            warnings.append(TAGS_WARNING)

    async def _commit(self, failure_message: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(failure_message)
            raise InternalError(failure_message) from e

    async def _written_response(
        self, itinerary: Itinerary, warnings: list[str]
    ) -> ItineraryWriteResponse:
        """Re-read the stored itinerary; fall back to the bare row."""
        try:
            stored = await self.repository.get_full(itinerary.id)
        except SQLAlchemyError:
            logger.warning("Re-fetch of itinerary %s failed", itinerary.id, exc_info=True)
            stored = None

        if stored is None:
            row = itinerary.to_dict()
            return ItineraryWriteResponse(**row, warnings=warnings)

        response = ItineraryWriteResponse.model_validate(stored)
        response.warnings = warnings
        return response
