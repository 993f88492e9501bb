"""Repository for Itinerary domain - Data access layer using Generic Repository."""

from typing import Any, Sequence
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import exists, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.domains.itinerary.models import Day, Itinerary, TripTag
from app.domains.itinerary.schemas import DailyItineraryInput, GuideItineraryInput
from app.domains.shared.repository import GenericRepository
from app.domains.shared.specifications import Specification

# Relationship paths that make up a fully assembled itinerary
FULL_RELATIONS = ["days.activities", "categories.items", "tags"]


# ==================== Specifications ====================


class ItineraryByUserSpec(Specification[Itinerary]):
    """Specification for filtering itineraries by owner."""

    def __init__(self, user_id: UUID) -> None:
        self.user_id = user_id

    def to_expression(self) -> Any:
        """Return filter expression for user_id."""
        return Itinerary.user_id == self.user_id


class PublicItinerarySpec(Specification[Itinerary]):
    """Specification for itineraries visible to everyone."""

    def to_expression(self) -> Any:
        return Itinerary.is_public.is_(True)


class ItineraryByDestinationSpec(Specification[Itinerary]):
    """Specification for filtering itineraries by destination."""

    def __init__(self, destination: str) -> None:
        self.destination = destination

    def to_expression(self) -> Any:
        """Return filter expression for destination (case-insensitive)."""
        return Itinerary.destination.ilike(f"%{self.destination}%")


class ItineraryByTypeSpec(Specification[Itinerary]):
    """Specification for filtering itineraries by kind (daily/guide)."""

    def __init__(self, type_: str) -> None:
        self.type = type_

    def to_expression(self) -> Any:
        return Itinerary.type == self.type


class ItineraryWithAnyTagSpec(Specification[Itinerary]):
    """Itineraries carrying at least one of the given tags (case-insensitive)."""

    def __init__(self, tags: list[str]) -> None:
        self.tags = [t.lower() for t in tags]

    def to_expression(self) -> Any:
        return exists().where(
            TripTag.itinerary_id == Itinerary.id,
            func.lower(TripTag.tag).in_(self.tags),
        )


# ==================== Repositories ====================


class ItineraryRepository(
    GenericRepository[Itinerary, DailyItineraryInput, GuideItineraryInput]
):
    """Repository for Itinerary CRUD operations.

    Extends GenericRepository with domain-specific query methods.
    All operations are non-blocking using async/await.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with Itinerary model."""
        super().__init__(Itinerary, session)

    async def get_full(self, itinerary_id: UUID) -> Itinerary | None:
        """Get an itinerary with days, activities, categories, items and tags.

        Everything is fetched with selectin loads, one query per level.
        Rows already in the session are refreshed from the database.

        Args:
            itinerary_id: Itinerary UUID

        Returns:
            The assembled itinerary or None
        """
        stmt = (
            select(Itinerary)
            .where(Itinerary.id == itinerary_id)
            .execution_options(populate_existing=True)
        )
        stmt = self._apply_eager_loading(stmt, FULL_RELATIONS)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_public_by_slug(self, slug: str) -> Itinerary | None:
        """Get a public itinerary, fully assembled, by its slug."""
        return await self.find_one(
            Itinerary.slug == slug,
            PublicItinerarySpec().to_expression(),
            load_relations=FULL_RELATIONS,
        )

    async def find_by_user(self, user_id: UUID) -> Sequence[Itinerary]:
        """All of a user's itineraries, newest first, fully assembled."""
        return await self.find_many(
            ItineraryByUserSpec(user_id).to_expression(),
            limit=None,
            load_relations=FULL_RELATIONS,
        )

    async def slug_exists(self, slug: str) -> bool:
        return await self.exists(Itinerary.slug == slug)

    async def explore(
        self,
        spec: Specification[Itinerary],
        *,
        skip: int,
        limit: int,
    ) -> list[tuple[Itinerary, int]]:
        """Fetch a page of explore results.

        Owner profiles and tags are loaded with one selectin query each;
        the day count comes from a correlated subquery.

        Args:
            spec: Filter specification
            skip: Number of records to skip
            limit: Maximum records to return

        Returns:
            List of (itinerary, day_count) pairs, newest first
        """
        day_count = (
            select(func.count(Day.id))
            .where(Day.itinerary_id == Itinerary.id)
            .correlate(Itinerary)
            .scalar_subquery()
        )
        stmt = (
            select(Itinerary, day_count.label("day_count"))
            .where(spec.to_expression())
            .options(selectinload(Itinerary.owner), selectinload(Itinerary.tags))
            .order_by(Itinerary.created_at.desc(), Itinerary.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [(row[0], row[1] or 0) for row in result.all()]

    async def count_matching(self, spec: Specification[Itinerary]) -> int:
        """Count itineraries matching a specification."""
        return await self.count(spec.to_expression())


class TripTagRepository(GenericRepository[TripTag, BaseModel, BaseModel]):
    """Repository for an itinerary's tag rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(TripTag, session)

    async def replace_for(self, itinerary_id: UUID, tags: list[str]) -> None:
        """Swap an itinerary's tag set for ``tags``.

        Runs at statement level, so loaded ``Itinerary.tags`` collections are
        stale until the itinerary is fetched again.
        """
        await self.delete_many(TripTag.itinerary_id == itinerary_id)
        if tags:
            await self._session.execute(
                insert(TripTag),
                [
                    {"itinerary_id": itinerary_id, "tag": tag, "position": position}
                    for position, tag in enumerate(tags)
                ],
            )
