"""Tests for the public explore listing."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from app.domains.itinerary.models import Day, Itinerary, TripTag
from app.domains.itinerary.schemas import ExploreQuery
from app.domains.itinerary.services import ItineraryService
from app.domains.itinerary.slug import slugify
from app.domains.user.models import UserProfile

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)

# title, owner, hours after BASE_TIME, extra fields, tags, day count
SEED = [
    ("Kyoto Temples", "alice", 1, {"destination": "Kyoto, Japan"}, ["Adventure"], 3),
    ("Osaka Eats", "alice", 2, {"destination": "Osaka, Japan"}, ["Food Tour"], 2),
    ("Alps Trek", "bob", 3, {"destination": "Swiss Alps"}, ["Adventure", "Solo"], 5),
    ("Paris Guide", "bob", 4, {"destination": "Paris", "type": "guide"}, ["Romantic"], 0),
    ("Secret Trip", "bob", 5, {"is_public": False}, ["Adventure"], 1),
    ("Bali Surf", "alice", 6, {"destination": "Bali"}, ["Adventure", "Budget"], 1),
]


@pytest_asyncio.fixture
async def seeded(db_session, alice, bob):
    owners = {"alice": alice, "bob": bob}
    db_session.add_all(
        [
            UserProfile(id=alice.id, email=alice.email, display_name="Alice", avatar_color="#14b8a6"),
            UserProfile(id=bob.id, email=bob.email, avatar_color="#f59e0b"),
        ]
    )
    for title, owner, hours, extra, tags, day_count in SEED:
        itinerary = Itinerary(
            user_id=owners[owner].id,
            title=title,
            slug=slugify(title),
            created_at=BASE_TIME + timedelta(hours=hours),
            **extra,
        )
        itinerary.days = [Day(day_number=n + 1, sort_order=n) for n in range(day_count)]
        itinerary.tags = [TripTag(tag=tag) for tag in tags]
        db_session.add(itinerary)
    await db_session.commit()
    db_session.expunge_all()


@pytest.fixture
def service(db_session):
    return ItineraryService(db_session)


def _titles(response) -> list[str]:
    return [item.title for item in response.itineraries]


@pytest.mark.usefixtures("seeded")
class TestExplore:
    """Tests for ItineraryService.explore."""

    @pytest.mark.asyncio
    async def test_anonymous_sees_all_public_newest_first(self, service):
        response = await service.explore(ExploreQuery(), None)

        assert _titles(response) == ["Bali Surf", "Paris Guide", "Alps Trek", "Osaka Eats", "Kyoto Temples"]
        assert response.pagination.total_count == 5
        assert response.pagination.total_pages == 1
        assert response.pagination.has_more is False

    @pytest.mark.asyncio
    async def test_excludes_requesters_own(self, service, alice, bob):
        assert _titles(await service.explore(ExploreQuery(), bob)) == [
            "Bali Surf",
            "Osaka Eats",
            "Kyoto Temples",
        ]
        assert _titles(await service.explore(ExploreQuery(), alice)) == ["Paris Guide", "Alps Trek"]

    @pytest.mark.asyncio
    async def test_destination_substring(self, service):
        response = await service.explore(ExploreQuery(destination="JAPAN"), None)
        assert _titles(response) == ["Osaka Eats", "Kyoto Temples"]

    @pytest.mark.asyncio
    async def test_type_filter(self, service):
        response = await service.explore(ExploreQuery(type="guide"), None)
        assert _titles(response) == ["Paris Guide"]

    @pytest.mark.asyncio
    async def test_tags_match_any(self, service):
        response = await service.explore(ExploreQuery(tags="FOOD TOUR,romantic"), None)
        assert _titles(response) == ["Paris Guide", "Osaka Eats"]

    @pytest.mark.asyncio
    async def test_tag_filter_before_pagination(self, service):
        first = await service.explore(ExploreQuery(tags="adventure", limit=2), None)
        assert _titles(first) == ["Bali Surf", "Alps Trek"]
        assert first.pagination.total_count == 3
        assert first.pagination.total_pages == 2
        assert first.pagination.has_more is True

        second = await service.explore(ExploreQuery(tags="adventure", limit=2, page=2), None)
        assert _titles(second) == ["Kyoto Temples"]
        assert second.pagination.has_more is False

    @pytest.mark.asyncio
    async def test_past_last_page(self, service):
        response = await service.explore(ExploreQuery(page=9), None)
        assert response.itineraries == []
        assert response.pagination.total_count == 5
        assert response.pagination.has_more is False

    @pytest.mark.asyncio
    async def test_no_matches(self, service):
        response = await service.explore(ExploreQuery(destination="Atlantis"), None)
        assert response.itineraries == []
        assert response.pagination.total_count == 0
        assert response.pagination.total_pages == 0
        assert response.pagination.has_more is False

    @pytest.mark.asyncio
    async def test_summary_fields(self, service, alice, bob):
        response = await service.explore(ExploreQuery(), None)
        by_title = {item.title: item for item in response.itineraries}

        bali = by_title["Bali Surf"]
        assert bali.slug == "bali-surf"
        assert bali.day_count == 1
        assert sorted(bali.tags) == ["Adventure", "Budget"]
        assert bali.creator.id == alice.id
        assert bali.creator.display_name == "Alice"
        assert bali.creator.avatar_color == "#14b8a6"

        assert by_title["Alps Trek"].day_count == 5
        assert by_title["Paris Guide"].day_count == 0
        assert by_title["Paris Guide"].creator.display_name == "Anonymous"
        assert by_title["Paris Guide"].creator.id == bob.id

    @pytest.mark.asyncio
    async def test_camel_case_output(self, service):
        body = (await service.explore(ExploreQuery(limit=1), None)).model_dump(by_alias=True)

        assert set(body["pagination"]) == {"page", "limit", "totalCount", "totalPages", "hasMore"}
        item = body["itineraries"][0]
        assert {"dayCount", "coverPhotoUrl", "budgetLevel", "createdAt", "creator"} <= set(item)
        assert set(item["creator"]) == {"id", "displayName", "avatarColor"}


async def _seed_public(db_session, owner, count: int) -> None:
    db_session.add(UserProfile(id=owner.id, email=owner.email))
    db_session.add_all(
        [
            Itinerary(
                user_id=owner.id,
                title=f"Trip {n}",
                slug=f"trip-{n}",
                created_at=BASE_TIME + timedelta(minutes=n),
            )
            for n in range(count)
        ]
    )
    await db_session.commit()
    db_session.expunge_all()


class TestExplorePageSize:
    """Default page size and the upper limit clamp."""

    @pytest.mark.asyncio
    async def test_default_page_of_twelve(self, db_session, service, bob):
        await _seed_public(db_session, bob, 13)

        first = await service.explore(ExploreQuery(), None)
        assert len(first.itineraries) == 12
        assert first.itineraries[0].title == "Trip 12"
        assert first.pagination.limit == 12
        assert first.pagination.total_pages == 2
        assert first.pagination.has_more is True

        second = await service.explore(ExploreQuery(page=2), None)
        assert _titles(second) == ["Trip 0"]
        assert second.pagination.has_more is False

    @pytest.mark.asyncio
    async def test_limit_clamped_to_fifty(self, db_session, service, bob):
        await _seed_public(db_session, bob, 55)

        response = await service.explore(ExploreQuery(limit=100), None)
        assert len(response.itineraries) == 50
        assert response.pagination.limit == 50
        assert response.pagination.total_count == 55
        assert response.pagination.has_more is True
