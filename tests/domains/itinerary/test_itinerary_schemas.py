"""Tests for itinerary payload validation."""

from datetime import date

import pytest

from app.core.exceptions import ValidationError
from app.domains.itinerary.constants import DEFAULT_SECTION_ICON
from app.domains.itinerary.schemas import (
    DailyItineraryInput,
    ExploreQuery,
    GuideItineraryInput,
    normalize_tags,
    parse_day_date,
)
from app.domains.itinerary.services import parse_itinerary_payload


def _error(data) -> str:
    with pytest.raises(ValidationError) as exc_info:
        parse_itinerary_payload(data)
    return exc_info.value.detail


class TestPayloadUnion:
    """Tests for the daily/guide discriminated union."""

    def test_type_defaults_to_daily(self):
        payload = parse_itinerary_payload({"title": "Lisbon"})
        assert isinstance(payload, DailyItineraryInput)
        assert payload.type == "daily"
        assert payload.days is None
        assert payload.is_public is True

    def test_guide(self):
        payload = parse_itinerary_payload({"title": "Eat Rome", "type": "guide", "sections": []})
        assert isinstance(payload, GuideItineraryInput)
        assert payload.sections == []

    def test_unknown_type(self):
        assert _error({"title": "x", "type": "cruise"}) == "Type must be 'daily' or 'guide'"

    def test_snake_case_keys_accepted(self):
        payload = parse_itinerary_payload(
            {"title": "x", "cover_photo_url": "https://cdn/x.png", "budget_level": 2}
        )
        assert payload.cover_photo_url == "https://cdn/x.png"
        assert payload.budget_level == 2


class TestItineraryFields:
    """Tests for top-level field rules."""

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_title_required(self, title):
        assert _error({"title": title}) == "Title is required"

    def test_title_missing(self):
        assert _error({"destination": "Tokyo"}) == "Title is required"

    def test_title_too_long(self):
        assert _error({"title": "x" * 201}) == "Title must be less than 200 characters"

    def test_description_too_long(self):
        assert _error({"title": "x", "description": "d" * 2001}) == (
            "Description must be less than 2000 characters"
        )

    def test_destination_too_long(self):
        assert _error({"title": "x", "destination": "d" * 101}) == (
            "Destination must be less than 100 characters"
        )

    @pytest.mark.parametrize("level", [0, 5])
    def test_budget_level_range(self, level):
        assert _error({"title": "x", "budgetLevel": level}) == "Budget level must be between 1 and 4"

    def test_blank_optionals_become_none(self):
        payload = parse_itinerary_payload(
            {"title": "x", "description": " ", "destination": "", "coverPhotoUrl": ""}
        )
        assert payload.description is None
        assert payload.destination is None
        assert payload.cover_photo_url is None

    def test_null_is_public_means_public(self):
        assert parse_itinerary_payload({"title": "x", "isPublic": None}).is_public is True


class TestTags:
    """Tests for tag normalization."""

    def test_canonical_case_and_dedupe(self):
        assert normalize_tags(["adventure", "FOOD TOUR", "Adventure"]) == ["Adventure", "Food Tour"]

    def test_invalid_tag(self):
        assert _error({"title": "x", "tags": ["Skiing"]}) == "Invalid tag: Skiing"

    def test_maximum_three(self):
        tags = ["Adventure", "Romantic", "Budget", "Luxury"]
        assert _error({"title": "x", "tags": tags}) == "Maximum 3 tags allowed"

    def test_duplicates_do_not_count_twice(self):
        payload = parse_itinerary_payload(
            {"title": "x", "tags": ["Solo", "solo", "Budget", "Family"]}
        )
        assert payload.tags == ["Solo", "Budget", "Family"]


class TestDays:
    """Tests for days and activities."""

    def test_day_number_defaults_to_position(self):
        payload = parse_itinerary_payload(
            {"title": "x", "days": [{"title": "A"}, {"dayNumber": 5}, {}]}
        )
        assert [d.day_number for d in payload.days] == [1, 5, 3]

    def test_day_number_must_be_positive(self):
        assert _error({"title": "x", "days": [{"dayNumber": 0}]}) == "Day number must be at least 1"

    def test_activity_title_required(self):
        data = {"title": "x", "days": [{"activities": [{"location": "Here"}]}]}
        assert _error(data) == "Activity title is required"

    def test_activity_time_fields(self):
        payload = parse_itinerary_payload(
            {"title": "x", "days": [{"activities": [{"title": "A", "startTime": "9am", "endTime": ""}]}]}
        )
        activity = payload.days[0].activities[0]
        assert activity.start_time == "9am"
        assert activity.end_time is None

    def test_activity_notes_too_long(self):
        data = {"title": "x", "days": [{"activities": [{"title": "A", "notes": "n" * 1001}]}]}
        assert _error(data) == "Notes must be less than 1000 characters"

    def test_invalid_date(self):
        assert _error({"title": "x", "days": [{"date": "next tuesday"}]}) == "Invalid date format"


class TestParseDayDate:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2025-04-01", date(2025, 4, 1)),
            ("2025-04-01T10:30:00Z", date(2025, 4, 1)),
            ("2025-04-01T10:30:00+09:00", date(2025, 4, 1)),
            ("", None),
            (None, None),
            (date(2025, 1, 2), date(2025, 1, 2)),
        ],
    )
    def test_accepted(self, value, expected):
        assert parse_day_date(value) == expected

    def test_rejected(self):
        with pytest.raises(ValueError, match="Invalid date format"):
            parse_day_date("01/04/2025")


class TestSections:
    """Tests for guide sections and items."""

    def test_categories_alias(self):
        payload = parse_itinerary_payload(
            {"title": "x", "type": "guide", "categories": [{"name": "Coffee"}]}
        )
        assert payload.sections[0].name == "Coffee"

    def test_defaults(self):
        payload = parse_itinerary_payload(
            {
                "title": "x",
                "type": "guide",
                "sections": [
                    {"name": "Eat", "icon": "", "items": [{"title": "A"}, {"title": "B"}]},
                    {"name": "Drink", "icon": "🍸"},
                ],
            }
        )
        eat, drink = payload.sections
        assert eat.icon == DEFAULT_SECTION_ICON
        assert drink.icon == "🍸"
        assert [s.sort_order for s in payload.sections] == [0, 1]
        assert [i.sort_order for i in eat.items] == [0, 1]

    def test_preset_icon(self):
        payload = parse_itinerary_payload(
            {"title": "x", "type": "guide", "sections": [{"name": "Best Restaurants"}]}
        )
        assert payload.sections[0].icon == "🍜"

    def test_untitled_items_dropped(self):
        payload = parse_itinerary_payload(
            {
                "title": "x",
                "type": "guide",
                "sections": [{"name": "Eat", "items": [{"title": ""}, {"title": "  "}, {"title": "Keep"}]}],
            }
        )
        assert [i.title for i in payload.sections[0].items] == ["Keep"]

    def test_section_name_required(self):
        data = {"title": "x", "type": "guide", "sections": [{"name": ""}]}
        assert _error(data) == "Section name is required"


class TestExploreQuery:
    """Explore parameters are clamped rather than rejected."""

    def test_defaults(self):
        query = ExploreQuery()
        assert (query.page, query.limit, query.type, query.sort) == (1, 12, "all", "recent")
        assert query.tags == []

    @pytest.mark.parametrize("page, expected", [("0", 1), ("-3", 1), ("abc", 1), ("4", 4)])
    def test_page(self, page, expected):
        assert ExploreQuery(page=page).page == expected

    @pytest.mark.parametrize("limit, expected", [("0", 1), ("500", 50), ("abc", 12), ("20", 20)])
    def test_limit(self, limit, expected):
        assert ExploreQuery(limit=limit).limit == expected

    def test_tags_split(self):
        assert ExploreQuery(tags="Adventure, food tour,,").tags == ["adventure", "food tour"]

    def test_unknown_type_and_sort(self):
        query = ExploreQuery(type="boat", sort="oldest")
        assert query.type == "all"
        assert query.sort == "recent"

    def test_blank_destination(self):
        assert ExploreQuery(destination=" ").destination is None
