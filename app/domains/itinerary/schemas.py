"""Pydantic schemas for the Itinerary domain.

Request bodies use camelCase keys (snake_case is accepted as well) and are
validated in full, nested children included, before anything is written.
Constraint failures raise ``ValueError`` with the message shown to clients.
"""

from datetime import date as date_type, datetime
from typing import Annotated, Any, Literal, Union
from uuid import UUID

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from app.domains.itinerary.constants import (
    BUDGET_LEVELS,
    DEFAULT_SECTION_ICON,
    EXPLORE_DEFAULT_LIMIT,
    EXPLORE_MAX_LIMIT,
    MAX_TAGS,
    TRIP_TAGS,
    get_section_preset,
)


class CamelModel(BaseModel):
    """Base for payloads exchanged in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


def _check_max(value: str | None, limit: int, message: str) -> str | None:
    if value is not None and len(value) > limit:
        raise ValueError(message)
    return value


def _check_title(value: str, limit: int, required: str, too_long: str) -> str:
    if not value.strip():
        raise ValueError(required)
    return _check_max(value, limit, too_long)


def parse_day_date(value: Any) -> date_type | None:
    """Parse a day's date; empty means no date.

    Accepts ISO dates and ISO datetimes (reduced to their date).
    """
    if value is None or isinstance(value, date_type) and not isinstance(value, datetime):
        return value
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date_type.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
    raise ValueError("Invalid date format")


def normalize_tags(tags: list[str]) -> list[str]:
    """Canonicalize, de-duplicate and cap a tag list.

    Raises:
        ValueError: On a tag outside the vocabulary or more than MAX_TAGS tags
    """
    vocabulary = {t.lower(): t for t in TRIP_TAGS}
    result: list[str] = []
    for raw in tags:
        canonical = vocabulary.get(raw.strip().lower())
        if canonical is None:
            raise ValueError(f"Invalid tag: {raw}")
        if canonical not in result:
            result.append(canonical)
    if len(result) > MAX_TAGS:
        raise ValueError(f"Maximum {MAX_TAGS} tags allowed")
    return result


# ============ Activity Schemas ============


class ActivityInput(CamelModel):
    """An activity inside a day."""

    title: str = Field("", validate_default=True)
    location: str | None = None
    start_time: str | None = Field(None, max_length=50)
    end_time: str | None = Field(None, max_length=50)
    notes: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_default(cls, v: Any) -> Any:
        return _none_to_empty(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _check_title(
            v,
            200,
            "Activity title is required",
            "Activity title must be less than 200 characters",
        )

    @field_validator("location", "start_time", "end_time", "notes", mode="before")
    @classmethod
    def _blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str | None) -> str | None:
        return _check_max(v, 200, "Location must be less than 200 characters")

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: str | None) -> str | None:
        return _check_max(v, 1000, "Notes must be less than 1000 characters")


class ActivityResponse(BaseModel):
    """Schema for Activity response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    day_id: UUID
    title: str
    location: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    notes: str | None = None
    sort_order: int = 0
    created_at: datetime
    updated_at: datetime


# ============ Day Schemas ============


class DayInput(CamelModel):
    """A day of a daily itinerary. ``day_number`` defaults to its position."""

    day_number: int | None = None
    date: date_type | None = None
    title: str | None = None
    activities: list[ActivityInput] = Field(default_factory=list)

    @field_validator("day_number")
    @classmethod
    def validate_day_number(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("Day number must be at least 1")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v: Any) -> date_type | None:
        return parse_day_date(v)

    @field_validator("title", mode="before")
    @classmethod
    def _blank_title(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return _check_max(v, 200, "Day title must be less than 200 characters")

    @field_validator("activities", mode="before")
    @classmethod
    def _none_activities(cls, v: Any) -> Any:
        return [] if v is None else v


class DayResponse(BaseModel):
    """Schema for Day response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    itinerary_id: UUID
    day_number: int
    date: date_type | None = None
    title: str | None = None
    activities: list[ActivityResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


# ============ Category Schemas ============


class CategoryItemInput(CamelModel):
    """A place inside a guide section. ``sort_order`` defaults to its position."""

    title: str = Field("", validate_default=True)
    location: str | None = None
    notes: str | None = None
    sort_order: int | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _title_default(cls, v: Any) -> Any:
        return _none_to_empty(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _check_title(
            v,
            200,
            "Item title is required",
            "Item title must be less than 200 characters",
        )

    @field_validator("location", "notes", mode="before")
    @classmethod
    def _blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str | None) -> str | None:
        return _check_max(v, 200, "Location must be less than 200 characters")

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: str | None) -> str | None:
        return _check_max(v, 1000, "Notes must be less than 1000 characters")


class CategoryInput(CamelModel):
    """A guide section. Items without a title are dropped."""

    name: str = Field("", validate_default=True)
    icon: str = Field("", validate_default=True)
    sort_order: int | None = None
    items: list[CategoryItemInput] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _name_default(cls, v: Any) -> Any:
        return _none_to_empty(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_title(
            v,
            100,
            "Section name is required",
            "Section name must be less than 100 characters",
        )

    @field_validator("icon", mode="before")
    @classmethod
    def _icon_default(cls, v: Any, info: ValidationInfo) -> Any:
        """Blank icons fall back to the preset for the section name."""
        icon = _blank_to_none(v)
        if icon:
            return icon
        preset = get_section_preset(info.data.get("name", ""))
        return preset.icon if preset else DEFAULT_SECTION_ICON

    @field_validator("items", mode="before")
    @classmethod
    def drop_untitled_items(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, list):
            return v
        return [
            item
            for item in v
            if not isinstance(item, dict)
            or (isinstance(item.get("title"), str) and item["title"].strip())
        ]


class CategoryItemResponse(BaseModel):
    """Schema for CategoryItem response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category_id: UUID
    title: str
    location: str | None = None
    notes: str | None = None
    sort_order: int
    created_at: datetime
    updated_at: datetime


class CategoryResponse(BaseModel):
    """Schema for Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    itinerary_id: UUID
    name: str
    icon: str
    sort_order: int
    items: list[CategoryItemResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


# ============ Itinerary Schemas ============


class ItineraryBase(CamelModel):
    """Fields shared by both itinerary kinds."""

    title: str = Field("", validate_default=True)
    description: str | None = None
    destination: str | None = None
    is_public: bool = True
    budget_level: int | None = None
    cover_photo_url: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _title_default(cls, v: Any) -> Any:
        return _none_to_empty(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _check_title(
            v, 200, "Title is required", "Title must be less than 200 characters"
        )

    @field_validator("description", "destination", "cover_photo_url", mode="before")
    @classmethod
    def _blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return _check_max(v, 2000, "Description must be less than 2000 characters")

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str | None) -> str | None:
        return _check_max(v, 100, "Destination must be less than 100 characters")

    @field_validator("is_public", mode="before")
    @classmethod
    def _public_default(cls, v: Any) -> Any:
        return True if v is None else v

    @field_validator("budget_level")
    @classmethod
    def validate_budget_level(cls, v: int | None) -> int | None:
        if v is not None and v not in BUDGET_LEVELS:
            raise ValueError("Budget level must be between 1 and 4")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _none_tags(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return normalize_tags(v)


class DailyItineraryInput(ItineraryBase):
    """A day-by-day plan. ``days=None`` leaves stored days untouched on update."""

    type: Literal["daily"] = "daily"
    days: list[DayInput] | None = None

    @field_validator("days")
    @classmethod
    def number_days(cls, v: list[DayInput] | None) -> list[DayInput] | None:
        for index, day in enumerate(v or ()):
            if day.day_number is None:
                day.day_number = index + 1
        return v


class GuideItineraryInput(ItineraryBase):
    """A favourites list. ``sections`` is also accepted as ``categories``."""

    type: Literal["guide"]
    sections: list[CategoryInput] | None = Field(
        None, validation_alias=AliasChoices("sections", "categories")
    )

    @field_validator("sections")
    @classmethod
    def order_sections(cls, v: list[CategoryInput] | None) -> list[CategoryInput] | None:
        for index, section in enumerate(v or ()):
            if section.sort_order is None:
                section.sort_order = index
            for item_index, item in enumerate(section.items):
                if item.sort_order is None:
                    item.sort_order = item_index
        return v


def _payload_type(value: Any) -> str:
    if isinstance(value, dict):
        return value.get("type") or "daily"
    return getattr(value, "type", "daily")


ItineraryPayload = Annotated[
    Union[
        Annotated[DailyItineraryInput, Tag("daily")],
        Annotated[GuideItineraryInput, Tag("guide")],
    ],
    Discriminator(
        _payload_type,
        custom_error_type="invalid_type",
        custom_error_message="Type must be 'daily' or 'guide'",
    ),
]

itinerary_payload_adapter: TypeAdapter[DailyItineraryInput | GuideItineraryInput] = (
    TypeAdapter(ItineraryPayload)
)


class ItineraryResponse(BaseModel):
    """Schema for a fully assembled itinerary."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    description: str | None = None
    destination: str | None = None
    slug: str
    is_public: bool
    budget_level: int | None = None
    type: str
    cover_photo_url: str | None = None
    stashed_from_id: UUID | None = None
    created_at: datetime
    updated_at: datetime
    days: list[DayResponse] = Field(default_factory=list)
    categories: list[CategoryResponse] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def flatten_tags(cls, v: Any) -> Any:
        return [getattr(t, "tag", t) for t in v or ()]


class ItineraryWriteResponse(ItineraryResponse):
    """Create/update result, with any secondary writes that failed."""

    warnings: list[str] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    success: bool = True


# ============ Explore Schemas ============


def _lenient_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class ExploreQuery(BaseModel):
    """Explore query parameters, clamped rather than rejected."""

    page: int = 1
    limit: int = EXPLORE_DEFAULT_LIMIT
    destination: str | None = None
    tags: list[str] = Field(default_factory=list)
    type: Literal["daily", "guide", "all"] = "all"
    sort: Literal["recent", "popular"] = "recent"

    @field_validator("page", mode="before")
    @classmethod
    def clamp_page(cls, v: Any) -> int:
        return max(1, _lenient_int(v, 1))

    @field_validator("limit", mode="before")
    @classmethod
    def clamp_limit(cls, v: Any) -> int:
        return min(EXPLORE_MAX_LIMIT, max(1, _lenient_int(v, EXPLORE_DEFAULT_LIMIT)))

    @field_validator("destination", mode="before")
    @classmethod
    def _blank_destination(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> list[str]:
        if not v:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [t.strip().lower() for t in v if t and t.strip()]

    @field_validator("type", mode="before")
    @classmethod
    def _type_default(cls, v: Any) -> Any:
        return v if v in ("daily", "guide") else "all"

    @field_validator("sort", mode="before")
    @classmethod
    def _sort_default(cls, v: Any) -> Any:
        return v if v == "popular" else "recent"


class Creator(CamelModel):
    id: UUID
    display_name: str
    avatar_color: str | None = None


class ExploreItem(CamelModel):
    """A public itinerary as shown on the explore page."""

    id: UUID
    title: str
    description: str | None = None
    destination: str | None = None
    slug: str
    budget_level: int | None = None
    type: str
    cover_photo_url: str | None = None
    created_at: datetime
    day_count: int
    tags: list[str] = Field(default_factory=list)
    creator: Creator


class Pagination(CamelModel):
    page: int
    limit: int
    total_count: int
    total_pages: int
    has_more: bool


class ExploreResponse(CamelModel):
    itineraries: list[ExploreItem]
    pagination: Pagination
