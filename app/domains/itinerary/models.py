"""SQLAlchemy models for the Itinerary domain."""

import enum
from datetime import date as date_type
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domains.itinerary.constants import DEFAULT_SECTION_ICON
from app.infra.database import Base

if TYPE_CHECKING:
    from app.domains.user.models import UserProfile


class ItineraryType(str, enum.Enum):
    """Enum for itinerary kinds."""

    DAILY = "daily"  # Day-by-day plan
    GUIDE = "guide"  # Undated favourites list


class Itinerary(Base):
    """Itinerary model representing a trip plan or guide.

    Attributes:
        id: Unique identifier (UUID) - inherited from Base
        user_id: Owner's profile id
        title: Trip title
        description: Free text description
        destination: Free text destination
        slug: Unique URL-safe identifier for public links
        is_public: Whether other users can read and discover it
        budget_level: 1 ($) to 4 ($$$$), or None
        type: daily or guide
        cover_photo_url: Public URL of the cover image
        stashed_from_id: Itinerary this one was copied from, if any
        created_at: Creation timestamp - inherited from Base
        updated_at: Last update timestamp - inherited from Base
    """

    __tablename__ = "itineraries"

    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    destination: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )
    slug: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
    )
    is_public: Mapped[bool] = mapped_column(
        default=True,
        nullable=False,
    )
    budget_level: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )
    type: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=ItineraryType.DAILY.value,
    )
    cover_photo_url: Mapped[str | None] = mapped_column(
        String(1000),
        nullable=True,
    )
    stashed_from_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("itineraries.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    owner: Mapped["UserProfile"] = relationship(
        "UserProfile",
        lazy="raise",
    )
    days: Mapped[list["Day"]] = relationship(
        "Day",
        back_populates="itinerary",
        cascade="all, delete-orphan",
        order_by="Day.sort_order",
        lazy="raise",
    )
    categories: Mapped[list["Category"]] = relationship(
        "Category",
        back_populates="itinerary",
        cascade="all, delete-orphan",
        order_by="Category.sort_order",
        lazy="raise",
    )
    tags: Mapped[list["TripTag"]] = relationship(
        "TripTag",
        back_populates="itinerary",
        cascade="all, delete-orphan",
        order_by="TripTag.position",
        lazy="raise",
    )

    # Table constraints
    __table_args__ = (
        CheckConstraint(
            "budget_level IS NULL OR (budget_level BETWEEN 1 AND 4)",
            name="budget_level_range",
        ),
        CheckConstraint("type IN ('daily', 'guide')", name="valid_type"),
        Index("ix_itineraries_public_created", "is_public", "created_at"),
    )

    @property
    def tag_names(self) -> list[str]:
        return [t.tag for t in self.tags]


class Day(Base):
    """A dated unit of a daily itinerary.

    Attributes:
        itinerary_id: Reference to parent itinerary
        day_number: 1-based day index within the trip
        date: Calendar date, optional
        title: Day heading
        sort_order: Submission position; days are read back in this order
    """

    __tablename__ = "days"

    itinerary_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("itineraries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    date: Mapped[date_type | None] = mapped_column(
        Date,
        nullable=True,
    )
    title: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
    )
    sort_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Relationships
    itinerary: Mapped["Itinerary"] = relationship(
        "Itinerary",
        back_populates="days",
    )
    activities: Mapped[list["Activity"]] = relationship(
        "Activity",
        back_populates="day",
        cascade="all, delete-orphan",
        order_by="Activity.sort_order",
        lazy="raise",
    )

    __table_args__ = (
        CheckConstraint("day_number >= 1", name="positive_day_number"),
    )


class Activity(Base):
    """A single entry within a day.

    start_time and end_time are stored as the client sent them.
    """

    __tablename__ = "activities"

    day_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("days.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    location: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
    )
    start_time: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )
    end_time: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    sort_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Relationships
    day: Mapped["Day"] = relationship(
        "Day",
        back_populates="activities",
    )


class Category(Base):
    """A named section of a guide itinerary ("Best Restaurants")."""

    __tablename__ = "categories"

    itinerary_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("itineraries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    icon: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=DEFAULT_SECTION_ICON,
    )
    sort_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Relationships
    itinerary: Mapped["Itinerary"] = relationship(
        "Itinerary",
        back_populates="categories",
    )
    items: Mapped[list["CategoryItem"]] = relationship(
        "CategoryItem",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="CategoryItem.sort_order",
        lazy="raise",
    )


class CategoryItem(Base):
    """A place or tip inside a guide section."""

    __tablename__ = "category_items"

    category_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    location: Mapped[str | None] = mapped_column(
        String(200),
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    sort_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Relationships
    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="items",
    )


class TripTag(Base):
    """A vocabulary tag attached to an itinerary."""

    __tablename__ = "trip_tags"

    itinerary_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("itineraries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tag: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Relationships
    itinerary: Mapped["Itinerary"] = relationship(
        "Itinerary",
        back_populates="tags",
    )

    __table_args__ = (
        UniqueConstraint("itinerary_id", "tag", name="uq_trip_tags_itinerary_tag"),
    )
