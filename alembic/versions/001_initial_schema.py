"""Initial database schema

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-19

Creates profiles, itineraries and their days, activities, guide sections,
section items and tags.
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text("now()")),
    ]


def upgrade() -> None:
    """Create initial database schema."""

    # Profiles, keyed by the identity provider's subject id
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("display_name", sa.String(100), nullable=True),
        sa.Column("avatar_color", sa.String(7), nullable=False, server_default="#f86f4d"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"])

    # Create itineraries table
    op.create_table(
        "itineraries",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text("gen_random_uuid()")),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("destination", sa.String(100), nullable=True),
        sa.Column("slug", sa.String(64), nullable=False),
        sa.Column("is_public", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("budget_level", sa.Integer, nullable=True),
        sa.Column("type", sa.String(10), nullable=False, server_default="daily"),
        sa.Column("cover_photo_url", sa.String(1000), nullable=True),
        sa.Column("stashed_from_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_itineraries"),
        sa.UniqueConstraint("slug", name="uq_itineraries_slug"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"],
            name="fk_itineraries_user_id_users", ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["stashed_from_id"], ["itineraries.id"],
            name="fk_itineraries_stashed_from_id_itineraries", ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "budget_level IS NULL OR (budget_level BETWEEN 1 AND 4)",
            name="ck_itineraries_budget_level_range",
        ),
        sa.CheckConstraint("type IN ('daily', 'guide')", name="ck_itineraries_valid_type"),
    )
    op.create_index("ix_itineraries_user_id", "itineraries", ["user_id"])
    op.create_index("ix_itineraries_destination", "itineraries", ["destination"])
    op.create_index("ix_itineraries_public_created", "itineraries", ["is_public", "created_at"])

    # Create days table
    op.create_table(
        "days",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text("gen_random_uuid()")),
        sa.Column("itinerary_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("day_number", sa.Integer, nullable=False),
        sa.Column("date", sa.Date, nullable=True),
        sa.Column("title", sa.String(200), nullable=True),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_days"),
        sa.ForeignKeyConstraint(
            ["itinerary_id"], ["itineraries.id"],
            name="fk_days_itinerary_id_itineraries", ondelete="CASCADE",
        ),
        sa.CheckConstraint("day_number >= 1", name="ck_days_positive_day_number"),
    )
    op.create_index("ix_days_itinerary_id", "days", ["itinerary_id"])

    # Create activities table
    op.create_table(
        "activities",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text("gen_random_uuid()")),
        sa.Column("day_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("start_time", sa.String(50), nullable=True),
        sa.Column("end_time", sa.String(50), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_activities"),
        sa.ForeignKeyConstraint(
            ["day_id"], ["days.id"],
            name="fk_activities_day_id_days", ondelete="CASCADE",
        ),
    )
    op.create_index("ix_activities_day_id", "activities", ["day_id"])

    # Guide sections and their items
    op.create_table(
        "categories",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text("gen_random_uuid()")),
        sa.Column("itinerary_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("icon", sa.String(16), nullable=False, server_default="📍"),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        sa.ForeignKeyConstraint(
            ["itinerary_id"], ["itineraries.id"],
            name="fk_categories_itinerary_id_itineraries", ondelete="CASCADE",
        ),
    )
    op.create_index("ix_categories_itinerary_id", "categories", ["itinerary_id"])

    op.create_table(
        "category_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text("gen_random_uuid()")),
        sa.Column("category_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_category_items"),
        sa.ForeignKeyConstraint(
            ["category_id"], ["categories.id"],
            name="fk_category_items_category_id_categories", ondelete="CASCADE",
        ),
    )
    op.create_index("ix_category_items_category_id", "category_items", ["category_id"])

    # Create trip_tags table
    op.create_table(
        "trip_tags",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text("gen_random_uuid()")),
        sa.Column("itinerary_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("tag", sa.String(50), nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_trip_tags"),
        sa.ForeignKeyConstraint(
            ["itinerary_id"], ["itineraries.id"],
            name="fk_trip_tags_itinerary_id_itineraries", ondelete="CASCADE",
        ),
        sa.UniqueConstraint("itinerary_id", "tag", name="uq_trip_tags_itinerary_tag"),
    )
    op.create_index("ix_trip_tags_itinerary_id", "trip_tags", ["itinerary_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("trip_tags")
    op.drop_table("category_items")
    op.drop_table("categories")
    op.drop_table("activities")
    op.drop_table("days")
    op.drop_table("itineraries")
    op.drop_table("users")
