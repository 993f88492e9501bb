"""Pydantic schemas for the User domain."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ProfileCreate(BaseModel):
    """Schema for creating a profile from a verified identity."""

    id: UUID
    email: str | None = None
    avatar_color: str


class ProfileUpdate(BaseModel):
    """Schema for the profile edit form (``{"displayName": ...}``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    display_name: str | None = None

    @field_validator("display_name", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str | None) -> str | None:
        if v is not None and len(v) > 100:
            raise ValueError("Display name must be less than 100 characters")
        return v


class ProfileResponse(BaseModel):
    """Schema for profile response data."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None = None
    display_name: str | None = None
    avatar_color: str
