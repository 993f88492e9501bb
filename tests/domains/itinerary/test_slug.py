"""Tests for slug generation."""

import re
from unittest.mock import AsyncMock

import pytest

from app.domains.itinerary.slug import generate_unique_slug, random_suffix, slugify


class TestSlugify:
    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Tokyo Week", "tokyo-week"),
            ("Tokyo Week!", "tokyo-week"),
            ("  Hello -- World  ", "hello-world"),
            ("Paris & Lyon 2025", "paris-lyon-2025"),
            ("!!!", "trip"),
            ("", "trip"),
        ],
    )
    def test_slugify(self, title, expected):
        assert slugify(title) == expected

    def test_truncated(self):
        slug = slugify("a very long title " * 10)
        assert len(slug) <= 50
        assert not slug.endswith("-")


class TestRandomSuffix:
    def test_shape(self):
        assert re.fullmatch(r"[a-z0-9]{6}", random_suffix())


class TestGenerateUniqueSlug:
    @pytest.mark.asyncio
    async def test_free_base(self):
        is_taken = AsyncMock(return_value=False)
        assert await generate_unique_slug("Tokyo Week", is_taken) == "tokyo-week"
        is_taken.assert_awaited_once_with("tokyo-week")

    @pytest.mark.asyncio
    async def test_taken_base_gets_suffix(self):
        is_taken = AsyncMock(side_effect=[True, False])
        slug = await generate_unique_slug("Tokyo Week", is_taken)
        assert re.fullmatch(r"tokyo-week-[a-z0-9]{6}", slug)

    @pytest.mark.asyncio
    async def test_gives_up(self):
        is_taken = AsyncMock(return_value=True)
        with pytest.raises(RuntimeError):
            await generate_unique_slug("Tokyo Week", is_taken, max_attempts=3)
        assert is_taken.await_count == 3
