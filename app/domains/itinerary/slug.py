"""Slug generation for shareable itinerary links."""

import re
import secrets
import string
from collections.abc import Awaitable, Callable

SLUG_MAX_LENGTH = 50
SUFFIX_LENGTH = 6
FALLBACK_SLUG = "trip"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def slugify(title: str) -> str:
    """Turn a title into a URL-safe base slug.

    "Tokyo Week!" -> "tokyo-week". Titles with no usable characters
    become "trip".
    """
    slug = _NON_ALNUM.sub("-", title.lower()).strip("-")
    slug = slug[:SLUG_MAX_LENGTH].rstrip("-")
    return slug or FALLBACK_SLUG


def random_suffix(length: int = SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


async def generate_unique_slug(
    title: str,
    is_taken: Callable[[str], Awaitable[bool]],
    max_attempts: int = 10,
) -> str:
    """Return a slug for ``title`` that ``is_taken`` reports as free.

    The bare slug is tried first; after that a random suffix is appended.

    Raises:
        RuntimeError: If no free slug was found within max_attempts
    """
    base = slugify(title)
    candidate = base
    for _ in range(max_attempts):
        if not await is_taken(candidate):
            return candidate
        candidate = f"{base}-{random_suffix()}"
    raise RuntimeError(f"Could not find a free slug for {base!r}")
