"""Fixed vocabularies and presets for itineraries."""

from typing import NamedTuple

TRIP_TAGS: tuple[str, ...] = (
    "Adventure",
    "Romantic",
    "Budget",
    "Luxury",
    "Family",
    "Solo",
    "Food Tour",
    "Road Trip",
)
MAX_TAGS = 3

BUDGET_LEVELS: dict[int, tuple[str, str]] = {
    1: ("$", "Budget"),
    2: ("$$", "Moderate"),
    3: ("$$$", "Upscale"),
    4: ("$$$$", "Luxury"),
}

DEFAULT_SECTION_ICON = "📍"


class SectionPreset(NamedTuple):
    icon: str
    name: str
    placeholder: str


SECTION_PRESETS: tuple[SectionPreset, ...] = (
    SectionPreset("🍜", "Best Restaurants", "Add your favorite dining spots"),
    SectionPreset("☕", "Coffee & Cafés", "Cozy spots for your caffeine fix"),
    SectionPreset("🏛️", "Must-See Attractions", "The essential landmarks"),
    SectionPreset("🌿", "Hidden Gems", "Off-the-beaten-path discoveries"),
    SectionPreset("🛍️", "Shopping", "Where to find the best goods"),
    SectionPreset("🌅", "Viewpoints", "Best spots for photos"),
    SectionPreset("🍸", "Nightlife", "After-dark recommendations"),
    SectionPreset("🎨", "Art & Culture", "Museums, galleries, performances"),
    SectionPreset("🏖️", "Beaches", "Sandy shores and coastal escapes"),
    SectionPreset("🥾", "Hiking & Nature", "Trails and outdoor adventures"),
    SectionPreset("🏨", "Where to Stay", "Accommodation recommendations"),
    SectionPreset("✨", "Custom Section", "Create your own category"),
)


def get_section_preset(name: str) -> SectionPreset | None:
    """Look up a preset by its display name."""
    return next((p for p in SECTION_PRESETS if p.name == name), None)


# ============ Explore ============
EXPLORE_DEFAULT_LIMIT = 12
EXPLORE_MAX_LIMIT = 50
ANONYMOUS_DISPLAY_NAME = "Anonymous"

# Palette for profile avatars; a profile's colour is picked from its id
AVATAR_COLORS: tuple[str, ...] = (
    "#f86f4d",
    "#14b8a6",
    "#f59e0b",
    "#6366f1",
    "#ec4899",
    "#22c55e",
    "#0ea5e9",
    "#a855f7",
)
