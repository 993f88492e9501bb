"""Styles, formats and branding for shareable trip images."""

import enum
from typing import NamedTuple


class TemplateStyle(str, enum.Enum):
    CLEAN = "clean"  # Cream background, serif title
    BOLD = "bold"  # Full-bleed cover photo with overlay
    MINIMAL = "minimal"  # White card with a border


class FormatSize(NamedTuple):
    width: int
    height: int


class TemplateFormat(str, enum.Enum):
    STORY = "story"
    SQUARE = "square"
    PORTRAIT = "portrait"

    @property
    def size(self) -> FormatSize:
        return FORMAT_SIZES[self]


FORMAT_SIZES: dict[TemplateFormat, FormatSize] = {
    TemplateFormat.STORY: FormatSize(1080, 1920),  # 9:16 stories
    TemplateFormat.SQUARE: FormatSize(1080, 1080),  # 1:1 feed
    TemplateFormat.PORTRAIT: FormatSize(1080, 1350),  # 4:5 feed
}

TEMPLATE_COLORS: dict[str, str] = {
    "primary": "#f86f4d",
    "secondary": "#14b8a6",
    "accent": "#f59e0b",
    "cream": "#fffaf5",
    "light_gray": "#f8fafc",
    "dark_overlay": "rgba(0, 0, 0, 0.4)",
}

FOOTER_TEXT = "stashport.com"
FALLBACK_TITLE = "Untitled Trip"
DEVICE_SCALE_FACTOR = 2
