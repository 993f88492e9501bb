"""HTML templating and PNG rasterisation for share images.

Templates are Jinja2 files next to this module. Rasterising launches a
headless Chromium through Playwright for each image.
"""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from app.core.config import settings
from app.domains.share.formats import (
    DEVICE_SCALE_FACTOR,
    FALLBACK_TITLE,
    FOOTER_TEXT,
    TEMPLATE_COLORS,
    TemplateFormat,
    TemplateStyle,
)
from app.domains.share.schemas import ShareTemplateData

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


class RenderError(Exception):
    """Raised when the browser fails to produce an image."""


def render_html(
    style: TemplateStyle,
    fmt: TemplateFormat,
    data: ShareTemplateData,
) -> str:
    """Render the HTML document for a style and format."""
    size = fmt.size
    template = _env.get_template(f"{style.value}.html")
    return template.render(
        width=size.width,
        height=size.height,
        colors=TEMPLATE_COLORS,
        footer=FOOTER_TEXT,
        title=data.title or FALLBACK_TITLE,
        destination=data.destination,
        cover_photo_url=data.cover_photo_url,
        day_count=data.day_count,
        activity_count=data.activity_count,
    )


class ImageRenderer:
    """Screenshots an HTML document at a format's exact size."""

    def __init__(
        self,
        executable_path: str | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        self.executable_path = executable_path or settings.CHROME_EXECUTABLE_PATH
        self.timeout_ms = timeout_ms or settings.SHARE_RENDER_TIMEOUT_MS

    async def render_png(self, html: str, fmt: TemplateFormat) -> bytes:
        """Load ``html`` in a fresh page and capture it as PNG.

        Waits for network idle so fonts and the cover photo are in.

        Raises:
            RenderError: If the browser could not be launched or the page
                could not be captured
        """
        size = fmt.size
        logger.info("Rendering %s image (%dx%d)", fmt.value, size.width, size.height)
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(
                    executable_path=self.executable_path,
                    args=["--no-sandbox", "--disable-setuid-sandbox"],
                    headless=True,
                )
                try:
                    page = await browser.new_page(
                        viewport={"width": size.width, "height": size.height},
                        device_scale_factor=DEVICE_SCALE_FACTOR,
                    )
                    await page.set_content(
                        html, wait_until="networkidle", timeout=self.timeout_ms
                    )
                    return await page.screenshot(type="png")
                finally:
                    await browser.close()
        except PlaywrightError as e:
            raise RenderError(str(e)) from e
